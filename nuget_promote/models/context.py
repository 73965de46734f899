"""Context and configuration models for promotion runs."""

from typing import Optional

from pydantic import field_validator

from ..versioning import BestMatchStrategy
from .base import PromoteBaseModel

# Public NuGet gallery, used as the default source feed
NUGET_ORG_V3_URL = "https://api.nuget.org/v3/index.json"


class FeedSettings(PromoteBaseModel):
    """
    Connection settings for one feed.

    Attributes:
        url: V3 service index URL
        api_key: API key sent with pushes
        username: Optional basic auth user
        password: Optional basic auth password
    """

    url: str
    api_key: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("url", mode="after")
    @classmethod
    def is_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Feed URL must not be empty")
        return value.strip()

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


class PromoteOptions(PromoteBaseModel):
    """
    Options controlling a promotion run.

    Attributes:
        dry_run: Resolve and report, but do not transfer anything
        always_resolve_deps: Expand dependencies of packages already at the destination
        force_push: Ignore the destination and push everything; implies always_resolve_deps
        dependency_version: Which satisfying version a dependency range resolves to
        use_cache: Memoize version lookups for the duration of the run
    """

    dry_run: bool = False
    always_resolve_deps: bool = False
    force_push: bool = False
    dependency_version: BestMatchStrategy = BestMatchStrategy.HIGHEST
    use_cache: bool = True

    @property
    def resolve_present_dependencies(self) -> bool:
        """Whether dependencies of packages already at the destination get expanded."""
        return self.always_resolve_deps or self.force_push


__all__ = ["NUGET_ORG_V3_URL", "FeedSettings", "PromoteOptions"]
