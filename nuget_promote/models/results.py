"""Result models for promotion runs."""

from typing import List

from pydantic import Field

from .base import PromoteBaseModel
from .package import PackageIdentity


class MirroringResult(PromoteBaseModel):
    """
    Result of transferring a batch of packages.

    Attributes:
        total: Number of packages scheduled for transfer
        promoted: Identities pushed to the destination, in order
    """

    total: int = Field(default=0, ge=0)
    promoted: List[PackageIdentity] = Field(default_factory=list)

    @property
    def promoted_count(self) -> int:
        """Number of packages pushed."""
        return len(self.promoted)


class PromoteResult(PromoteBaseModel):
    """
    Summary of a promotion run.

    Attributes:
        requested: Identities the package requests resolved to
        resolved: Every identity in the resolution tree
        to_promote: Identities missing at the destination, sorted
        promoted: Identities actually pushed
        dry_run: Whether the transfer was skipped
    """

    requested: List[PackageIdentity] = Field(default_factory=list)
    resolved: List[PackageIdentity] = Field(default_factory=list)
    to_promote: List[PackageIdentity] = Field(default_factory=list)
    promoted: List[PackageIdentity] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def promoted_count(self) -> int:
        return len(self.promoted)


__all__ = ["MirroringResult", "PromoteResult"]
