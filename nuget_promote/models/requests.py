"""Version policies and package requests."""

from typing import Annotated, List, Literal, Union

from pydantic import Field, field_validator

from ..versioning import NuGetVersion, VersionRange
from .base import FrozenModel, PromoteBaseModel

# Keyword selecting the latest released version
LATEST_KEYWORD = "latest"


class ExactVersion(FrozenModel):
    """Select exactly one version."""

    kind: Literal["exact"] = "exact"
    version: NuGetVersion

    def describe(self) -> str:
        return str(self.version)


class VersionRangePolicy(FrozenModel):
    """Select every listed, released version within a range."""

    kind: Literal["range"] = "range"
    version_range: VersionRange

    def describe(self) -> str:
        return self.version_range.pretty_print()


class LatestVersion(FrozenModel):
    """Select the highest listed, released version."""

    kind: Literal["latest"] = "latest"

    def describe(self) -> str:
        return LATEST_KEYWORD


VersionPolicy = Annotated[Union[ExactVersion, VersionRangePolicy, LatestVersion], Field(discriminator="kind")]


def parse_version_policy(value: str) -> Union[ExactVersion, VersionRangePolicy, LatestVersion]:
    """
    Turn a user supplied version string into a policy.

    Args:
        value: ``latest``, an exact version or a version range

    Returns:
        LatestVersion, ExactVersion or VersionRangePolicy

    Raises:
        ValueError: If the string is neither a version nor a range
    """
    text = str(value).strip()
    if text.lower() == LATEST_KEYWORD:
        return LatestVersion()

    version = NuGetVersion.try_parse(text)
    if version is not None:
        return ExactVersion(version=version)

    version_range = VersionRange.try_parse(text)
    if version_range is not None:
        return VersionRangePolicy(version_range=version_range)

    raise ValueError(f"Expected a valid version or version range, but got '{text}'.")


class PackageRequest(PromoteBaseModel):
    """
    A package id with one or more version policies.

    The request selects the union of the versions each policy selects.
    """

    id: str
    policies: List[VersionPolicy] = Field(min_length=1)

    @field_validator("id", mode="after")
    @classmethod
    def is_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Package id must not be empty")
        return value.strip()

    def describe(self) -> str:
        return f"{self.id} {', '.join(policy.describe() for policy in self.policies)}"


__all__ = [
    "LATEST_KEYWORD",
    "ExactVersion",
    "VersionRangePolicy",
    "LatestVersion",
    "VersionPolicy",
    "parse_version_policy",
    "PackageRequest",
]
