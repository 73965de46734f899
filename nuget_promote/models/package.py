"""Package identity and metadata models."""

from typing import Dict, List, Optional, Tuple

from pydantic import Field, field_validator

from ..versioning import NuGetVersion, VersionRange
from .base import FrozenModel, PromoteBaseModel


class PackageIdentity(FrozenModel):
    """
    A package id with an optional exact version.

    The id compares case-insensitively, the version exactly. An identity
    without a version is only a grouping key for dependency expansion.

    Attributes:
        id: Package id as published by the feed
        version: Exact package version, if known
    """

    id: str
    version: Optional[NuGetVersion] = None

    @field_validator("id", mode="after")
    @classmethod
    def is_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Package id must not be empty")
        return value.strip()

    @property
    def has_version(self) -> bool:
        return self.version is not None

    @property
    def sort_key(self) -> Tuple[str, NuGetVersion]:
        """Order by id (case-insensitive) and then by version."""
        return (self.id.lower(), self.version if self.version is not None else NuGetVersion(0))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.id.lower() == other.id.lower() and self.version == other.version

    def __hash__(self) -> int:
        return hash((self.id.lower(), self.version))

    def __str__(self) -> str:
        if self.version is None:
            return self.id
        return f"{self.id} {self.version}"


class PackageDependency(PromoteBaseModel):
    """A dependency declared by a package: target id plus allowed range."""

    id: str
    version_range: VersionRange


class DependencyGroup(PromoteBaseModel):
    """Dependencies declared for one target framework."""

    target_framework: Optional[str] = None
    dependencies: List[PackageDependency] = Field(default_factory=list)


class DependencyDescriptor(FrozenModel):
    """
    One (dependency id, range) pair declared by a package.

    Attributes:
        dependent: Identity of the package declaring the dependency
        dependency: Identity of the dependency, without a version
        version_range: Range the dependency version has to satisfy
    """

    dependent: PackageIdentity
    dependency: PackageIdentity
    version_range: VersionRange


class PackageMetadata(PromoteBaseModel):
    """
    Searchable metadata of a single package version.

    Attributes:
        identity: Package id and version
        listed: Whether the version is publicly discoverable
        dependency_groups: Declared dependencies grouped by target framework
        license_expression: SPDX license expression, if declared
        license_file: Path of the license file inside the package archive, if declared
        license_url: License URL, if declared
    """

    identity: PackageIdentity
    listed: bool = True
    dependency_groups: List[DependencyGroup] = Field(default_factory=list)
    license_expression: Optional[str] = None
    license_file: Optional[str] = None
    license_url: Optional[str] = None

    def get_dependency_descriptors(self) -> Dict[str, List[DependencyDescriptor]]:
        """
        Collect declared dependencies grouped by dependency id.

        A package may declare several ranges for one id across dependency
        groups; every distinct range is kept once.

        Returns:
            Mapping of lower-cased dependency id to its distinct descriptors,
            in declaration order
        """
        grouped: Dict[str, List[DependencyDescriptor]] = {}
        for group in self.dependency_groups:
            for dependency in group.dependencies:
                descriptor = DependencyDescriptor(
                    dependent=self.identity,
                    dependency=PackageIdentity(id=dependency.id),
                    version_range=dependency.version_range,
                )
                descriptors = grouped.setdefault(dependency.id.lower(), [])
                if descriptor not in descriptors:
                    descriptors.append(descriptor)
        return grouped


__all__ = [
    "PackageIdentity",
    "PackageDependency",
    "DependencyGroup",
    "DependencyDescriptor",
    "PackageMetadata",
]
