"""
Exception hierarchy for promotion runs.

Every failure that aborts a run derives from PromoteError so the CLI can
report it uniformly. TreeInvariantError signals a resolver defect rather than
a problem with user input.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .models.licensing import LicenseComplianceViolation
    from .models.package import PackageIdentity


class PromoteError(Exception):
    """Base class for all promotion failures."""


class PackageNotFoundError(PromoteError):
    """The requested package or version does not exist at the feed."""


class UnsatisfiableDependencyError(PromoteError):
    """A dependency range matches none of the versions known to the feed."""

    def __init__(self, dependent: "PackageIdentity", dependency_id: str, version_range: str) -> None:
        self.dependent = dependent
        self.dependency_id = dependency_id
        self.version_range = version_range
        super().__init__(
            f"Unable to find a version of {dependency_id} matching {version_range} "
            f"(required by {dependent})"
        )


class FeedError(PromoteError):
    """Network, authentication or remote service failure while talking to a feed."""


class ArchiveEntryNotFoundError(PromoteError):
    """A file requested from a package archive is not present in it."""


class LicenseComplianceError(PromoteError):
    """One or more resolved packages violate the license policy."""

    def __init__(self, violations: List["LicenseComplianceViolation"]) -> None:
        self.violations = list(violations)
        super().__init__("License violations found.")


class TransferError(PromoteError):
    """A package could not be promoted; earlier packages stay promoted."""

    def __init__(self, message: str, identity: Optional["PackageIdentity"] = None, completed: int = 0) -> None:
        self.identity = identity
        self.completed = completed
        super().__init__(message)


class TreeInvariantError(PromoteError):
    """The resolver produced an inconsistent resolution tree."""


class PromotionCancelledError(PromoteError):
    """The run was cancelled before it finished."""


__all__ = [
    "PromoteError",
    "PackageNotFoundError",
    "UnsatisfiableDependencyError",
    "FeedError",
    "ArchiveEntryNotFoundError",
    "LicenseComplianceError",
    "TransferError",
    "TreeInvariantError",
    "PromotionCancelledError",
]
