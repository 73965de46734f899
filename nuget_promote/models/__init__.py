"""
Pydantic models for nuget-promote.

This package contains all Pydantic models used in the application:
- package: identities, dependencies and feed metadata
- licensing: license info, compliance settings and violations
- requests: version policies and package requests
- context, results: run options and outcomes
"""

from .base import FrozenModel, PromoteBaseModel
from .package import (
    DependencyDescriptor,
    DependencyGroup,
    PackageDependency,
    PackageIdentity,
    PackageMetadata,
)
from .licensing import (
    NO_LICENSE,
    LicenseComplianceSettings,
    LicenseComplianceViolation,
    PackageInfo,
    PackageLicenseInfo,
    PackageLicenseKind,
)
from .requests import (
    LATEST_KEYWORD,
    ExactVersion,
    LatestVersion,
    PackageRequest,
    VersionPolicy,
    VersionRangePolicy,
    parse_version_policy,
)
from .context import NUGET_ORG_V3_URL, FeedSettings, PromoteOptions
from .results import MirroringResult, PromoteResult

__all__ = [
    "PromoteBaseModel",
    "FrozenModel",
    "PackageIdentity",
    "PackageDependency",
    "DependencyGroup",
    "DependencyDescriptor",
    "PackageMetadata",
    "NO_LICENSE",
    "PackageLicenseKind",
    "PackageLicenseInfo",
    "PackageInfo",
    "LicenseComplianceSettings",
    "LicenseComplianceViolation",
    "LATEST_KEYWORD",
    "ExactVersion",
    "VersionRangePolicy",
    "LatestVersion",
    "VersionPolicy",
    "parse_version_policy",
    "PackageRequest",
    "NUGET_ORG_V3_URL",
    "FeedSettings",
    "PromoteOptions",
    "MirroringResult",
    "PromoteResult",
]
