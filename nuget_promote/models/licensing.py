"""License models used by the compliance validator."""

from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from .base import PromoteBaseModel
from .package import PackageIdentity

# License text reported for packages that declare no license at all
NO_LICENSE = "<not set>"


class PackageLicenseKind(str, Enum):
    """How a package declares its license."""

    NONE = "none"
    URL = "url"
    EXPRESSION = "expression"
    FILE = "file"


class PackageLicenseInfo(PromoteBaseModel):
    """
    License declared by a package.

    Attributes:
        kind: How the license is declared
        license: Expression, archive path, URL or NO_LICENSE depending on kind
        url: License URL, when the feed reports one
    """

    kind: PackageLicenseKind = PackageLicenseKind.NONE
    license: str = NO_LICENSE
    url: Optional[str] = None


class PackageInfo(PromoteBaseModel):
    """A resolved package together with its license information."""

    identity: PackageIdentity
    license: PackageLicenseInfo = Field(default_factory=PackageLicenseInfo)


class LicenseComplianceSettings(PromoteBaseModel):
    """
    License compliance configuration.

    Attributes:
        enabled: Run the checks at all
        accept_expressions: Accepted license expressions (exact match)
        accept_urls: Accepted license URLs (exact match)
        accept_files: Local paths of accepted license texts
        accept_no_license: "<id> <version>" strings of packages allowed to have no license
    """

    enabled: bool = False
    accept_expressions: List[str] = Field(default_factory=list)
    accept_urls: List[str] = Field(default_factory=list)
    accept_files: List[str] = Field(default_factory=list)
    accept_no_license: List[str] = Field(default_factory=list)

    @field_validator("accept_expressions", "accept_urls", "accept_files", "accept_no_license", mode="after")
    @classmethod
    def no_empty_entries(cls, value: List[str]) -> List[str]:
        if any(not item or not item.strip() for item in value):
            raise ValueError("Whitelist entries must not be empty")
        return value


class LicenseComplianceViolation(PromoteBaseModel):
    """A single license policy violation."""

    identity: PackageIdentity
    license_kind: PackageLicenseKind
    license: str
    reason: str

    def __str__(self) -> str:
        return f"{self.identity} [{self.license_kind.value}] {self.license}: {self.reason}"


__all__ = [
    "NO_LICENSE",
    "PackageLicenseKind",
    "PackageLicenseInfo",
    "PackageInfo",
    "LicenseComplianceSettings",
    "LicenseComplianceViolation",
]
