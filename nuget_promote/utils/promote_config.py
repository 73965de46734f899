"""
Promotion configuration files.

A promotion configuration is a YAML document with hyphenated keys listing
the packages to promote and the license compliance policy:

    license-compliance-check:
      enabled: true
      accept-expressions: [MIT, Apache-2.0]
      accept-urls: ["https://github.com/dotnet/corefx/blob/master/LICENSE.TXT"]
      accept-files: [licenses/mit.txt]
      accept-no-license: ["Legacy.Package 1.0.0"]
    packages:
      - id: System.Runtime
        versions: ["[4.1.0,4.1.2)", 4.3.1]
      - id: Newtonsoft.Json
        versions: latest
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import ConfigDict, Field, ValidationError, field_validator

from ..models.base import PromoteBaseModel
from ..models.licensing import LicenseComplianceSettings
from ..models.requests import PackageRequest, VersionPolicy, parse_version_policy


def _hyphenate(name: str) -> str:
    return name.replace("_", "-")


class _ConfigModel(PromoteBaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=_hyphenate, populate_by_name=True)


class LicenseComplianceCheckConfig(_ConfigModel):
    """The ``license-compliance-check`` section."""

    enabled: bool = False
    accept_expressions: List[str] = Field(default_factory=list)
    accept_urls: List[str] = Field(default_factory=list)
    accept_files: List[str] = Field(default_factory=list)
    accept_no_license: List[str] = Field(default_factory=list)

    @field_validator("accept_expressions", "accept_urls", "accept_files", "accept_no_license", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class PackageConfig(_ConfigModel):
    """One entry of the ``packages`` list."""

    id: str = Field(min_length=1)
    versions: List[VersionPolicy] = Field(min_length=1)

    @field_validator("versions", mode="before")
    @classmethod
    def parse_versions(cls, value: Any) -> Any:
        # YAML turns 4.3 into a float and 1 into an int; versions are read back as text
        if value is None:
            return []
        items = value if isinstance(value, list) else [value]
        policies = []
        for item in items:
            if isinstance(item, dict):
                policies.append(item)
            elif isinstance(item, (list, tuple)):
                raise ValueError(f"Expected a version or version range, but got a list '{item}'.")
            else:
                policies.append(parse_version_policy(str(item)))
        return policies


class PromoteConfig(_ConfigModel):
    """Root of a promotion configuration document."""

    license_compliance_check: Optional[LicenseComplianceCheckConfig] = None
    packages: List[PackageConfig] = Field(min_length=1)

    def to_requests(self) -> List[PackageRequest]:
        """Convert the package entries into package requests."""
        return [PackageRequest(id=package.id, policies=list(package.versions)) for package in self.packages]

    def to_license_settings(self, base_dir: Optional[Path] = None) -> LicenseComplianceSettings:
        """
        Build the license compliance settings.

        Args:
            base_dir: Directory that relative accepted-file paths are resolved against

        Returns:
            LicenseComplianceSettings; disabled when the section is missing
        """
        section = self.license_compliance_check
        if section is None:
            return LicenseComplianceSettings(enabled=False)

        accept_files = []
        for path in section.accept_files:
            expanded = Path(path).expanduser()
            if base_dir is not None and not expanded.is_absolute():
                expanded = base_dir / expanded
            accept_files.append(str(expanded))
        return LicenseComplianceSettings(
            enabled=section.enabled,
            accept_expressions=section.accept_expressions,
            accept_urls=section.accept_urls,
            accept_files=accept_files,
            accept_no_license=section.accept_no_license,
        )


def parse_promote_config(content: str) -> PromoteConfig:
    """
    Parse a promotion configuration document.

    Args:
        content: YAML text

    Returns:
        Validated PromoteConfig

    Raises:
        ValueError: If the YAML is malformed or fails validation
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse configuration: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Failed to parse configuration: expected a mapping at the top level")

    try:
        return PromoteConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Failed to parse configuration: {e}") from e


def load_promote_config(path: str) -> PromoteConfig:
    """Read and parse a promotion configuration file."""
    logging.debug("Reading promotion configuration from %s", path)
    return parse_promote_config(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "LicenseComplianceCheckConfig",
    "PackageConfig",
    "PromoteConfig",
    "parse_promote_config",
    "load_promote_config",
]
