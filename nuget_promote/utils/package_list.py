"""
Package list file parsing.

Each non-empty line of a package list names one package and a version or
version range, in one of the formats developers usually copy around:

    System.Runtime 4.3.1
    System.Runtime [4.1.0,4.1.2)
    Install-Package System.Runtime -Version 4.3.1
    <PackageReference Include="System.Runtime" Version="4.3.1" />

Lines starting with ``#`` are comments. An exact version is promoted as the
single-version range ``[v]``.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from ..models.requests import PackageRequest, VersionRangePolicy
from ..versioning import NuGetVersion, VersionRange

_INSTALL_PACKAGE = re.compile(r"^Install-Package\s+(?P<id>\S+)\s+-Version\s+(?P<version>\S+)$")
_PACKAGE_REFERENCE = re.compile(r'^<PackageReference\s+Include="(?P<id>\S+)"\s+Version="(?P<version>\S+)"\s+/>$')
_SPACE_SEPARATED = re.compile(r"^(?P<id>\S+)\s+(?P<version>\S+)$")

LINE_PATTERNS = (_INSTALL_PACKAGE, _PACKAGE_REFERENCE, _SPACE_SEPARATED)


def _match_line(line: str) -> Optional[Tuple[str, str]]:
    text = line.strip()
    for pattern in LINE_PATTERNS:
        match = pattern.match(text)
        if match:
            return match.group("id"), match.group("version")
    return None


def parse_package_line(line: str) -> PackageRequest:
    """
    Parse a single package list line.

    Args:
        line: Line in one of the supported formats

    Returns:
        PackageRequest with a single range policy

    Raises:
        ValueError: If the line or its version cannot be parsed
    """
    parsed = _match_line(line)
    if parsed is None:
        raise ValueError(f"Failed to parse '{line.strip()}'")

    package_id, version_text = parsed

    version = NuGetVersion.try_parse(version_text)
    if version is not None:
        version_range = VersionRange.exact(version)
    else:
        version_range = VersionRange.try_parse(version_text)
        if version_range is None:
            raise ValueError(f"Cannot parse '{version_text}' as a version or version range")

    return PackageRequest(id=package_id, policies=[VersionRangePolicy(version_range=version_range)])


def parse_package_list(content: str) -> List[PackageRequest]:
    """
    Parse the content of a package list file.

    Args:
        content: File content

    Returns:
        One PackageRequest per package line

    Raises:
        ValueError: If any line cannot be parsed; every bad line is reported
    """
    requests: List[PackageRequest] = []
    errors: List[str] = []

    for number, line in enumerate(content.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        try:
            requests.append(parse_package_line(line))
        except ValueError as e:
            errors.append(f"line {number}: {e}")

    if errors:
        raise ValueError("Invalid package list:\n  " + "\n  ".join(errors))

    return requests


def load_package_list(path: str) -> List[PackageRequest]:
    """
    Read and parse a package list file.

    Args:
        path: Path of the file

    Returns:
        Parsed package requests
    """
    logging.debug("Reading package list from %s", path)
    return parse_package_list(Path(path).read_text(encoding="utf-8"))


__all__ = ["parse_package_line", "parse_package_list", "load_package_list"]
