"""
NuGet version parsing and ordering.

NuGet versions extend SemVer 2.0 with an optional fourth (revision) number and
a relaxed syntax where the minor and patch components may be omitted. Release
label precedence is delegated to ``semantic_version`` so that numeric and
alphanumeric identifiers compare the way SemVer requires.
"""

import re
from functools import total_ordering
from typing import Any, Optional, Tuple

import semantic_version
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

_VERSION_PATTERN = re.compile(
    r"^\s*v?(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:\.(?P<revision>\d+))?"
    r"(?:-(?P<release>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<metadata>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?\s*$"
)


def _label_precedence(labels: Tuple[str, ...]) -> semantic_version.Version:
    """Build a comparable SemVer value carrying only the release labels."""
    normalized = tuple(str(int(label)) if label.isdigit() else label.lower() for label in labels)
    return semantic_version.Version(major=0, minor=0, patch=0, prerelease=normalized or None)


@total_ordering
class NuGetVersion:
    """
    An immutable NuGet package version.

    Build metadata is kept for display but ignored for equality and ordering.
    """

    __slots__ = ("major", "minor", "patch", "revision", "release_labels", "metadata", "_original", "_key")

    def __init__(
        self,
        major: int,
        minor: int = 0,
        patch: int = 0,
        revision: int = 0,
        release_labels: Tuple[str, ...] = (),
        metadata: Optional[str] = None,
        original: Optional[str] = None,
    ) -> None:
        self.major = major
        self.minor = minor
        self.patch = patch
        self.revision = revision
        self.release_labels = tuple(release_labels)
        self.metadata = metadata
        self._original = original
        self._key = (major, minor, patch, revision, _label_precedence(self.release_labels))

    @classmethod
    def parse(cls, value: str) -> "NuGetVersion":
        """
        Parse a version string.

        Args:
            value: Version string such as ``1.0``, ``4.3.1`` or ``2.0.0-beta.1+sha.5``

        Returns:
            Parsed NuGetVersion

        Raises:
            ValueError: If the string is not a valid NuGet version
        """
        match = _VERSION_PATTERN.match(value) if isinstance(value, str) else None
        if not match:
            raise ValueError(f"'{value}' is not a valid version string")

        release = match.group("release")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            revision=int(match.group("revision") or 0),
            release_labels=tuple(release.split(".")) if release else (),
            metadata=match.group("metadata"),
            original=value.strip(),
        )

    @classmethod
    def try_parse(cls, value: str) -> Optional["NuGetVersion"]:
        """Parse a version string, returning None when it is not a version."""
        try:
            return cls.parse(value)
        except ValueError:
            return None

    @property
    def is_prerelease(self) -> bool:
        """True when the version carries release labels."""
        return bool(self.release_labels)

    @property
    def release(self) -> str:
        """Release labels joined with dots (empty for stable versions)."""
        return ".".join(self.release_labels)

    @property
    def original(self) -> str:
        """The string this version was parsed from, or the normalized form."""
        return self._original or self.to_normalized_string()

    def to_normalized_string(self) -> str:
        """Render the version without metadata, always with at least three parts."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.release_labels:
            text += f"-{self.release}"
        return text

    def __str__(self) -> str:
        return self.to_normalized_string()

    def __repr__(self) -> str:
        return f"NuGetVersion('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: "NuGetVersion") -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        """Accept either a NuGetVersion or a version string in pydantic models."""

        def validate(value: Any) -> "NuGetVersion":
            if isinstance(value, NuGetVersion):
                return value
            if isinstance(value, str):
                return cls.parse(value)
            raise ValueError(f"Cannot convert {type(value).__name__} to a version")

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


__all__ = ["NuGetVersion"]
