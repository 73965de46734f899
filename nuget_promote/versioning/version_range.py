"""
NuGet version ranges.

Ranges use NuGet's interval notation:

    1.0          -> 1.0 <= x
    [1.0]        -> x == 1.0
    (1.0,)       -> 1.0 < x
    (,1.0]       -> x <= 1.0
    [1.0,2.0)    -> 1.0 <= x < 2.0
"""

from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .version import NuGetVersion


class BestMatchStrategy(str, Enum):
    """How a dependency range picks one version out of the available ones."""

    HIGHEST = "highest"
    LOWEST = "lowest"


class VersionRange:
    """An interval of NuGet versions with optional inclusive/exclusive bounds."""

    __slots__ = ("min_version", "max_version", "is_min_inclusive", "is_max_inclusive", "_original")

    def __init__(
        self,
        min_version: Optional[NuGetVersion] = None,
        is_min_inclusive: bool = True,
        max_version: Optional[NuGetVersion] = None,
        is_max_inclusive: bool = False,
        original: Optional[str] = None,
    ) -> None:
        self.min_version = min_version
        self.max_version = max_version
        self.is_min_inclusive = is_min_inclusive if min_version is not None else False
        self.is_max_inclusive = is_max_inclusive if max_version is not None else False
        self._original = original

    @classmethod
    def exact(cls, version: NuGetVersion) -> "VersionRange":
        """Range matching a single version, ``[v]``."""
        return cls(version, True, version, True)

    @classmethod
    def parse(cls, value: str) -> "VersionRange":
        """
        Parse a NuGet range string.

        Args:
            value: Range such as ``1.0``, ``[1.0]``, ``[1.0,2.0)`` or ``(,3.0]``

        Returns:
            Parsed VersionRange

        Raises:
            ValueError: If the string is not a valid range
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"'{value}' is not a valid version range")

        text = value.strip()
        if text[0] not in "[(":
            version = NuGetVersion.try_parse(text)
            if version is None:
                raise ValueError(f"'{value}' is not a valid version range")
            return cls(version, True, None, False, original=text)

        if len(text) < 3 or text[-1] not in "])":
            raise ValueError(f"'{value}' is not a valid version range")

        is_min_inclusive = text[0] == "["
        is_max_inclusive = text[-1] == "]"
        body = text[1:-1].strip()
        parts = [part.strip() for part in body.split(",")]

        if len(parts) == 1:
            # [1.0] is the only valid single-value bracket form
            version = NuGetVersion.try_parse(parts[0])
            if version is None or not (is_min_inclusive and is_max_inclusive):
                raise ValueError(f"'{value}' is not a valid version range")
            return cls(version, True, version, True, original=text)

        if len(parts) != 2 or (not parts[0] and not parts[1]):
            raise ValueError(f"'{value}' is not a valid version range")

        min_version = NuGetVersion.try_parse(parts[0]) if parts[0] else None
        max_version = NuGetVersion.try_parse(parts[1]) if parts[1] else None
        if (parts[0] and min_version is None) or (parts[1] and max_version is None):
            raise ValueError(f"'{value}' is not a valid version range")
        if min_version is not None and max_version is not None:
            if max_version < min_version:
                raise ValueError(f"'{value}' is not a valid version range")
            if min_version == max_version and not (is_min_inclusive and is_max_inclusive):
                raise ValueError(f"'{value}' is not a valid version range")

        return cls(min_version, is_min_inclusive, max_version, is_max_inclusive, original=text)

    @classmethod
    def try_parse(cls, value: str) -> Optional["VersionRange"]:
        """Parse a range string, returning None when it is not a range."""
        try:
            return cls.parse(value)
        except ValueError:
            return None

    @property
    def is_exact(self) -> bool:
        """True for ``[v]`` style ranges."""
        return (
            self.min_version is not None
            and self.min_version == self.max_version
            and self.is_min_inclusive
            and self.is_max_inclusive
        )

    @property
    def allows_prerelease(self) -> bool:
        """True when one of the bounds is itself a prerelease version."""
        return any(bound is not None and bound.is_prerelease for bound in (self.min_version, self.max_version))

    def satisfies(self, version: NuGetVersion) -> bool:
        """Check whether a version lies within this range."""
        if self.min_version is not None:
            if self.is_min_inclusive:
                if version < self.min_version:
                    return False
            elif version <= self.min_version:
                return False

        if self.max_version is not None:
            if self.is_max_inclusive:
                if version > self.max_version:
                    return False
            elif version >= self.max_version:
                return False

        return True

    def find_best_match(
        self, versions: Iterable[NuGetVersion], strategy: BestMatchStrategy = BestMatchStrategy.HIGHEST
    ) -> Optional[NuGetVersion]:
        """
        Pick one version out of the candidates that satisfy the range.

        Prerelease candidates are only considered when the range is bounded
        by a prerelease version.

        Args:
            versions: Candidate versions
            strategy: HIGHEST picks the greatest satisfying version, LOWEST the smallest

        Returns:
            The chosen version, or None when nothing satisfies the range
        """
        allow_prerelease = self.allows_prerelease
        matching = [
            version
            for version in versions
            if (allow_prerelease or not version.is_prerelease) and self.satisfies(version)
        ]
        if not matching:
            return None
        if strategy == BestMatchStrategy.LOWEST:
            return min(matching)
        return max(matching)

    def pretty_print(self) -> str:
        """Render the range as a readable condition, e.g. ``(>= 1.0.0 && < 2.0.0)``."""
        if self.is_exact:
            return f"(= {self.min_version})"

        conditions = []
        if self.min_version is not None:
            conditions.append(f"{'>=' if self.is_min_inclusive else '>'} {self.min_version}")
        if self.max_version is not None:
            conditions.append(f"{'<=' if self.is_max_inclusive else '<'} {self.max_version}")
        if not conditions:
            return "(all versions)"
        return f"({' && '.join(conditions)})"

    def to_normalized_string(self) -> str:
        """Render the range in bracket notation."""
        if self.is_exact:
            return f"[{self.min_version}]"
        left = "[" if self.is_min_inclusive else "("
        right = "]" if self.is_max_inclusive else ")"
        low = str(self.min_version) if self.min_version is not None else ""
        high = str(self.max_version) if self.max_version is not None else ""
        return f"{left}{low}, {high}{right}"

    def _key(self) -> tuple:
        return (self.min_version, self.is_min_inclusive, self.max_version, self.is_max_inclusive)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionRange):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.to_normalized_string()

    def __repr__(self) -> str:
        return f"VersionRange('{self.to_normalized_string()}')"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        """Accept either a VersionRange or a range string in pydantic models."""

        def validate(value: Any) -> "VersionRange":
            if isinstance(value, VersionRange):
                return value
            if isinstance(value, str):
                return cls.parse(value)
            raise ValueError(f"Cannot convert {type(value).__name__} to a version range")

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda r: r.to_normalized_string()),
        )


__all__ = ["BestMatchStrategy", "VersionRange"]
