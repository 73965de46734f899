"""
NuGet versioning primitives.

This package provides version parsing, ordering and range matching used by
the resolvers.
"""

from .version import NuGetVersion
from .version_range import BestMatchStrategy, VersionRange

__all__ = ["NuGetVersion", "VersionRange", "BestMatchStrategy"]
