"""
Feed access for nuget-promote.

This package provides the NuGet V3 client, package archive access and the
per-run version cache.
"""

from .archive import ZipArchiveReader
from .cached_accessor import CachedFeedAccessor
from .nuget_client import NuGetFeedClient

__all__ = ["NuGetFeedClient", "CachedFeedAccessor", "ZipArchiveReader"]
