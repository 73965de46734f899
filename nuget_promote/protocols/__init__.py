"""
Protocols for type safety.

This package provides protocols that define the feed interface shared by the
HTTP client, the cache and test doubles.
"""

from .feed_protocol import ArchiveReader, FeedAccessor

__all__ = ["ArchiveReader", "FeedAccessor"]
