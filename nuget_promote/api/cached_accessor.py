"""
Per-run memoization of version lookups.

Resolving a dependency graph asks for the versions of the same package ids
over and over; this wrapper answers repeated questions from memory. The
cache lives as long as the wrapper, which is created for one promotion run.
"""

import logging
from typing import BinaryIO, Dict, Optional, Set

from ..models.package import PackageIdentity, PackageMetadata
from ..protocols.feed_protocol import ArchiveReader, FeedAccessor
from ..utils.cancellation import CancellationToken
from ..versioning import NuGetVersion


class CachedFeedAccessor:
    """
    FeedAccessor that caches ``get_all_versions`` results.

    Package ids are matched case-insensitively. Failures are not cached, so a
    later call retries the feed. Every other operation is delegated as is.
    """

    def __init__(self, inner: FeedAccessor) -> None:
        self.inner = inner
        self._versions: Dict[str, Set[NuGetVersion]] = {}
        self.hits = 0
        self.misses = 0

    async def get_all_versions(
        self, package_id: str, token: Optional[CancellationToken] = None
    ) -> Set[NuGetVersion]:
        key = package_id.lower()
        cached = self._versions.get(key)
        if cached is not None:
            self.hits += 1
            logging.debug("Version cache hit for %s", package_id)
            return set(cached)

        self.misses += 1
        versions = await self.inner.get_all_versions(package_id, token)
        self._versions[key] = set(versions)
        return set(versions)

    async def get_metadata(
        self, identity: PackageIdentity, token: Optional[CancellationToken] = None
    ) -> PackageMetadata:
        return await self.inner.get_metadata(identity, token)

    async def does_exist(self, identity: PackageIdentity, token: Optional[CancellationToken] = None) -> bool:
        return await self.inner.does_exist(identity, token)

    async def copy_archive_to_stream(
        self, identity: PackageIdentity, stream: BinaryIO, token: Optional[CancellationToken] = None
    ) -> None:
        await self.inner.copy_archive_to_stream(identity, stream, token)

    async def push_archive(
        self, file_path: str, skip_duplicate: bool = True, token: Optional[CancellationToken] = None
    ) -> None:
        await self.inner.push_archive(file_path, skip_duplicate, token)

    async def open_archive_reader(
        self, identity: PackageIdentity, token: Optional[CancellationToken] = None
    ) -> ArchiveReader:
        return await self.inner.open_archive_reader(identity, token)

    def clear(self) -> None:
        """Drop every cached entry."""
        logging.debug("Clearing version cache (%d entries, %d hits)", len(self._versions), self.hits)
        self._versions.clear()


__all__ = ["CachedFeedAccessor"]
