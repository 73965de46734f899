"""
Feed protocols for type safety.

This module defines the capabilities the resolvers, the license validator and
the transfer pipeline need from a package feed, without requiring
inheritance. The NuGet V3 client, the version cache and the in-memory test
feed all satisfy it structurally.
"""

from typing import BinaryIO, Optional, Protocol, Set, runtime_checkable

from ..models.package import PackageIdentity, PackageMetadata
from ..utils.cancellation import CancellationToken
from ..versioning import NuGetVersion


@runtime_checkable
class ArchiveReader(Protocol):
    """Read access to the files inside one package archive."""

    def read_text(self, path: str) -> str:
        """
        Read a file from the archive as text.

        Raises:
            ArchiveEntryNotFoundError: If the archive has no entry at the path
        """
        ...

    def close(self) -> None:
        """Release the archive."""
        ...


@runtime_checkable
class FeedAccessor(Protocol):
    """
    Protocol defining the operations promotion needs from one feed.

    Failures are raised as PromoteError subclasses: PackageNotFoundError when
    the feed does not know the package and FeedError for transport problems.
    """

    async def get_all_versions(
        self, package_id: str, token: Optional[CancellationToken] = None
    ) -> Set[NuGetVersion]:
        """
        List every version of a package.

        Raises:
            PackageNotFoundError: If the feed does not know the package id
        """
        ...

    async def get_metadata(
        self, identity: PackageIdentity, token: Optional[CancellationToken] = None
    ) -> PackageMetadata:
        """
        Fetch searchable metadata for one package version.

        Raises:
            PackageNotFoundError: If the version does not exist
        """
        ...

    async def does_exist(self, identity: PackageIdentity, token: Optional[CancellationToken] = None) -> bool:
        """Check whether an exact package version exists."""
        ...

    async def copy_archive_to_stream(
        self, identity: PackageIdentity, stream: BinaryIO, token: Optional[CancellationToken] = None
    ) -> None:
        """Write the package archive (.nupkg) into a binary stream."""
        ...

    async def push_archive(
        self, file_path: str, skip_duplicate: bool = True, token: Optional[CancellationToken] = None
    ) -> None:
        """Publish a package archive; an existing version is tolerated when skip_duplicate is set."""
        ...

    async def open_archive_reader(
        self, identity: PackageIdentity, token: Optional[CancellationToken] = None
    ) -> ArchiveReader:
        """Download a package archive and open it for reading."""
        ...


__all__ = ["ArchiveReader", "FeedAccessor"]
