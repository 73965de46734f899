"""
Download operations for promoting packages.

Archives are streamed from the source feed into a temporary file that the
caller owns and deletes.
"""

import logging
import os
import tempfile
from typing import Optional

from ..exceptions import FeedError, PackageNotFoundError, TransferError
from ..models.package import PackageIdentity
from ..protocols.feed_protocol import FeedAccessor
from ..utils.cancellation import CancellationToken
from ..utils.logging_utils import format_file_size


def archive_file_name(identity: PackageIdentity) -> str:
    """File name of a package archive, e.g. ``system.runtime.4.3.1.nupkg``."""
    version = identity.version.to_normalized_string() if identity.version else "0.0.0"
    return f"{identity.id.lower()}.{version.lower()}.nupkg"


async def download_package(
    source: FeedAccessor,
    identity: PackageIdentity,
    directory: str,
    token: Optional[CancellationToken] = None,
) -> str:
    """
    Download a package archive into a directory.

    Args:
        source: Feed to download from
        identity: Package to download
        directory: Existing directory for the archive
        token: Optional cancellation token

    Returns:
        Path of the downloaded archive

    Raises:
        TransferError: If the archive cannot be downloaded
    """
    file_path = os.path.join(directory, archive_file_name(identity))
    logging.debug("Downloading %s to %s", identity, file_path)

    try:
        with open(file_path, "wb") as f:
            await source.copy_archive_to_stream(identity, f, token)
    except (FeedError, PackageNotFoundError, OSError) as e:
        logging.error("Failed to download package %s: %s", identity, e)
        raise TransferError(f"Failed to download package {identity}", identity=identity) from e

    logging.debug("Downloaded %s (%s)", identity, format_file_size(os.path.getsize(file_path)))
    return file_path


def create_temp_directory() -> tempfile.TemporaryDirectory:
    """Scoped directory for one package transfer; removed on cleanup."""
    return tempfile.TemporaryDirectory(prefix="nuget-promote-")


__all__ = ["archive_file_name", "download_package", "create_temp_directory"]
