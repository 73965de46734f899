"""Upload operations for pushing downloaded archives to the destination feed."""

import logging
import os
from typing import Optional

from ..exceptions import FeedError, TransferError
from ..models.package import PackageIdentity
from ..protocols.feed_protocol import FeedAccessor
from ..utils.cancellation import CancellationToken


async def push_package(
    destination: FeedAccessor,
    identity: PackageIdentity,
    file_path: str,
    token: Optional[CancellationToken] = None,
) -> None:
    """
    Push a downloaded archive to the destination.

    A version that already exists at the destination is not an error.

    Args:
        destination: Feed to push to
        identity: Package being pushed, for error reporting
        file_path: Path of the archive on disk
        token: Optional cancellation token

    Raises:
        TransferError: If the destination rejects the package
    """
    logging.debug("Pushing %s", os.path.basename(file_path))
    try:
        await destination.push_archive(file_path, skip_duplicate=True, token=token)
    except (FeedError, OSError) as e:
        logging.error("Failed to push package %s: %s", identity, e)
        raise TransferError(f"Failed to push package {identity}", identity=identity) from e


__all__ = ["push_package"]
