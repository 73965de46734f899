"""
Package promotion between feeds.

Packages are promoted one at a time, in the order given. The first failure
stops the batch; packages promoted before it stay at the destination.
"""

import logging
from typing import List, Optional, Sequence

from ..exceptions import TransferError
from ..models.package import PackageIdentity
from ..models.results import MirroringResult
from ..protocols.feed_protocol import FeedAccessor
from ..utils.cancellation import CancellationToken, ensure_token
from ..utils.logging_utils import format_count_with_unit
from .download import create_temp_directory, download_package
from .upload import push_package


async def promote_package(
    identity: PackageIdentity,
    source: FeedAccessor,
    destination: FeedAccessor,
    token: Optional[CancellationToken] = None,
) -> None:
    """
    Copy one package archive from source to destination.

    The archive goes through a temporary directory that is removed on every
    exit path.

    Raises:
        TransferError: If the download or the push fails
        PromotionCancelledError: If the token is cancelled
    """
    token = ensure_token(token)
    token.raise_if_cancelled()

    with create_temp_directory() as directory:
        file_path = await download_package(source, identity, directory, token)
        token.raise_if_cancelled()
        await push_package(destination, identity, file_path, token)


async def mirror_packages(
    packages: Sequence[PackageIdentity],
    source: FeedAccessor,
    destination: FeedAccessor,
    token: Optional[CancellationToken] = None,
) -> MirroringResult:
    """
    Promote packages in order, stopping at the first failure.

    Args:
        packages: Packages to promote
        source: Feed to read from
        destination: Feed to push to
        token: Optional cancellation token, checked before each package

    Returns:
        MirroringResult listing every promoted package

    Raises:
        TransferError: On the first failed package; ``completed`` holds the
            number of packages promoted before it
        PromotionCancelledError: If the token is cancelled
    """
    token = ensure_token(token)
    total = len(packages)
    promoted: List[PackageIdentity] = []

    if total == 0:
        return MirroringResult(total=0, promoted=[])

    logging.warning("Promoting %s...", format_count_with_unit(total, "package"))

    for index, identity in enumerate(packages, start=1):
        token.raise_if_cancelled()
        logging.warning("(%d/%d) Promote %s", index, total, identity)
        try:
            await promote_package(identity, source, destination, token)
        except TransferError as e:
            logging.error("Promotion stopped after %s", format_count_with_unit(len(promoted), "package"))
            raise TransferError(str(e), identity=identity, completed=len(promoted)) from e
        promoted.append(identity)

    logging.warning("%d package(s) promoted.", len(promoted))
    return MirroringResult(total=total, promoted=promoted)


__all__ = ["promote_package", "mirror_packages"]
