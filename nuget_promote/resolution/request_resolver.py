"""
Version policy resolution.

Turns package requests (exact version, version range, latest) into concrete
package identities that exist at the source feed.
"""

import logging
from typing import Iterable, List, Optional, Set

from ..exceptions import PackageNotFoundError
from ..models.package import PackageIdentity
from ..models.requests import ExactVersion, LatestVersion, PackageRequest, VersionPolicy, VersionRangePolicy
from ..protocols.feed_protocol import FeedAccessor
from ..utils.cancellation import CancellationToken, ensure_token


class PackageRequestResolver:
    """Resolve package requests against one feed."""

    def __init__(self, feed: FeedAccessor) -> None:
        self.feed = feed

    async def resolve_policy(
        self, package_id: str, policy: VersionPolicy, token: Optional[CancellationToken] = None
    ) -> Set[PackageIdentity]:
        """
        Resolve one version policy for one package id.

        Args:
            package_id: Package id
            policy: ExactVersion, VersionRangePolicy or LatestVersion
            token: Optional cancellation token

        Returns:
            Identities selected by the policy (possibly empty for ranges)

        Raises:
            PackageNotFoundError: If an exact version does not exist or no
                released version exists for ``latest``
        """
        token = ensure_token(token)
        token.raise_if_cancelled()
        logging.info("Resolving %s %s", package_id, policy.describe())

        match policy:
            case ExactVersion(version=version):
                return await self._resolve_exact(package_id, version, token)
            case VersionRangePolicy(version_range=version_range):
                return await self._resolve_range(package_id, version_range, token)
            case LatestVersion():
                return await self._resolve_latest(package_id, token)
        raise TypeError(f"Unsupported version policy: {policy!r}")

    async def _resolve_exact(self, package_id, version, token: CancellationToken) -> Set[PackageIdentity]:
        identity = PackageIdentity(id=package_id, version=version)
        # Fetching the metadata is the existence check
        await self.feed.get_metadata(identity, token)
        return {identity}

    async def _resolve_range(self, package_id, version_range, token: CancellationToken) -> Set[PackageIdentity]:
        versions = await self.feed.get_all_versions(package_id, token)
        candidates = sorted(v for v in versions if not v.is_prerelease and version_range.satisfies(v))

        matching: List[PackageIdentity] = []
        for version in candidates:
            token.raise_if_cancelled()
            identity = PackageIdentity(id=package_id, version=version)
            metadata = await self.feed.get_metadata(identity, token)
            if not metadata.listed:
                logging.debug("Skipping unlisted package %s", identity)
                continue
            matching.append(identity)

        logging.info(
            "Found %d matching versions: %s",
            len(matching),
            ", ".join(str(identity.version) for identity in matching),
        )
        return set(matching)

    async def _resolve_latest(self, package_id: str, token: CancellationToken) -> Set[PackageIdentity]:
        versions = await self.feed.get_all_versions(package_id, token)

        for version in sorted((v for v in versions if not v.is_prerelease), reverse=True):
            token.raise_if_cancelled()
            identity = PackageIdentity(id=package_id, version=version)
            metadata = await self.feed.get_metadata(identity, token)
            if metadata.listed:
                logging.info("Latest version of %s is %s", package_id, version)
                return {identity}
            logging.debug("Skipping unlisted package %s", identity)

        raise PackageNotFoundError(f"Package {package_id} has no released versions")

    async def resolve_request(
        self, request: PackageRequest, token: Optional[CancellationToken] = None
    ) -> Set[PackageIdentity]:
        """Resolve every policy of a request and union the results."""
        identities: Set[PackageIdentity] = set()
        for policy in request.policies:
            identities |= await self.resolve_policy(request.id, policy, token)
        return identities

    async def resolve_requests(
        self, requests: Iterable[PackageRequest], token: Optional[CancellationToken] = None
    ) -> Set[PackageIdentity]:
        """Resolve several requests and union the results."""
        identities: Set[PackageIdentity] = set()
        for request in requests:
            identities |= await self.resolve_request(request, token)
        return identities


__all__ = ["PackageRequestResolver"]
