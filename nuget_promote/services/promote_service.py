"""
Promote service for high-level promotion runs.

This module orchestrates one promotion run: resolve requests, build the
resolution tree, check licenses and transfer what is missing at the
destination.
"""

import logging
from typing import Iterable, Optional

from ..api.cached_accessor import CachedFeedAccessor
from ..licensing.validator import LicenseComplianceValidator
from ..models.context import PromoteOptions
from ..models.licensing import LicenseComplianceSettings
from ..models.requests import PackageRequest
from ..models.results import PromoteResult
from ..protocols.feed_protocol import FeedAccessor
from ..resolution.packages_resolver import PackagesToPromoteResolver
from ..resolution.request_resolver import PackageRequestResolver
from ..resolution.tree import PackageResolutionTree
from ..transfer import log_packages_to_promote, log_promote_summary, log_resolution_tree, mirror_packages
from ..utils.cancellation import CancellationToken, ensure_token


class PromoteService:
    """
    High-level service for promotion runs.

    The source feed is wrapped in a version cache for the lifetime of the
    service unless ``options.use_cache`` is off.
    """

    def __init__(
        self,
        source: FeedAccessor,
        destination: FeedAccessor,
        options: Optional[PromoteOptions] = None,
    ) -> None:
        """
        Initialize the promote service.

        Args:
            source: Feed packages are promoted from
            destination: Feed packages are promoted to
            options: Run options
        """
        self.options = options or PromoteOptions()
        self.source: FeedAccessor = CachedFeedAccessor(source) if self.options.use_cache else source
        self.destination = destination

    async def resolve_tree(
        self, requests: Iterable[PackageRequest], token: Optional[CancellationToken] = None
    ) -> Optional[PackageResolutionTree]:
        """
        Resolve requests into a resolution tree.

        Returns:
            The tree, or None when the requests matched no package
        """
        token = ensure_token(token)
        requests = list(requests)
        log_requests = ", ".join(request.describe() for request in requests)
        logging.info("Resolving matching packages for: %s", log_requests)

        identities = await PackageRequestResolver(self.source).resolve_requests(requests, token)
        if not identities:
            return None

        logging.info("Resolving packages to promote")
        resolver = PackagesToPromoteResolver(self.source, self.destination, self.options)
        return await resolver.resolve(identities, token)

    async def promote(
        self,
        requests: Iterable[PackageRequest],
        license_settings: Optional[LicenseComplianceSettings] = None,
        token: Optional[CancellationToken] = None,
    ) -> PromoteResult:
        """
        Run a full promotion.

        Args:
            requests: Package requests to promote
            license_settings: License policy; checks are disabled when omitted
            token: Optional cancellation token

        Returns:
            PromoteResult describing what was resolved and pushed

        Raises:
            PromoteError: Any resolution, license or transfer failure
        """
        token = ensure_token(token)
        tree = await self.resolve_tree(requests, token)
        if tree is None:
            logging.warning("There are no packages to promote.")
            return PromoteResult(dry_run=self.options.dry_run)

        log_resolution_tree(tree)

        to_promote = tree.packages_to_promote()
        to_promote_ids = [package.identity for package in to_promote]
        log_packages_to_promote(to_promote_ids)

        validator = LicenseComplianceValidator(self.source)
        await validator.check_compliance(to_promote, license_settings or LicenseComplianceSettings(), token)

        result = PromoteResult(
            requested=sorted(tree.roots, key=lambda identity: identity.sort_key),
            resolved=sorted((package.identity for package in tree.packages), key=lambda identity: identity.sort_key),
            to_promote=to_promote_ids,
            dry_run=self.options.dry_run,
        )

        if not self.options.dry_run:
            mirroring = await mirror_packages(to_promote_ids, self.source, self.destination, token)
            result.promoted = mirroring.promoted

        log_promote_summary(result)
        return result


__all__ = ["PromoteService"]
