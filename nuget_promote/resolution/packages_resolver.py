"""
Dependency graph resolution.

Starting from the requested identities, the resolver walks declared
dependencies breadth first, resolving each dependency range to one concrete
version, and records which packages already exist at the destination. The
result is a validated PackageResolutionTree.
"""

import logging
from typing import Dict, Iterable, Optional, Set, Tuple

from ..exceptions import UnsatisfiableDependencyError
from ..licensing.converter import license_info_from_metadata
from ..models.context import PromoteOptions
from ..models.licensing import PackageInfo
from ..models.package import DependencyDescriptor, PackageIdentity
from ..protocols.feed_protocol import FeedAccessor
from ..utils.cancellation import CancellationToken, ensure_token
from .distinct_queue import DistinctQueue
from .tree import PackageResolutionTree


class PackagesToPromoteResolver:
    """
    Resolve the full set of packages a promotion run has to consider.

    Args:
        source: Feed packages are promoted from
        destination: Feed packages are promoted to
        options: Run options (always_resolve_deps, force_push, dependency_version)
    """

    def __init__(self, source: FeedAccessor, destination: FeedAccessor, options: Optional[PromoteOptions] = None):
        self.source = source
        self.destination = destination
        self.options = options or PromoteOptions()

    async def resolve(
        self, identities: Iterable[PackageIdentity], token: Optional[CancellationToken] = None
    ) -> PackageResolutionTree:
        """
        Resolve the dependency graph of the given root identities.

        Args:
            identities: Root identities, as returned by the request resolver
            token: Optional cancellation token

        Returns:
            Validated resolution tree whose roots are exactly ``identities``

        Raises:
            PackageNotFoundError: If a package's metadata cannot be found at the source
            UnsatisfiableDependencyError: If a dependency range matches no version
            FeedError: On transport failures at either feed
            PromotionCancelledError: If the token is cancelled
        """
        token = ensure_token(token)
        roots = sorted(set(identities), key=lambda identity: identity.sort_key)

        queue: DistinctQueue[PackageIdentity] = DistinctQueue(roots)
        resolved: Dict[PackageIdentity, PackageInfo] = {}
        in_target: Set[PackageIdentity] = set()
        edges: Set[Tuple[PackageIdentity, PackageIdentity]] = set()

        while queue:
            token.raise_if_cancelled()
            identity = queue.dequeue()
            logging.info("Processing %s", identity)

            metadata = await self.source.get_metadata(identity, token)
            resolved[identity] = PackageInfo(identity=identity, license=license_info_from_metadata(metadata))

            exists = False
            if not self.options.force_push:
                exists = await self.destination.does_exist(identity, token)
                if exists:
                    logging.info("Package %s is already present in the destination repository.", identity)
                    in_target.add(identity)

            if exists and not self.options.resolve_present_dependencies:
                continue

            dependencies: DistinctQueue[DependencyDescriptor] = DistinctQueue(
                descriptor
                for descriptors in metadata.get_dependency_descriptors().values()
                for descriptor in descriptors
            )
            while dependencies:
                token.raise_if_cancelled()
                dependency = await self._resolve_dependency(dependencies.dequeue(), token)
                edges.add((identity, dependency))
                if queue.enqueue(dependency):
                    logging.debug("New dependency found: %s", dependency)

        logging.info("Resolved %d packages (%d already in the destination)", len(resolved), len(in_target))
        return PackageResolutionTree.create(resolved.values(), roots, in_target, edges)

    async def _resolve_dependency(self, descriptor: DependencyDescriptor, token: CancellationToken) -> PackageIdentity:
        """Pick the best matching source version for one declared dependency range."""
        dependency_id = descriptor.dependency.id
        version_range = descriptor.version_range
        logging.info("Resolving dependency %s %s", dependency_id, version_range.pretty_print())

        versions = await self.source.get_all_versions(dependency_id, token)
        best = version_range.find_best_match(versions, self.options.dependency_version)
        if best is None:
            raise UnsatisfiableDependencyError(descriptor.dependent, dependency_id, version_range.pretty_print())

        logging.info("Resolved version: %s", best)
        return PackageIdentity(id=dependency_id, version=best)


__all__ = ["PackagesToPromoteResolver"]
