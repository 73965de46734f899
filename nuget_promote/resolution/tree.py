"""
The resolved package graph.

A PackageResolutionTree is built once per run from what the dependency
resolver accumulated. Its invariants are checked at construction; a violation
means the resolver is broken, not that the user did something wrong.
"""

from typing import Dict, FrozenSet, Iterable, List, Mapping, Set, Tuple

from ..exceptions import TreeInvariantError
from ..models.licensing import PackageInfo
from ..models.package import PackageIdentity


class PackageResolutionTree:
    """
    Immutable view over resolved packages and their dependency edges.

    Packages that were already at the destination and whose dependencies
    were not expanded have no outgoing edges, so the tree describes what has
    to be promoted rather than the complete dependency graph.
    """

    def __init__(
        self,
        packages: Mapping[PackageIdentity, PackageInfo],
        roots: FrozenSet[PackageIdentity],
        in_target: FrozenSet[PackageIdentity],
        edges: Mapping[PackageIdentity, FrozenSet[PackageIdentity]],
    ) -> None:
        self._packages = dict(packages)
        self._roots = roots
        self._in_target = in_target
        self._edges = dict(edges)

    @classmethod
    def create(
        cls,
        packages: Iterable[PackageInfo],
        roots: Iterable[PackageIdentity],
        in_target: Iterable[PackageIdentity],
        edges: Iterable[Tuple[PackageIdentity, PackageIdentity]],
    ) -> "PackageResolutionTree":
        """
        Build and validate a resolution tree.

        Args:
            packages: Every resolved package
            roots: Identities requested directly by the caller
            in_target: Identities already present at the destination
            edges: (dependent, dependency) pairs

        Returns:
            The validated tree

        Raises:
            TreeInvariantError: If roots or in_target are not subsets of the
                packages, an edge points outside the packages, or a package is
                unreachable from the roots
        """
        package_map: Dict[PackageIdentity, PackageInfo] = {info.identity: info for info in packages}
        root_set = frozenset(roots)
        in_target_set = frozenset(in_target)

        if not root_set <= package_map.keys():
            raise TreeInvariantError("Roots are not a subset of all packages.")
        if not in_target_set <= package_map.keys():
            raise TreeInvariantError("Packages in the target feed are not a subset of all packages.")

        adjacency: Dict[PackageIdentity, Set[PackageIdentity]] = {}
        for dependent, dependency in edges:
            if dependent not in package_map or dependency not in package_map:
                raise TreeInvariantError("A dependency is pointing to a package that is not included in all packages.")
            adjacency.setdefault(dependent, set()).add(dependency)

        reachable = _reachable_from(root_set, adjacency)
        if reachable != package_map.keys():
            raise TreeInvariantError("The tree has packages unreachable from roots.")

        frozen_edges = {identity: frozenset(targets) for identity, targets in adjacency.items()}
        return cls(package_map, root_set, in_target_set, frozen_edges)

    @property
    def packages(self) -> List[PackageInfo]:
        """Every resolved package."""
        return list(self._packages.values())

    @property
    def roots(self) -> FrozenSet[PackageIdentity]:
        return self._roots

    @property
    def in_target(self) -> FrozenSet[PackageIdentity]:
        return self._in_target

    def _require(self, identity: PackageIdentity) -> None:
        if identity not in self._packages:
            raise ValueError(f"The package is not in the tree: {identity}")

    def get_dependencies(self, identity: PackageIdentity) -> FrozenSet[PackageIdentity]:
        """Dependencies recorded for a package (empty if none were expanded)."""
        self._require(identity)
        return self._edges.get(identity, frozenset())

    def is_in_target_feed(self, identity: PackageIdentity) -> bool:
        """Whether the package was already at the destination."""
        self._require(identity)
        return identity in self._in_target

    def get_package(self, identity: PackageIdentity) -> PackageInfo:
        self._require(identity)
        return self._packages[identity]

    def packages_to_promote(self) -> List[PackageInfo]:
        """Packages missing at the destination, sorted by id then version."""
        missing = [info for identity, info in self._packages.items() if identity not in self._in_target]
        return sorted(missing, key=lambda info: info.identity.sort_key)

    def __len__(self) -> int:
        return len(self._packages)


def _reachable_from(
    roots: FrozenSet[PackageIdentity], adjacency: Mapping[PackageIdentity, Set[PackageIdentity]]
) -> Set[PackageIdentity]:
    reachable: Set[PackageIdentity] = set()
    stack = list(roots)
    while stack:
        identity = stack.pop()
        if identity in reachable:
            continue
        reachable.add(identity)
        stack.extend(adjacency.get(identity, ()))
    return reachable


__all__ = ["PackageResolutionTree"]
