"""
Package resolution.

This package turns package requests into concrete identities and walks their
dependencies into a validated resolution tree.
"""

from .distinct_queue import DistinctQueue
from .packages_resolver import PackagesToPromoteResolver
from .printer import render_tree
from .request_resolver import PackageRequestResolver
from .tree import PackageResolutionTree

__all__ = [
    "DistinctQueue",
    "PackageRequestResolver",
    "PackagesToPromoteResolver",
    "PackageResolutionTree",
    "render_tree",
]
