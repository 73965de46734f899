"""
Reporting utilities for promotion runs.

Summaries are logged at WARNING level so they are visible without -v.
"""

import logging
from typing import Sequence

from ..models.package import PackageIdentity
from ..models.results import PromoteResult
from ..resolution.printer import render_tree
from ..resolution.tree import PackageResolutionTree
from ..utils.logging_utils import format_count_with_unit, log_block


def log_resolution_tree(tree: PackageResolutionTree) -> None:
    """Log the resolved package tree."""
    log_block("Resolved package tree:", render_tree(tree), prefix="")


def log_packages_to_promote(packages: Sequence[PackageIdentity]) -> None:
    """Log the packages that are missing at the destination."""
    if not packages:
        logging.warning("There are no packages to promote.")
        return
    log_block(f"Found {len(packages)} package(s) to promote:", [str(identity) for identity in packages])


def log_promote_summary(result: PromoteResult) -> None:
    """
    Log the outcome of a promotion run.

    Args:
        result: Result of the run
    """
    if result.dry_run:
        logging.warning(
            "Dry run: %s would be promoted, nothing was pushed",
            format_count_with_unit(len(result.to_promote), "package"),
        )
        return

    logging.info(
        "Promotion: %d requested, %d resolved, %d promoted",
        len(result.requested),
        len(result.resolved),
        result.promoted_count,
    )


__all__ = ["log_resolution_tree", "log_packages_to_promote", "log_promote_summary"]
