"""Text rendering of resolution trees."""

from typing import List, Set

from ..models.package import PackageIdentity
from .tree import PackageResolutionTree

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def _label(tree: PackageResolutionTree, identity: PackageIdentity) -> str:
    if tree.is_in_target_feed(identity):
        return f"{identity} (already in target)"
    return str(identity)


def render_tree(tree: PackageResolutionTree) -> List[str]:
    """
    Render a resolution tree as lines of text.

    Roots and dependencies are visited in id/version order. A package that
    was printed before is shown again with "(expanded above)" and its
    dependencies are not repeated, so shared dependencies and cycles print
    once.

    Args:
        tree: The tree to render

    Returns:
        Lines without trailing newlines
    """
    lines: List[str] = []
    expanded: Set[PackageIdentity] = set()

    def visit(identity: PackageIdentity, prefix: str, is_last: bool) -> None:
        connector = LAST_BRANCH if is_last else BRANCH
        dependencies = sorted(tree.get_dependencies(identity), key=lambda dep: dep.sort_key)

        if identity in expanded and dependencies:
            lines.append(f"{prefix}{connector}{_label(tree, identity)} (expanded above)")
            return

        lines.append(f"{prefix}{connector}{_label(tree, identity)}")
        expanded.add(identity)

        child_prefix = prefix + (SPACE if is_last else PIPE)
        for index, dependency in enumerate(dependencies):
            visit(dependency, child_prefix, index == len(dependencies) - 1)

    roots = sorted(tree.roots, key=lambda root: root.sort_key)
    for index, root in enumerate(roots):
        visit(root, "", index == len(roots) - 1)

    return lines


__all__ = ["render_tree"]
