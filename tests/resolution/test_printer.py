"""Tests for resolution tree rendering."""

from fakes import identity

from nuget_promote.models import PackageInfo
from nuget_promote.resolution import PackageResolutionTree, render_tree

A = identity("A", "1.0.0")
B = identity("B", "1.0.0")
C = identity("C", "2.0.0")
D = identity("D", "1.0.0")


def build(packages, roots, in_target, edges):
    return PackageResolutionTree.create([PackageInfo(identity=p) for p in packages], roots, in_target, edges)


class TestRenderTree:
    """Tests for render_tree()."""

    def test_nested_tree(self):
        """Test branches and indentation of a small tree."""
        tree = build([A, B, C, D], [A, D], [C], [(A, B), (A, C)])

        assert render_tree(tree) == [
            "├── A 1.0.0",
            "│   ├── B 1.0.0",
            "│   └── C 2.0.0 (already in target)",
            "└── D 1.0.0",
        ]

    def test_shared_dependency_expanded_once(self):
        """Test that a repeated subtree is marked instead of printed again."""
        tree = build([A, B, C, D], [A, B], [], [(A, C), (B, C), (C, D)])

        assert render_tree(tree) == [
            "├── A 1.0.0",
            "│   └── C 2.0.0",
            "│       └── D 1.0.0",
            "└── B 1.0.0",
            "    └── C 2.0.0 (expanded above)",
        ]

    def test_cycle(self):
        """Test that cycles do not recurse forever."""
        tree = build([A, B], [A], [], [(A, B), (B, A)])

        assert render_tree(tree) == [
            "└── A 1.0.0",
            "    └── B 1.0.0",
            "        └── A 1.0.0 (expanded above)",
        ]
