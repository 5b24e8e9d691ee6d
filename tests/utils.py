"""Utility functions for testing BPlusTree invariants."""

from typing import Any, List, Optional

from bplus_index.bplus_tree_base import BPlusNodeBase, BPlusTreeBase
from bplus_index.invariants import TREE_FLAGS
from bplus_index.tree_stats import Stats


def assert_tree_invariants_tc(tc, t: BPlusTreeBase, stats: Stats, err_msg: Optional[str] = "") -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False \n\n{err_msg}"
        )

    tc.assertGreater(
        stats.height, 0,
        f"Invariant failed: height={stats.height} ≤ 0\n\n{err_msg}"
    )
    tc.assertEqual(
        stats.node_count, stats.leaf_count + stats.internal_count,
        f"Invariant failed: node_count does not add up\n\n{err_msg}"
    )
    tc.assertEqual(
        stats.height, t.height(),
        f"Invariant failed: stats.height={stats.height} ≠ t.height()={t.height()}\n\n{err_msg}"
    )
    tc.assertEqual(
        stats.item_count, t.item_count(),
        f"Invariant failed: stats.item_count={stats.item_count} ≠ "
        f"t.item_count()={t.item_count()}\n\n{err_msg}"
    )
    if stats.item_count > 0:
        tc.assertIsNotNone(
            stats.least_key,
            f"Invariant failed: least_key is None for non-empty tree\n\n{err_msg}"
        )
        tc.assertIsNotNone(
            stats.greatest_key,
            f"Invariant failed: greatest_key is None for non-empty tree\n\n{err_msg}"
        )


def snapshot(node: BPlusNodeBase) -> Any:
    """Nested (identity, keys, next-identity, children) picture of a subtree."""
    return (
        id(node),
        list(node.keys),
        id(node.next) if node.next is not None else None,
        [snapshot(c) for c in node.children],
    )


def leaf_key_lists(tree: BPlusTreeBase) -> List[List[Any]]:
    """Keys of every leaf, in chain order."""
    return [list(leaf.keys) for leaf in tree.iter_leaf_nodes()]


def padded(n: int, width: int = 3) -> List[str]:
    """``n`` string keys whose lexicographic order matches numeric order."""
    return [f"{i:0{width}d}" for i in range(n)]
