"""Shared invariant-checking utilities.

This module provides tree invariant validation that can be used by both
the stats scripts and the test suite.
"""

from __future__ import annotations

import collections
from typing import TYPE_CHECKING, Any

from bplus_index.logging_config import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from bplus_index.bplus_tree_base import BPlusTreeBase
    from bplus_index.tree_stats import Stats

TREE_FLAGS = (
    "is_balanced",
    "is_search_tree",
    "node_keys_sorted",
    "children_count_ok",
    "max_keys_respected",
    "linked_leaf_nodes",
    "leaf_keys_in_order",
)


class InvariantError(Exception):
    """Raised when a B+-tree invariant is violated."""


def assert_tree_invariants_raise(
    t: BPlusTreeBase,
    stats: Stats,
) -> None:
    """Check all invariants, raising :class:`InvariantError` on the first failure."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            raise InvariantError(f"Invariant failed: {flag} is False")

    if stats.height <= 0:
        raise InvariantError(f"Invariant failed: height={stats.height} ≤ 0")
    if stats.leaf_count <= 0:
        raise InvariantError(f"Invariant failed: leaf_count={stats.leaf_count} ≤ 0")
    if stats.node_count != stats.leaf_count + stats.internal_count:
        raise InvariantError(
            f"Invariant failed: node_count={stats.node_count} ≠ "
            f"leaf_count + internal_count={stats.leaf_count + stats.internal_count}"
        )

    if stats.item_count > 0:
        if stats.least_key is None:
            raise InvariantError("Invariant failed: least_key is None for non-empty tree")
        if stats.greatest_key is None:
            raise InvariantError("Invariant failed: greatest_key is None for non-empty tree")

    size = t.item_count()
    if size != stats.item_count:
        raise InvariantError(
            f"Invariant failed: t.item_count()={size} ≠ stats.item_count={stats.item_count}"
        )


def check_leaf_keys(
    tree: BPlusTreeBase,
    expected_keys: list[Any] | None = None,
) -> tuple[list[Any], bool, bool]:
    """Traverse the leaf chain and validate keys.

    ``expected_keys`` is compared as a multiset, so duplicates must appear
    exactly as often as they were inserted and not yet deleted.

    Returns
    -------
    (keys, presence_ok, order_ok)
    """
    order = tree.ORDER

    keys: list[Any] = []
    order_ok = True

    prev_key = None
    for leaf in tree.iter_leaf_nodes():
        for key in leaf.keys:
            if prev_key is not None and order.lt(key, prev_key):
                order_ok = False
            keys.append(key)
            prev_key = key

    presence_ok = True
    if expected_keys is not None:
        presence_ok = collections.Counter(keys) == collections.Counter(expected_keys)

    return keys, presence_ok, order_ok
