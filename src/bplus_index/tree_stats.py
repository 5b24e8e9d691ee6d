"""Statistics and invariant checking for B+-tree structures."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bplus_index.logging_config import get_logger

if TYPE_CHECKING:
    from bplus_index.bplus_tree_base import BPlusNodeBase, BPlusTreeBase

logger = get_logger(__name__)


@dataclass
class Stats:
    """Aggregated statistics for a B+-tree."""

    height: int
    node_count: int
    leaf_count: int
    internal_count: int
    item_count: int
    routing_key_count: int
    least_key: Any | None
    greatest_key: Any | None
    is_balanced: bool
    is_search_tree: bool
    node_keys_sorted: bool
    children_count_ok: bool
    max_keys_respected: bool
    linked_leaf_nodes: bool
    leaf_keys_in_order: bool
    # Informational only: deletion never restores the lower occupancy bound
    min_occupancy_met: bool = True


def _node_stats(t: BPlusTreeBase, node: BPlusNodeBase, is_root: bool, leaves: list) -> Stats:
    order = t.ORDER
    max_keys = t.MAX_KEYS
    min_keys = math.ceil(max_keys / 2)
    keys = node.keys

    sorted_ok = all(not order.lt(keys[i], keys[i - 1]) for i in range(1, len(keys)))

    stats = Stats(
        height=1,
        node_count=1,
        leaf_count=0,
        internal_count=0,
        item_count=0,
        routing_key_count=0,
        least_key=None,
        greatest_key=None,
        is_balanced=True,
        is_search_tree=sorted_ok,
        node_keys_sorted=sorted_ok,
        children_count_ok=True,
        max_keys_respected=len(keys) <= max_keys,
        linked_leaf_nodes=True,
        leaf_keys_in_order=True,
        min_occupancy_met=is_root or len(keys) >= min_keys,
    )

    # ---------- leaf: base values ---------------------------------
    if node.is_leaf:
        leaves.append(node)
        stats.leaf_count = 1
        stats.item_count = len(keys)
        stats.children_count_ok = not node.children
        if keys:
            stats.least_key = keys[0]
            stats.greatest_key = keys[-1]
        return stats

    # ---------- internal: recurse and aggregate -------------------
    stats.internal_count = 1
    stats.routing_key_count = len(keys)
    stats.children_count_ok = len(node.children) == len(keys) + 1
    child_stats = [_node_stats(t, child, False, leaves) for child in node.children]

    heights = {cs.height for cs in child_stats}
    stats.is_balanced = len(heights) == 1 and all(cs.is_balanced for cs in child_stats)
    stats.height = 1 + max(heights)

    for i, cs in enumerate(child_stats):
        stats.node_count += cs.node_count
        stats.leaf_count += cs.leaf_count
        stats.internal_count += cs.internal_count
        stats.item_count += cs.item_count
        stats.routing_key_count += cs.routing_key_count

        stats.node_keys_sorted &= cs.node_keys_sorted
        stats.children_count_ok &= cs.children_count_ok
        stats.max_keys_respected &= cs.max_keys_respected
        stats.min_occupancy_met &= cs.min_occupancy_met
        stats.is_search_tree &= cs.is_search_tree

        # children[i] <= keys[i] <= children[i + 1]
        if stats.is_search_tree and cs.least_key is not None:
            if i < len(keys) and order.lt(keys[i], cs.greatest_key):
                stats.is_search_tree = False
            elif i > 0 and i - 1 < len(keys) and order.lt(cs.least_key, keys[i - 1]):
                stats.is_search_tree = False

        # ----- LEAST / GREATEST (children may be empty after deletes) -----
        if cs.least_key is not None:
            if stats.least_key is None:
                stats.least_key = cs.least_key
            stats.greatest_key = cs.greatest_key

    return stats


def tree_stats_(t: BPlusTreeBase) -> Stats:
    """
    Returns aggregated statistics for a B+-tree in **O(n)** time.

    The recursive pass collects the leaves in depth-first order; the root
    level then walks the `next` chain once and checks it visits exactly
    those leaves, in that order, with keys ascending across the chain.
    """
    leaves: list = []
    stats = _node_stats(t, t.root, True, leaves)

    # ---------- leaf walk ONCE at the root -----------------------------
    order = t.ORDER
    chain = list(t.iter_leaf_nodes())
    stats.linked_leaf_nodes = (
        len(chain) == len(leaves)
        and all(a is b for a, b in zip(chain, leaves))
    )

    prev_key = None
    keys_in_order = True
    chain_items = 0
    for leaf in chain:
        for key in leaf.keys:
            chain_items += 1
            if prev_key is not None and order.lt(key, prev_key):
                keys_in_order = False
            prev_key = key
    stats.leaf_keys_in_order = keys_in_order

    if chain_items != stats.item_count:
        stats.linked_leaf_nodes = False

    return stats
