"""
bplus_index — In-memory B+-tree ordered index.

Quick-start imports::

    from bplus_index import create_bplustree

    tree = create_bplustree(max_keys=4)
    tree.insert("apple")
    tree.search("apple")   # True
    tree.delete("apple")   # True
"""

from bplus_index.base import BPlusTreeError, ComparatorViolation, KeyOrder
from bplus_index.bplus_tree_base import BPlusNodeBase, BPlusTreeBase
from bplus_index.display import collect_leaf_keys, print_pretty, print_structure
from bplus_index.factory import DEFAULT_MAX_KEYS, create_bplustree, make_bplustree_classes
from bplus_index.invariants import (
    InvariantError,
    assert_tree_invariants_raise,
    check_leaf_keys,
)
from bplus_index.loader import load_keys_from_file, read_keys
from bplus_index.shell import Shell

# Stats & invariants
from bplus_index.tree_stats import Stats, tree_stats_

__all__ = [
    "BPlusNodeBase",
    "BPlusTreeBase",
    "BPlusTreeError",
    "ComparatorViolation",
    "DEFAULT_MAX_KEYS",
    "InvariantError",
    "KeyOrder",
    "Shell",
    # Stats & invariants
    "Stats",
    "assert_tree_invariants_raise",
    "check_leaf_keys",
    "collect_leaf_keys",
    "create_bplustree",
    "load_keys_from_file",
    "make_bplustree_classes",
    "print_pretty",
    "print_structure",
    "read_keys",
    "tree_stats_",
]
