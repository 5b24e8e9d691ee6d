"""Unified test base classes for B+-tree tests."""

import logging
import unittest

from bplus_index.display import print_structure
from bplus_index.factory import make_bplustree_classes
from bplus_index.invariants import check_leaf_keys
from bplus_index.logging_config import get_test_logger
from bplus_index.tree_stats import tree_stats_
from tests.utils import assert_tree_invariants_tc

logger = get_test_logger("TestBase")


class BaseTreeTestCase(unittest.TestCase):
    """
    Base class for tree tests.

    ``tearDown`` re-validates every structural invariant of ``self.tree``.
    Tests may additionally set ``expected_leaf_keys`` (compared as a
    multiset against the leaf chain), ``expected_height`` and
    ``expected_item_count``.
    """

    MAX_KEYS = 4

    def setUp(self):
        self.TreeClass, self.NodeClass = make_bplustree_classes(self.MAX_KEYS)
        self.tree = self.TreeClass()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Created tree with max_keys={self.MAX_KEYS}, using class {self.TreeClass.__name__}")

    def insert_all(self, keys):
        for key in keys:
            self.tree.insert(key)
        return self.tree

    def tearDown(self):
        if getattr(self, 'tree', None) is None:
            return

        stats = tree_stats_(self.tree)
        structure = print_structure(self.tree)
        assert_tree_invariants_tc(self, self.tree, stats, structure)

        expected_item_count = getattr(self, 'expected_item_count', None)
        if expected_item_count is not None:
            self.assertEqual(
                stats.item_count, expected_item_count,
                f"Item count {stats.item_count} does not match "
                f"expected {expected_item_count}\n"
                f"Tree structure:\n{structure}"
            )

        expected_height = getattr(self, 'expected_height', None)
        if expected_height is not None:
            self.assertEqual(
                stats.height, expected_height,
                f"Height {stats.height} does not match expected {expected_height}"
            )

        # Leaf invariants
        expected_keys = getattr(self, 'expected_leaf_keys', None)
        keys, presence_ok, order_ok = check_leaf_keys(self.tree, expected_keys)

        self.assertTrue(order_ok, f"Leaf keys must be in sorted order\n{structure}")
        if expected_keys is not None:
            self.assertTrue(
                presence_ok,
                f"Leaf keys {keys} do not match expected {expected_keys}"
            )
