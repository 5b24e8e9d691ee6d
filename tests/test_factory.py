"""Tests for the class factory and KeyOrder."""

import unittest

from bplus_index.base import ComparatorViolation, KeyOrder
from bplus_index.bplus_tree_base import BPlusNodeBase, BPlusTreeBase
from bplus_index.factory import DEFAULT_MAX_KEYS, create_bplustree, make_bplustree_classes


class TestMakeClasses(unittest.TestCase):

    def test_bound_attributes(self):
        TreeK, NodeK = make_bplustree_classes(8)
        self.assertTrue(issubclass(TreeK, BPlusTreeBase))
        self.assertTrue(issubclass(NodeK, BPlusNodeBase))
        self.assertEqual(TreeK.MAX_KEYS, 8)
        self.assertIs(TreeK.NodeClass, NodeK)
        self.assertEqual(TreeK.ORDER, KeyOrder(str))
        self.assertEqual(TreeK.__name__, "BPlusTree_K8_str")

    def test_classes_are_cached(self):
        self.assertIs(make_bplustree_classes(6)[0], make_bplustree_classes(6)[0])
        self.assertIsNot(make_bplustree_classes(6)[0], make_bplustree_classes(7)[0])
        self.assertIsNot(make_bplustree_classes(6, key_type=int)[0],
                         make_bplustree_classes(6)[0])

    def test_invalid_max_keys(self):
        for bad in (0, 1, -3):
            with self.subTest(max_keys=bad):
                with self.assertRaises(ValueError):
                    make_bplustree_classes(bad)
        for bad in ("4", 4.0, True, None):
            with self.subTest(max_keys=bad):
                with self.assertRaises(TypeError):
                    make_bplustree_classes(bad)

    def test_create_default(self):
        tree = create_bplustree()
        self.assertEqual(tree.MAX_KEYS, DEFAULT_MAX_KEYS)
        self.assertEqual(DEFAULT_MAX_KEYS, 4)
        self.assertTrue(tree.root.is_leaf)
        self.assertEqual(tree.root.keys, [])
        self.assertIsNone(tree.root.next)

    def test_trees_do_not_share_roots(self):
        a, b = create_bplustree(), create_bplustree()
        a.insert("x")
        self.assertFalse(b.search("x"))

    def test_nodes_use_slots(self):
        tree = create_bplustree()
        with self.assertRaises(AttributeError):
            tree.root.extra = 1
        with self.assertRaises(AttributeError):
            tree.extra = 1

    def test_is_leaf_fixed_at_creation(self):
        node = create_bplustree().root
        with self.assertRaises(AttributeError):
            node.is_leaf = False


class TestKeyOrder(unittest.TestCase):

    def setUp(self):
        self.order = KeyOrder(str)

    def test_check(self):
        self.order.check("a", "insert")
        with self.assertRaisesRegex(ComparatorViolation, r"insert\(\): key must be str, got int"):
            self.order.check(1, "insert")

    def test_untyped_check_accepts_anything(self):
        KeyOrder(None).check(object())

    def test_bisect(self):
        keys = ["b", "d", "d", "f"]
        self.assertEqual(self.order.bisect_left(keys, "d"), 1)
        self.assertEqual(self.order.bisect_right(keys, "d"), 3)
        self.assertEqual(self.order.bisect_left(keys, "a"), 0)
        self.assertEqual(self.order.bisect_right(keys, "z"), 4)

    def test_index(self):
        keys = ["b", "d", "d", "f"]
        self.assertEqual(self.order.index(keys, "d"), 1)
        self.assertEqual(self.order.index(keys, "c"), -1)
        self.assertEqual(self.order.index([], "c"), -1)

    def test_lt_eq(self):
        self.assertTrue(self.order.lt("a", "b"))
        self.assertFalse(self.order.lt("b", "a"))
        self.assertTrue(self.order.eq("a", "a"))

    def test_sort_key(self):
        order = KeyOrder(str, sort_key=str.lower)
        self.assertTrue(order.eq("Apple", "apple"))
        self.assertEqual(order.bisect_right(["apple", "Banana"], "BANANA"), 2)
        self.assertEqual(order.index(["apple", "Banana"], "banana"), 1)

    def test_incomparable_keys(self):
        order = KeyOrder(None)
        with self.assertRaises(ComparatorViolation):
            order.lt("a", 1)
        with self.assertRaises(ComparatorViolation):
            order.bisect_left(["a", "b"], 1)

    def test_invalid_construction(self):
        with self.assertRaises(TypeError):
            KeyOrder("str")
        with self.assertRaises(TypeError):
            KeyOrder(str, sort_key=5)


if __name__ == "__main__":
    unittest.main()
