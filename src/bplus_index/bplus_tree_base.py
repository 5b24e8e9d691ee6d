"""B+-tree base implementation"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional, Tuple, Type

from bplus_index.base import KeyOrder
from bplus_index.logging_config import get_logger

logger = get_logger("BPlusTree")


class BPlusNodeBase:
    """
    A node of a B+-tree.

    Leaves hold keys only and are chained left to right through ``next``.
    Internal nodes hold routing keys and ``len(keys) + 1`` children.
    ``next`` is a sideways reference: ownership runs strictly from parent
    to child through ``children``.
    """
    __slots__ = ("_is_leaf", "keys", "children", "next")

    def __init__(self, is_leaf: bool = False) -> None:
        self._is_leaf = bool(is_leaf)
        self.keys: List[Any] = []
        self.children: List[BPlusNodeBase] = []
        self.next: Optional[BPlusNodeBase] = None    # leaf-chain pointer

    @property
    def is_leaf(self) -> bool:
        return self._is_leaf

    def key_count(self) -> int:
        return len(self.keys)

    def __repr__(self) -> str:
        kind = "Leaf" if self._is_leaf else "Internal"
        return f"{kind}({self.keys!r})"


class BPlusTreeBase:
    """
    An in-memory B+-tree over keys of one totally ordered type.

    The factory sets:
      - MAX_KEYS  : fan-out bound; a node holding MAX_KEYS keys is full
      - ORDER     : the KeyOrder used for every comparison
      - NodeClass : which BPlusNodeBase subclass to build nodes from

    Attributes:
        root (BPlusNodeBase): Owning reference to the root. Starts as an
            empty leaf and is replaced, never mutated into an internal
            node, when it overflows.
    """
    __slots__ = ("root",)

    # set by factory
    MAX_KEYS: int
    ORDER: KeyOrder
    NodeClass: Type[BPlusNodeBase]

    def __init__(self) -> None:
        self.root: BPlusNodeBase = self.NodeClass(is_leaf=True)

    def is_empty(self) -> bool:
        root = self.root
        if root.is_leaf:
            return not root.keys
        # Deletion never removes leaves, so a tall tree may hold no keys
        return not any(leaf.keys for leaf in self.iter_leaf_nodes())

    def __str__(self):
        return (f"{type(self).__name__}(max_keys={self.MAX_KEYS}, "
                f"height={self.height()}, items={self.item_count()})")

    __repr__ = __str__

    # Public API
    def search(self, key: Any) -> bool:
        """
        Return whether ``key`` is present. No side effects.

        Raises:
            ComparatorViolation: If ``key`` cannot be ordered against the
                tree's keys.
        """
        self.ORDER.check(key, "search")
        _, pos = self._locate(key)
        return pos >= 0

    def insert(self, key: Any) -> BPlusTreeBase:
        """
        Public method (O(log n)): Insert ``key`` into the tree.

        Splitting is eager and top-down: every full node met on the way
        down is split before it is entered, so the target leaf always has
        room. The tree grows in height only here, when the root is full.
        Duplicate keys are kept, after any equal keys already present.

        Returns:
            BPlusTreeBase: The tree itself.

        Raises:
            ComparatorViolation: If ``key`` cannot be ordered against the
                tree's keys.
        """
        self.ORDER.check(key, "insert")
        root = self.root
        if len(root.keys) < self.MAX_KEYS:
            self._insert_into(root, key)
            return self

        new_root = self.NodeClass(is_leaf=False)
        new_root.children.append(root)
        self._split_child(new_root, 0)
        self.root = new_root
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Root split on {key!r}: new root {new_root.keys!r}, height {self.height()}")
        self._insert_into(new_root, key)
        return self

    def delete(self, key: Any) -> bool:
        """
        Remove the first occurrence of ``key`` from its leaf.

        No merging, borrowing or routing-key repair happens afterwards: a
        leaf may fall below half occupancy or become empty, and routing
        keys above it stay as they were.

        Returns:
            bool: True if a key was removed, False if it was not found.

        Raises:
            ComparatorViolation: If ``key`` cannot be ordered against the
                tree's keys.
        """
        self.ORDER.check(key, "delete")
        leaf, pos = self._locate(key)
        if pos < 0:
            logger.info(f"Cannot delete {key!r}: not found")
            return False
        del leaf.keys[pos]
        logger.info(f"Deleted {key!r}")
        return True

    def __contains__(self, key: Any) -> bool:
        return self.search(key)

    def __iter__(self) -> Iterator[Any]:
        """Yield all keys in ascending order by walking the leaf chain."""
        for leaf in self.iter_leaf_nodes():
            yield from leaf.keys

    def __len__(self) -> int:
        return self.item_count()

    def keys(self) -> List[Any]:
        return list(self)

    def item_count(self) -> int:
        return sum(len(leaf.keys) for leaf in self.iter_leaf_nodes())

    def iter_leaf_nodes(self) -> Iterator[BPlusNodeBase]:
        """
        Iterates over all leaves, starting from the leftmost leaf and
        following `next` pointers.

        Yields:
            BPlusNodeBase: Each leaf in left-to-right order.
        """
        current = self.root
        while not current.is_leaf:
            current = current.children[0]

        while current is not None:
            yield current
            current = current.next

    def height(self) -> int:
        """Number of levels from the root down to the leaves (1 for a lone leaf)."""
        levels = 1
        node = self.root
        while not node.is_leaf:
            node = node.children[0]
            levels += 1
        return levels

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        from bplus_index.display import print_structure
        return print_structure(self, indent=indent, max_depth=max_depth)

    # Private Methods
    def _insert_into(self, node: BPlusNodeBase, key: Any) -> None:
        """Insert ``key`` below ``node``, which must not be full."""
        order = self.ORDER
        max_keys = self.MAX_KEYS

        while not node.is_leaf:
            i = order.bisect_right(node.keys, key)
            if len(node.children[i].keys) >= max_keys:
                self._split_child(node, i)
                # The promoted key now sits at i; equal keys belong right of it
                if not order.lt(key, node.keys[i]):
                    i += 1
            node = node.children[i]

        node.keys.insert(order.bisect_right(node.keys, key), key)

    def _split_child(self, parent: BPlusNodeBase, index: int) -> BPlusNodeBase:
        """
        Split ``parent.children[index]`` into itself and a new right sibling.

        Leaves copy their first right-half key up into the parent and keep
        it, so every key stays reachable at leaf level. Internal nodes push
        their middle key up and drop it.

        Returns:
            BPlusNodeBase: The new right sibling.
        """
        node = parent.children[index]
        mid = (self.MAX_KEYS + 1) // 2
        if len(node.keys) <= mid:
            raise ValueError(
                f"cannot split node with {len(node.keys)} keys at mid={mid}"
            )

        sibling = self.NodeClass(is_leaf=node.is_leaf)
        promoted = node.keys[mid]

        if node.is_leaf:
            sibling.keys = node.keys[mid:]
            del node.keys[mid:]
            # Link leaves
            sibling.next = node.next
            node.next = sibling
        else:
            sibling.keys = node.keys[mid + 1:]
            sibling.children = node.children[mid + 1:]
            del node.keys[mid:]
            del node.children[mid + 1:]

        parent.keys.insert(index, promoted)
        parent.children.insert(index + 1, sibling)

        if logger.isEnabledFor(logging.DEBUG):
            kind = "leaf" if node.is_leaf else "internal"
            logger.debug(f"Split {kind} node: {node.keys!r} | {promoted!r} | {sibling.keys!r}")
        return sibling

    def _descend_to_leaf(self, key: Any) -> BPlusNodeBase:
        """Return the leftmost leaf that may hold ``key``."""
        order = self.ORDER
        node = self.root
        while not node.is_leaf:
            node = node.children[order.bisect_left(node.keys, key)]
        return node

    def _locate(self, key: Any) -> Tuple[Optional[BPlusNodeBase], int]:
        """
        Find the first occurrence of ``key`` at leaf level.

        Descends to the leftmost candidate leaf, then follows the chain past
        leaves whose keys are all smaller (including leaves emptied by
        deletion and leaves left of a copied-up boundary key).

        Returns:
            (leaf, index) of the match, or (last leaf inspected, -1).
        """
        order = self.ORDER
        leaf = self._descend_to_leaf(key)
        while True:
            keys = leaf.keys
            i = order.bisect_left(keys, key)
            if i < len(keys):
                # keys[i] is the smallest key >= key in the whole chain
                return leaf, (i if order.eq(keys[i], key) else -1)
            if leaf.next is None:
                return leaf, -1
            leaf = leaf.next
