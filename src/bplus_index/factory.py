"""BPlusTree factory module."""

from typing import Any, Callable, Dict, Optional, Tuple, Type

from bplus_index.base import KeyOrder
from bplus_index.bplus_tree_base import BPlusNodeBase, BPlusTreeBase

DEFAULT_MAX_KEYS = 4

# Cache for specialized classes, one pair per (max_keys, key_type, sort_key)
_CLASS_CACHE: Dict[Tuple[int, Optional[type], Optional[Callable]], Tuple[type, type]] = {}


def make_bplustree_classes(
    max_keys: int = DEFAULT_MAX_KEYS,
    key_type: Optional[type] = str,
    sort_key: Optional[Callable[[Any], Any]] = None,
) -> Tuple[Type[BPlusTreeBase], Type[BPlusNodeBase]]:
    """
    Factory function to generate BPlusTree and node classes specialized
    for a given fan-out and key order.

    Args:
        max_keys: Maximum number of keys per node before it is split (>= 2)
        key_type: Class every key must be an instance of, or None
        sort_key: Optional function mapping a key to its comparison value

    Returns:
        BPlusTreeK: Subclass of BPlusTreeBase with MAX_KEYS, ORDER and NodeClass bound
        BPlusNodeK: Subclass of BPlusNodeBase
    """
    if isinstance(max_keys, bool) or not isinstance(max_keys, int):
        raise TypeError(f"max_keys must be an int, got {type(max_keys).__name__}")
    if max_keys < 2:
        raise ValueError(f"max_keys must be >= 2, got {max_keys}")

    cache_key = (max_keys, key_type, sort_key)
    if cache_key in _CLASS_CACHE:
        return _CLASS_CACHE[cache_key]

    order = KeyOrder(key_type, sort_key)
    type_name = key_type.__name__ if key_type is not None else "Any"

    # 1) Node class
    BPlusNodeK = type(
        f"BPlusNode_K{max_keys}_{type_name}",
        (BPlusNodeBase,),
        {"__slots__": ()},
    )

    # 2) Tree class bound to the node class and key order
    BPlusTreeK = type(
        f"BPlusTree_K{max_keys}_{type_name}",
        (BPlusTreeBase,),
        {
            "MAX_KEYS": max_keys,
            "ORDER": order,
            "NodeClass": BPlusNodeK,
            "__slots__": (),
        },
    )

    _CLASS_CACHE[cache_key] = (BPlusTreeK, BPlusNodeK)
    return BPlusTreeK, BPlusNodeK


def create_bplustree(
    max_keys: int = DEFAULT_MAX_KEYS,
    key_type: Optional[type] = str,
    sort_key: Optional[Callable[[Any], Any]] = None,
) -> BPlusTreeBase:
    """
    Create a new empty BPlusTree.

    Args:
        max_keys: Maximum number of keys per node (default: 4)
        key_type: Class every key must be an instance of (default: str)
        sort_key: Optional function mapping a key to its comparison value

    Returns:
        A new empty tree whose root is a single empty leaf
    """
    BPlusTreeK, _ = make_bplustree_classes(max_keys, key_type, sort_key)
    return BPlusTreeK()
