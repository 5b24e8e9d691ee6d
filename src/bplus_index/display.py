"""Pretty-printing and display utilities for B+-tree structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from bplus_index.bplus_tree_base import BPlusNodeBase, BPlusTreeBase


# ANSI colour codes
PRIMARY = '\033[32m'    # green
RESET = '\033[0m'

SEP = " | "


def _node_text(node: BPlusNodeBase) -> str:
    return "[" + SEP.join(str(k) for k in node.keys) + "]"


def print_pretty(tree: Optional[BPlusTreeBase], color: bool = False) -> str:
    """
    Prints a B+-tree so:
      • Lines go from the root level down to the leaves.
      • Within a line, nodes appear left→right in traversal order.
    """
    from bplus_index.bplus_tree_base import BPlusTreeBase

    if tree is None:
        return f"{type(tree).__name__}: None"

    if not isinstance(tree, BPlusTreeBase):
        raise TypeError(f"print_pretty() expects BPlusTreeBase, got {type(tree).__name__}")

    tree_type = type(tree).__name__
    if tree.is_empty() and tree.root.is_leaf:
        return f"{tree_type}: Empty"

    out_lines = []
    level = [tree.root]
    depth = 0
    while level:
        label = f"Level {depth}"
        if color:
            label = f"{PRIMARY}{label}{RESET}"
        out_lines.append(f"{label}: " + "  ".join(_node_text(n) for n in level))
        level = [child for n in level for child in n.children]
        depth += 1

    return tree_type + "\n" + "\n".join(out_lines) + "\n"


def collect_leaf_keys(tree: BPlusTreeBase) -> list[Any]:
    """Collect all leaf keys of a B+-tree by walking the leaf chain."""
    out = []
    for leaf in tree.iter_leaf_nodes():
        out.extend(leaf.keys)
    return out


def print_structure(
    tree: BPlusTreeBase,
    indent: int = 0,
    max_depth: Optional[int] = None,
) -> str:
    """Return a debugging-oriented structural dump of a B+-tree.

    Recursively prints each node's kind and keys; leaves also show the
    keys of the leaf their `next` pointer refers to.
    """
    prefix = ' ' * indent
    if tree is None:
        return f"{prefix}Empty tree"

    result = [f"{prefix}{type(tree).__name__}(max_keys={tree.MAX_KEYS}, height={tree.height()})"]

    def dump(node: BPlusNodeBase, depth: int) -> None:
        pad = prefix + ' ' * (4 * (depth + 1))
        if max_depth is not None and depth > max_depth:
            result.append(f"{pad}... (max depth reached)")
            return
        if node.is_leaf:
            result.append(f"{pad}Leaf(keys={node.keys!r})")
            if node.next is not None:
                result.append(f"{pad}    Next: Leaf(keys={node.next.keys!r})")
            else:
                result.append(f"{pad}    Next: Empty")
            return
        result.append(f"{pad}Internal(keys={node.keys!r}, children={len(node.children)})")
        for child in node.children:
            dump(child, depth + 1)

    dump(tree.root, 0)
    return "\n".join(result)
