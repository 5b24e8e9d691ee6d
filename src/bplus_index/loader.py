"""Bulk loading of keys from a newline-delimited text source."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, List, Union

from bplus_index.logging_config import get_logger

if TYPE_CHECKING:
    from bplus_index.bplus_tree_base import BPlusTreeBase

logger = get_logger(__name__)

DEFAULT_WORDS_PATH = Path(__file__).resolve().parent / "data" / "words.txt"


def read_keys(path: Union[str, os.PathLike]) -> List[str]:
    """
    Read one key per line, trimming surrounding whitespace and dropping
    blank lines. The whole source is read before anything is returned.

    Raises:
        OSError: If the file is missing or unreadable.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = f.read()
    return [line.strip() for line in data.splitlines() if line.strip()]


def load_keys_from_file(path: Union[str, os.PathLike], tree: BPlusTreeBase) -> int:
    """
    Insert every key of ``path`` into ``tree`` in source order.

    A missing or unreadable source is reported and leaves the tree
    untouched: nothing is inserted unless the whole file was read.

    Returns:
        int: Number of keys inserted (0 on a source error).
    """
    try:
        keys = read_keys(path)
    except FileNotFoundError:
        logger.error(f"File not found: {path}")
        return 0
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read {path}: {e}")
        return 0

    insert = tree.insert
    for key in keys:
        insert(key)

    logger.info(f"Loaded {len(keys)} keys from {path}")
    return len(keys)
