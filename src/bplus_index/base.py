"""Shared primitives: exceptions and the key-order capability."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Any, Callable, Optional, Sequence


class BPlusTreeError(Exception):
    """Base class for all errors raised by bplus_index."""


class ComparatorViolation(BPlusTreeError, TypeError):
    """Raised when a key cannot be ordered against the tree's keys."""


class KeyOrder:
    """
    Total order over the keys of one tree.

    A tree is bound to exactly one ``KeyOrder`` when its classes are built.
    ``key_type`` rejects foreign keys before they reach a node, which matters
    for the first key of an empty tree where no comparison would catch it.
    ``sort_key`` optionally maps a key to the value actually compared.

    Attributes:
        key_type: Required key class, or None to accept anything orderable.
        sort_key: Optional one-argument function applied before comparing.
    """
    __slots__ = ("key_type", "sort_key")

    def __init__(
        self,
        key_type: Optional[type] = str,
        sort_key: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        if key_type is not None and not isinstance(key_type, type):
            raise TypeError(f"key_type must be a type or None, got {key_type!r}")
        if sort_key is not None and not callable(sort_key):
            raise TypeError(f"sort_key must be callable, got {sort_key!r}")
        self.key_type = key_type
        self.sort_key = sort_key

    def check(self, key: Any, op: str = "key") -> None:
        """Raise :class:`ComparatorViolation` if ``key`` has the wrong type."""
        if self.key_type is not None and not isinstance(key, self.key_type):
            raise ComparatorViolation(
                f"{op}(): key must be {self.key_type.__name__}, got {type(key).__name__}"
            )

    def _violation(self, exc: TypeError, a: Any, b: Any) -> ComparatorViolation:
        return ComparatorViolation(
            f"cannot order {type(a).__name__} {a!r} against {type(b).__name__} {b!r}: {exc}"
        )

    def lt(self, a: Any, b: Any) -> bool:
        sk = self.sort_key
        try:
            if sk is None:
                return a < b
            return sk(a) < sk(b)
        except TypeError as exc:
            raise self._violation(exc, a, b) from exc

    def eq(self, a: Any, b: Any) -> bool:
        """Order equality: neither key sorts before the other."""
        return not self.lt(a, b) and not self.lt(b, a)

    def bisect_left(self, keys: Sequence[Any], key: Any) -> int:
        """Index of the first key that is not less than ``key``."""
        sk = self.sort_key
        try:
            if sk is None:
                return bisect_left(keys, key)
            return bisect_left(keys, sk(key), key=sk)
        except TypeError as exc:
            raise self._violation(exc, key, keys) from exc

    def bisect_right(self, keys: Sequence[Any], key: Any) -> int:
        """Index just past the last key that is not greater than ``key``."""
        sk = self.sort_key
        try:
            if sk is None:
                return bisect_right(keys, key)
            return bisect_right(keys, sk(key), key=sk)
        except TypeError as exc:
            raise self._violation(exc, key, keys) from exc

    def index(self, keys: Sequence[Any], key: Any) -> int:
        """Position of the first exact match of ``key`` in sorted ``keys``, or -1."""
        i = self.bisect_left(keys, key)
        if i < len(keys) and self.eq(keys[i], key):
            return i
        return -1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyOrder):
            return NotImplemented
        return self.key_type is other.key_type and self.sort_key is other.sort_key

    def __hash__(self) -> int:
        return hash((self.key_type, self.sort_key))

    def __repr__(self) -> str:
        kt = self.key_type.__name__ if self.key_type is not None else None
        return f"KeyOrder(key_type={kt}, sort_key={self.sort_key!r})"
