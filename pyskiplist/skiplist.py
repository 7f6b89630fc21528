"""Probabilistic skip list mapping sorted keys to arbitrary values.

The list is meant to back a memtable or an in-memory index, so it only
covers point operations plus ordered iteration:

Complexities (average case):
    • search   – O(log n)
    • insert   – O(log n)
    • delete   – O(log n)
    • iterate  – O(n)

Tower heights come from repeated fair coin flips capped at ``max_level``, so
P(level >= k) = 2^-k for k < max_level.

Not thread-safe: callers embedding the list in a concurrent system must
serialise access themselves.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from typing import Generic, Optional, TypeVar

from .node import Node

__all__ = ["SkipList"]

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

_DEFAULT_MAX_LEVEL = 16  # Supports > 65k elements on average.
_P = 0.5


class SkipList(Generic[K, V]):
    """Ordered key/value container backed by a skip list.

    Parameters
    ----------
    max_level: int
        Highest level index a tower may reach (0-based, inclusive).
    rng: random.Random | None
        Source of coin flips; pass a seeded instance for reproducible
        tower heights.
    """

    def __init__(self, max_level: int = _DEFAULT_MAX_LEVEL, *, rng: Optional[random.Random] = None):
        if isinstance(max_level, bool) or not isinstance(max_level, int):
            raise TypeError(f"max_level must be an int, got {type(max_level).__name__}")
        if max_level < 0:
            raise ValueError(f"max_level must be >= 0, got {max_level}")
        self._max_level = max_level
        self._level = 0
        self._size = 0
        self._random = rng.random if rng is not None else random.random
        self._header: Node[K, V] = Node(None, None, max_level)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def level(self) -> int:
        """Highest level currently populated by a real node."""
        return self._level

    @property
    def header(self) -> Node[K, V]:
        return self._header

    # ------------------------------------------------------------------
    # Leveling
    # ------------------------------------------------------------------
    def random_level(self) -> int:
        lvl = 0
        while lvl < self._max_level and self._random() < _P:
            lvl += 1
        return lvl

    def _find_update(self, key: K) -> tuple[list[Node[K, V]], Optional[Node[K, V]]]:
        """Descend towards ``key`` recording the last node before it on each level.

        Returns the update vector (one slot per level up to ``max_level``,
        slots above the current level point at the header) and the level-0
        successor of the final position.
        """
        update: list[Node[K, V]] = [self._header] * (self._max_level + 1)
        x = self._header
        for i in range(self._level, -1, -1):
            while (nxt := x.forward[i]) and nxt.key < key:  # type: ignore[operator]
                x = nxt
            update[i] = x
        return update, x.forward[0]

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    def insert(self, key: K, value: V) -> bool:
        """Insert ``key`` or overwrite its value.

        Returns ``True`` when a new node was created and ``False`` when an
        existing key had its value replaced.
        """
        update, x = self._find_update(key)
        if x and x.key == key:  # Update
            x.set_value(value)
            logger.debug("Updated key: %r, value: %r", key, value)
            return False
        lvl = self.random_level()
        if lvl > self._level:
            for i in range(self._level + 1, lvl + 1):
                update[i] = self._header
            self._level = lvl
        new_node: Node[K, V] = Node(key, value, lvl)
        for i in range(lvl + 1):
            new_node.forward[i] = update[i].forward[i]
            update[i].forward[i] = new_node
        self._size += 1
        logger.debug("Inserted key: %r, value: %r at level %d", key, value, lvl)
        return True

    def delete(self, key: K) -> bool:
        """Remove ``key``; returns ``False`` if it was not present."""
        update, x = self._find_update(key)
        if not (x and x.key == key):
            logger.debug("Not found key: %r", key)
            return False
        for i in range(self._level + 1):
            # Towers are contiguous from level 0, so the first miss ends the splice.
            if update[i].forward[i] is not x:
                break
            update[i].forward[i] = x.forward[i]
        while self._level > 0 and self._header.forward[self._level] is None:
            self._level -= 1
        x.forward = [None] * (x.level + 1)
        self._size -= 1
        logger.debug("Deleted key: %r", key)
        return True

    def clear(self) -> None:
        """Release every node head-to-tail and reset the list to empty."""
        x = self._header.forward[0]
        while x is not None:
            nxt = x.forward[0]
            x.forward = [None] * (x.level + 1)
            x = nxt
        self._header.forward = [None] * (self._max_level + 1)
        self._level = 0
        self._size = 0

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def search(self, key: K) -> tuple[bool, Optional[V]]:
        """Look up ``key``; returns ``(found, value)``."""
        x = self._header
        for i in range(self._level, -1, -1):
            while (nxt := x.forward[i]) and nxt.key < key:  # type: ignore[operator]
                x = nxt
        x = x.forward[0]
        if x and x.key == key:
            logger.debug("Found key: %r, value: %r", key, x.value)
            return True, x.value
        logger.debug("Not found key: %r", key)
        return False, None

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        found, value = self.search(key)
        return value if found else default

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __contains__(self, key: object) -> bool:
        return self.search(key)[0]  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------
    def __getitem__(self, key: K) -> V:
        found, value = self.search(key)
        if not found:
            raise KeyError(key)
        return value  # type: ignore[return-value]

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.delete(key):
            raise KeyError(key)

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def _walk(self, level: int) -> Iterator[Node[K, V]]:
        x = self._header.forward[level]
        while x is not None:
            yield x
            x = x.forward[level]

    def __iter__(self) -> Iterator[tuple[K, V]]:
        for node in self._walk(0):
            yield node.key, node.value  # type: ignore[misc]

    def keys(self) -> Iterator[K]:
        for node in self._walk(0):
            yield node.key  # type: ignore[misc]

    def values(self) -> Iterator[V]:
        for node in self._walk(0):
            yield node.value  # type: ignore[misc]

    def items(self) -> Iterator[tuple[K, V]]:
        return iter(self)

    def traverse(self) -> Iterator[tuple[int, list[tuple[K, V]]]]:
        """Yield ``(level, pairs)`` from the top populated level down to 0."""
        for i in range(self._level, -1, -1):
            yield i, [(node.key, node.value) for node in self._walk(i)]  # type: ignore[misc]

    def display(self) -> str:
        """Render every level top-down and log the result."""
        width = len(str(self._level))
        lines = ["*****Skip List*****"]
        for i, pairs in self.traverse():
            chain = "".join(f"[{k}, {v}] -> " for k, v in pairs)
            lines.append(f"Level {i:<{width}}: {chain}None")
        text = "\n".join(lines)
        logger.info("%s", text)
        return text

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def check_invariants(self) -> None:
        """Raise ``AssertionError`` if the structure is inconsistent."""
        below: Optional[set[int]] = None
        tall: dict[int, int] = {}
        for i in range(self._max_level + 1):
            seen: set[int] = set()
            prev: Optional[Node[K, V]] = None
            for node in self._walk(i):
                if node.level < i:
                    raise AssertionError(f"{node!r} linked above its tower at level {i}")
                if prev is not None and not prev.key < node.key:  # type: ignore[operator]
                    raise AssertionError(f"keys out of order at level {i}: {prev!r} then {node!r}")
                if below is not None and id(node) not in below:
                    raise AssertionError(f"{node!r} at level {i} missing from level {i - 1}")
                seen.add(id(node))
                prev = node
            if i == 0:
                if len(seen) != self._size:
                    raise AssertionError(f"count {self._size} != level-0 length {len(seen)}")
                tall[0] = len(seen)
                for node in self._walk(0):
                    for j in range(1, node.level + 1):
                        tall[j] = tall.get(j, 0) + 1
            elif len(seen) != tall.get(i, 0):
                raise AssertionError(f"level {i} holds {len(seen)} nodes, towers say {tall.get(i, 0)}")
            if i > self._level and seen:
                raise AssertionError(f"level {i} populated above current level {self._level}")
            if i == self._level and i > 0 and not seen:
                raise AssertionError(f"current level {i} is empty")
            below = seen

    # ------------------------------------------------------------------
    # Lifecycle 🔧
    # ------------------------------------------------------------------
    def __enter__(self) -> "SkipList[K, V]":
        return self

    def __exit__(self, *exc) -> None:
        self.clear()

    def __repr__(self) -> str:
        return f"SkipList(size={self._size}, level={self._level}, max_level={self._max_level})"
