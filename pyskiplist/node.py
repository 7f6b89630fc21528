"""Skip-list node: one key/value entry plus its tower of forward links."""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

__all__ = ["Node"]

K = TypeVar("K")
V = TypeVar("V")


class Node(Generic[K, V]):
    """Single entry of a :class:`~pyskiplist.SkipList`.

    ``forward[i]`` is the next node on level ``i`` (``None`` at the tail).
    A node of level ``L`` owns ``L + 1`` slots, so its tower always covers
    levels ``0..L`` contiguously.
    """

    __slots__ = ("_key", "value", "level", "forward")

    def __init__(self, key: Optional[K], value: Optional[V], level: int):
        if level < 0:
            raise ValueError(f"node level must be >= 0, got {level}")
        self._key = key
        self.value = value
        self.level = level
        self.forward: list[Optional[Node[K, V]]] = [None] * (level + 1)

    @property
    def key(self) -> Optional[K]:
        return self._key

    def get_key(self) -> Optional[K]:
        return self._key

    def get_value(self) -> Optional[V]:
        return self.value

    def set_value(self, value: V) -> None:
        self.value = value

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self._key!r}:{self.value!r} L{self.level}>"
