"""pyskiplist: an in-memory ordered key/value skip list.

This package exposes :class:`pyskiplist.SkipList` as the building block for
memtables and in-memory indexes, plus msgpack/text snapshot helpers so a
list's contents can be handed to whatever storage layer sits above it.
"""

from __future__ import annotations

__all__ = [
    "Node",
    "SkipList",
    "SnapshotFormat",
    "dumps",
    "loads",
]

from .node import Node
from .skiplist import SkipList
from .snapshot import SnapshotFormat, dumps, loads
