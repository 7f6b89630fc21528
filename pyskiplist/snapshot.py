"""In-memory snapshots of a skip list.

Two encodings are supported:

• *msgpack*: ``[max_level, [[key, value], ...]]`` in key order. Arrays come
  back as tuples, so composite (tuple) keys survive a round trip; list
  values are restored as tuples too.
• *text*:    one ``key<delimiter>value`` line per element, for string keys
  and values. The delimiter is always passed explicitly.

Nothing here touches the filesystem; callers decide where bytes go.
"""
from __future__ import annotations

import enum
import logging
import random
from typing import Any, Optional, Union

import msgpack

from .skiplist import SkipList

__all__ = ["SnapshotFormat", "dumps", "loads", "is_valid_line", "parse_line"]

logger = logging.getLogger(__name__)

_DEFAULT_DELIMITER = ":"


class SnapshotFormat(enum.Enum):
    """Available snapshot encodings."""
    MSGPACK = 0
    TEXT = 1


def _coerce_format(fmt: Union[str, SnapshotFormat]) -> SnapshotFormat:
    if isinstance(fmt, str):
        return SnapshotFormat[fmt.upper()]
    return fmt


def _check_delimiter(delimiter: str) -> None:
    if not delimiter:
        raise ValueError("delimiter must be a non-empty string")
    if "\n" in delimiter:
        raise ValueError(f"delimiter cannot contain a newline: {delimiter!r}")


def is_valid_line(line: str, delimiter: str = _DEFAULT_DELIMITER) -> bool:
    _check_delimiter(delimiter)
    return bool(line) and delimiter in line


def parse_line(line: str, delimiter: str = _DEFAULT_DELIMITER) -> tuple[str, str]:
    """Split ``line`` on the first ``delimiter`` into ``(key, value)``."""
    if not is_valid_line(line, delimiter):
        raise ValueError(f"invalid snapshot line: {line!r}")
    key, _, value = line.partition(delimiter)
    return key, value


def dumps(
    skiplist: SkipList[Any, Any],
    fmt: Union[str, SnapshotFormat] = SnapshotFormat.MSGPACK,
    *,
    delimiter: str = _DEFAULT_DELIMITER,
) -> bytes:
    """Encode every element of ``skiplist`` in key order."""
    fmt = _coerce_format(fmt)
    if fmt == SnapshotFormat.MSGPACK:
        blob = msgpack.packb([skiplist.max_level, [[k, v] for k, v in skiplist]], use_bin_type=True)
    elif fmt == SnapshotFormat.TEXT:
        _check_delimiter(delimiter)
        lines = []
        for k, v in skiplist:
            if not isinstance(k, str) or not isinstance(v, str):
                raise TypeError(f"text snapshots need str keys and values, got {type(k).__name__}/{type(v).__name__}")
            if delimiter in k or "\n" in k or "\n" in v:
                raise ValueError(f"key {k!r} cannot be written with delimiter {delimiter!r}")
            lines.append(f"{k}{delimiter}{v}\n")
        blob = "".join(lines).encode("utf-8")
    else:
        raise ValueError(f"Unknown snapshot format: {fmt}")
    logger.debug("Dumped %d elements as %s (%d bytes)", len(skiplist), fmt.name, len(blob))
    return blob


def loads(
    blob: bytes,
    fmt: Union[str, SnapshotFormat] = SnapshotFormat.MSGPACK,
    *,
    delimiter: str = _DEFAULT_DELIMITER,
    max_level: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SkipList[Any, Any]:
    """Rebuild a skip list from ``blob``.

    ``max_level`` overrides the level stored in a msgpack snapshot; text
    snapshots fall back to the :class:`SkipList` default when it is omitted.
    """
    fmt = _coerce_format(fmt)
    if fmt == SnapshotFormat.MSGPACK:
        stored_level, pairs = msgpack.unpackb(blob, raw=False, use_list=False)
        sl: SkipList[Any, Any] = SkipList(stored_level if max_level is None else max_level, rng=rng)
        for k, v in pairs:
            sl.insert(k, v)
    elif fmt == SnapshotFormat.TEXT:
        sl = SkipList(rng=rng) if max_level is None else SkipList(max_level, rng=rng)
        for line in blob.decode("utf-8").split("\n"):
            if not line:
                continue
            sl.insert(*parse_line(line, delimiter))
    else:
        raise ValueError(f"Unknown snapshot format: {fmt}")
    logger.debug("Loaded %d elements from %s snapshot", len(sl), fmt.name)
    return sl
