"""Shared fixtures for the skip-list tests."""
import random

import pytest

from pyskiplist import SkipList


class ScriptedRandom:
    """Stands in for ``random.Random`` and replays fixed coin flips."""

    def __init__(self, flips):
        self._flips = list(flips)

    def random(self):
        return self._flips.pop(0) if self._flips else 0.99


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def skiplist(rng):
    """Empty list with reproducible tower heights."""
    return SkipList[int, str](6, rng=rng)


@pytest.fixture
def reference_pairs():
    """The eight pairs used by the demo driver."""
    return [
        (1, "hello world"),
        (2, "first program"),
        (3, "glad to read the paper"),
        (5, "finish the code"),
        (8, "today summer"),
        (13, "2024/6/12"),
        (21, "tomorrow exam"),
        (34, "believe myself"),
    ]


@pytest.fixture
def scripted_rng():
    """Factory for coin-flip sources with a fixed script."""
    return ScriptedRandom
