"""
lemon_tree.py — Where lemons come from.

A lemon's "size" is the number of squeezes it takes to juice it. The
state machine only depends on the ``LemonSource`` capability, so tests
and demos can swap the random tree for a scripted one.
"""

import itertools
import random
from typing import Iterable, Protocol

from utils import LEMON_MIN_SIZE, LEMON_MAX_SIZE


class LemonSource(Protocol):
    def pick(self) -> int:
        """Return the squeezes needed for a freshly picked lemon."""
        ...


class LemonTree:
    """Random lemon sizes drawn uniformly from [LEMON_MIN_SIZE, LEMON_MAX_SIZE]."""

    def __init__(self, rng: "random.Random | None" = None):
        # Falls back to the module-level generator shared by the process
        self._rng = rng if rng is not None else random

    def pick(self) -> int:
        return self._rng.randint(LEMON_MIN_SIZE, LEMON_MAX_SIZE)


class ScriptedLemonTree:
    """Replays a fixed sequence of lemon sizes, cycling when exhausted."""

    def __init__(self, sizes: Iterable[int]):
        sizes = list(sizes)
        if not sizes:
            raise ValueError("ScriptedLemonTree needs at least one size")
        for size in sizes:
            if not LEMON_MIN_SIZE <= size <= LEMON_MAX_SIZE:
                raise ValueError(
                    f"Lemon size {size} outside [{LEMON_MIN_SIZE}, {LEMON_MAX_SIZE}]"
                )
        self.sizes = tuple(sizes)
        self._cycle = itertools.cycle(self.sizes)

    def pick(self) -> int:
        return next(self._cycle)

    def __repr__(self) -> str:
        return f"ScriptedLemonTree(sizes={self.sizes})"
