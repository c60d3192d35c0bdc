"""Random draw sources for the transition engine."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Protocol

import numpy as np


class DrawSource(Protocol):
    def random(self) -> float: ...

    def integers(self, low: int, high: int) -> int: ...


class GeneratorDraws:
    """Draws backed by a numpy Generator; ``integers`` is inclusive of ``high``."""

    def __init__(self, rng: np.random.Generator | None = None, *, seed: int | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def random(self) -> float:
        return float(self.rng.random())

    def integers(self, low: int, high: int) -> int:
        return int(self.rng.integers(low, high, endpoint=True))


class ScriptedDraws:
    """Replay fixed draw sequences.

    Floats and integers are consumed from separate queues in call order.
    Integer values are returned as-is and must already lie in the requested
    range.
    """

    def __init__(self, floats: Iterable[float] = (), ints: Iterable[int] = ()) -> None:
        self._floats: deque[float] = deque()
        self._ints: deque[int] = deque()
        self.extend(floats=floats, ints=ints)

    def extend(self, floats: Iterable[float] = (), ints: Iterable[int] = ()) -> None:
        for value in floats:
            x = float(value)
            if not 0.0 <= x < 1.0:
                raise ValueError(f"scripted float draw must be within [0, 1), got {value!r}.")
            self._floats.append(x)
        self._ints.extend(int(v) for v in ints)

    def random(self) -> float:
        if not self._floats:
            raise RuntimeError("ScriptedDraws ran out of float draws.")
        return self._floats.popleft()

    def integers(self, low: int, high: int) -> int:
        if not self._ints:
            raise RuntimeError("ScriptedDraws ran out of integer draws.")
        value = self._ints.popleft()
        if not low <= value <= high:
            raise ValueError(f"scripted integer draw {value} outside [{low}, {high}].")
        return value

    @property
    def remaining(self) -> tuple[int, int]:
        """(floats left, ints left)."""
        return len(self._floats), len(self._ints)
