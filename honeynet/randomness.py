"""Random sources for target, attack type, address and cosmetic choices."""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource:
    """Interface every random source implements.

    Tests swap in scripted subclasses so attack targets and addresses are
    known in advance.
    """

    def choice_index(self, n: int) -> int:
        """Uniform integer in ``[0, n)``."""
        raise NotImplementedError

    def octets(self) -> tuple[int, int, int, int]:
        """Four independent uniform integers in ``[0, 255]``."""
        raise NotImplementedError

    def uniform(self, low: float, high: float) -> float:
        raise NotImplementedError

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[self.choice_index(len(items))]


class NumpyRandomSource(RandomSource):
    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def choice_index(self, n: int) -> int:
        return int(self.rng.integers(0, n))

    def octets(self) -> tuple[int, int, int, int]:
        a, b, c, d = (int(v) for v in self.rng.integers(0, 256, size=4))
        return a, b, c, d

    def uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))
