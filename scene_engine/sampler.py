"""
Sampler

Random primitives used by the scene generators. One Sampler belongs to one
scene build; it owns the spare deviate of the Marsaglia polar method so that
independent builds never share state.
"""

from typing import Callable, List, MutableSequence, Optional, TypeVar
import math
import random

T = TypeVar('T')


class Sampler:
    """
    Uniform, gaussian and shuffle primitives over a single random stream.

    Args:
        seed: Seed for the underlying ``random.Random`` stream
        source: Optional callable returning floats in [0, 1); replaces the
            stream entirely (used as a deterministic test double)
    """

    def __init__(self, seed: Optional[int] = None,
                 source: Optional[Callable[[], float]] = None):
        self.seed = seed
        self._rng = random.Random(seed)
        self._source = source or self._rng.random
        self._spare: Optional[float] = None

    def reset(self, seed: Optional[int] = None) -> None:
        """Clear the spare deviate and, if given, reseed the stream"""
        self._spare = None
        if seed is not None:
            self.seed = seed
            self._rng.seed(seed)

    @property
    def has_spare(self) -> bool:
        return self._spare is not None

    def random(self) -> float:
        return self._source()

    def uniform(self, lo: float, hi: float) -> float:
        return self.random() * (hi - lo) + lo

    def uniform_int(self, lo: float, hi: float) -> float:
        """Integer step in [lo, hi], inclusive on both ends for integer bounds"""
        return math.floor(self.random() * (hi - lo + 1)) + lo

    def boolean(self) -> bool:
        return self.random() >= 0.5

    def amplitude(self, center: float, spread: float) -> float:
        return self.uniform(center - spread, center + spread)

    def gaussian(self, mean: float, sd: float) -> float:
        """
        Normal deviate via the Marsaglia polar method.

        Every second call is served from the cached spare deviate without
        drawing from the stream.
        """
        if self._spare is not None:
            spare, self._spare = self._spare, None
            return mean + sd * spare

        while True:
            u = 2 * self.random() - 1
            v = 2 * self.random() - 1
            q = u * u + v * v
            if 0 < q < 1:
                break
        r = math.sqrt(-2 * math.log(q) / q)
        self._spare = u * r
        return mean + sd * v * r

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place; returns the same sequence"""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.uniform_int(0, i))
            items[i], items[j] = items[j], items[i]
        return items

    def choice(self, items: List[T]) -> T:
        return items[int(self.uniform_int(0, len(items) - 1))]
