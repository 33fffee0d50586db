"""
Scalar integer range space, the one-dimensional sibling of MultiDiscreteSpace.
"""

from typing import Any, Optional

import numpy as np

from spaces.abstractSpace import AbstractSpace


class DiscreteSpace(AbstractSpace):
    """
    The inclusive integer range `low..high`.

    `DiscreteSpace(n)` is shorthand for `DiscreteSpace(1, n)`, mirroring the
    single-argument form of `MultiDiscreteSpace`.

    Attributes:
        low (int): Smallest legal value.
        high (int): Largest legal value.
        n (int): Number of legal values.
    """

    def __init__(self, low_or_high: int, high: Optional[int] = None) -> None:
        if high is None:
            low, high = 1, low_or_high
        else:
            low = low_or_high
        for name, value in (("low", low), ("high", high)):
            if isinstance(value, (bool, np.bool_)) or not isinstance(
                value, (int, np.integer)
            ):
                raise ValueError(f"'{name}' must be an integer, got {value!r}.")
        if low > high:
            raise ValueError(f"high ({high}) must be >= low ({low}).")
        self.low: int = int(low)
        self.high: int = int(high)
        self.n: int = self.high - self.low + 1

    def length(self) -> int:
        return self.n

    def contains(self, x: Any) -> bool:
        if isinstance(x, (bool, np.bool_)):
            return False
        if isinstance(x, (int, np.integer)):
            return self.low <= x <= self.high
        if isinstance(x, (float, np.floating)) and float(x).is_integer():
            return self.low <= x <= self.high
        return False

    def sample(self, rng: np.random.Generator) -> int:
        return int(rng.integers(self.low, self.high, endpoint=True))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscreteSpace):
            return NotImplemented
        return (self.low, self.high) == (other.low, other.high)

    def __hash__(self) -> int:
        return hash((DiscreteSpace, self.low, self.high))

    def __repr__(self) -> str:
        return f"DiscreteSpace({self.low}, {self.high})"
