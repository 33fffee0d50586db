"""
Real-valued box space, used to declare the range of transformed image states
(e.g. resized and stacked frames with pixel values in [0, 255]).
"""

import math
from typing import Any

import numpy as np

from spaces.abstractSpace import AbstractSpace


class BoxSpace(AbstractSpace):
    """
    A box of real values with elementwise inclusive bounds.

    Attributes:
        low (np.ndarray): Lower bound of every element.
        high (np.ndarray): Upper bound of every element.
    """

    def __init__(self, low: Any, high: Any) -> None:
        """
        Initializes the BoxSpace.

        Args:
            low (Any): Lower bounds (array-like).
            high (Any): Upper bounds (array-like), same shape as `low`.

        Raises:
            ValueError: On shape mismatch or if `low[i] > high[i]` anywhere.
        """
        low_arr = np.array(low, dtype=np.float64)
        high_arr = np.array(high, dtype=np.float64)
        if low_arr.shape != high_arr.shape:
            raise ValueError(
                f"'low' and 'high' must have the same shape, "
                f"got {low_arr.shape} and {high_arr.shape}."
            )
        if np.any(low_arr > high_arr):
            raise ValueError("Each element of 'high' must be >= the matching 'low'.")
        low_arr.setflags(write=False)
        high_arr.setflags(write=False)
        self.low: np.ndarray = low_arr
        self.high: np.ndarray = high_arr

    @classmethod
    def filled(cls, low: float, high: float, shape: tuple) -> "BoxSpace":
        """Builds a box of the given shape where every element shares one range."""
        return cls(np.full(shape, low), np.full(shape, high))

    @property
    def shape(self) -> tuple:
        return self.low.shape

    def length(self) -> float:
        return math.inf

    def contains(self, x: Any) -> bool:
        try:
            values = np.asarray(x)
        except (TypeError, ValueError):
            return False
        if values.shape != self.low.shape:
            return False
        if not (
            np.issubdtype(values.dtype, np.integer)
            or np.issubdtype(values.dtype, np.floating)
        ):
            return False
        return bool(np.all((self.low <= values) & (values <= self.high)))

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        if not (np.all(np.isfinite(self.low)) and np.all(np.isfinite(self.high))):
            raise ValueError("Cannot sample uniformly from an unbounded BoxSpace.")
        return rng.uniform(self.low, self.high).reshape(self.low.shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoxSpace):
            return NotImplemented
        return np.array_equal(self.low, other.low) and np.array_equal(
            self.high, other.high
        )

    def __hash__(self) -> int:
        return hash((BoxSpace, self.low.shape, self.low.tobytes(), self.high.tobytes()))

    def __repr__(self) -> str:
        return f"BoxSpace(shape={self.low.shape})"
