"""
This module defines the MultiDiscreteSpace class, a multi-dimensional discrete
domain where every axis has its own inclusive integer bounds.

It is typically used to describe factored action or state spaces, e.g. a
state made of several independent discrete features, where each feature
`i` ranges over `low[i]..high[i]`.
"""

import math
from typing import Any, Optional

import numpy as np

from spaces.abstractSpace import AbstractSpace


def _is_real_numeric(dtype: np.dtype) -> bool:
    return np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)


def _as_integer_bounds(values: Any, name: str) -> np.ndarray:
    """Copies `values` into a read-only int64 array, rejecting non-integers."""
    array = np.array(values)
    if not _is_real_numeric(array.dtype):
        raise ValueError(f"'{name}' must contain integers, got dtype {array.dtype}.")
    if not np.issubdtype(array.dtype, np.integer):
        if not np.all(np.isfinite(array)) or not np.all(np.mod(array, 1) == 0):
            raise ValueError(f"'{name}' must contain integral values, got {array}.")
    array = array.astype(np.int64)
    array.setflags(write=False)
    return array


class MultiDiscreteSpace(AbstractSpace):
    """
    A discrete space scaled to multiple dimensions.

    The space is an immutable value: the bounds are copied into read-only
    arrays and the cardinality is computed exactly once, in the constructor.

    Like Python's `range`, the space can be built from both bounds or from the
    upper bound alone:

        MultiDiscreteSpace([0, 0], [3, 5])  # low=[0, 0], high=[3, 5]
        MultiDiscreteSpace([3, 5])          # low=[1, 1], high=[3, 5]

    Attributes:
        low (np.ndarray): Inclusive lower bound of every axis.
        high (np.ndarray): Inclusive upper bound of every axis.
        n (int): Precomputed cardinality, `prod(high[i] - low[i] + 1)`.
    """

    def __init__(self, low_or_high: Any, high: Optional[Any] = None) -> None:
        """
        Initializes the MultiDiscreteSpace.

        Args:
            low_or_high (Any): The lower bounds when `high` is given, otherwise
                               the upper bounds (the lower bounds then default
                               to all-ones of the same shape).
            high (Optional[Any], optional): The upper bounds. Defaults to None.

        Raises:
            ValueError: If the bounds are not integral, do not share a shape, or
                        if `low[i] > high[i]` for some axis.
        """
        if high is None:
            high_arr = _as_integer_bounds(low_or_high, "high")
            low_arr = np.ones_like(high_arr)
            low_arr.setflags(write=False)
        else:
            low_arr = _as_integer_bounds(low_or_high, "low")
            high_arr = _as_integer_bounds(high, "high")

        if low_arr.shape != high_arr.shape:
            raise ValueError(
                f"'low' and 'high' must have the same shape, "
                f"got {low_arr.shape} and {high_arr.shape}."
            )
        if np.any(low_arr > high_arr):
            raise ValueError(
                f"Each element of high={high_arr.tolist()} must be >= "
                f"the matching element of low={low_arr.tolist()}."
            )

        self.low: np.ndarray = low_arr
        self.high: np.ndarray = high_arr
        # Python ints so that large products do not overflow int64
        self.n: int = math.prod(
            int(h) - int(l) + 1 for l, h in zip(low_arr.flat, high_arr.flat)
        )

    @property
    def shape(self) -> tuple:
        return self.low.shape

    def length(self) -> int:
        return self.n

    def contains(self, x: Any) -> bool:
        try:
            values = np.asarray(x)
        except (TypeError, ValueError):
            # Ragged sequences cannot form an array of the required shape
            return False
        if values.shape != self.low.shape:
            return False
        if not _is_real_numeric(values.dtype):
            return False
        # Membership is a bounds check only; NaN fails both comparisons
        return bool(np.all((self.low <= values) & (values <= self.high)))

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        """
        Draws one uniform integer per axis, independently across axes.

        Args:
            rng (np.random.Generator): The random number generator to consume.

        Returns:
            np.ndarray: An int64 array with the same shape as `low`/`high`.
        """
        return np.asarray(
            rng.integers(self.low, self.high, endpoint=True), dtype=np.int64
        ).reshape(self.low.shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiDiscreteSpace):
            return NotImplemented
        return np.array_equal(self.low, other.low) and np.array_equal(
            self.high, other.high
        )

    def __hash__(self) -> int:
        return hash((self.low.shape, self.low.tobytes(), self.high.tobytes()))

    def __repr__(self) -> str:
        return f"MultiDiscreteSpace(low={self.low.tolist()}, high={self.high.tolist()})"
