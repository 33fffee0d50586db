"""
This module defines the AbstractSpace class, an abstract base class (ABC)
that outlines the capability every space in this framework must provide.

A space describes the set of legal values for an action or a state. Callers
that accept "a space" (agents sampling random actions, wrappers declaring the
transformed state space, the batched environment composing replica spaces)
only rely on the three methods declared here, so any implementation that
provides them is interchangeable.
"""

import abc  # Abstract Base Classes module
from typing import Any, Union

import numpy as np


class AbstractSpace(metaclass=abc.ABCMeta):
    """
    Abstract base class defining the capability set of a space.

    Randomness is never drawn from a process-wide generator: `sample` always
    receives the `numpy.random.Generator` it must consume.
    """

    @abc.abstractmethod
    def length(self) -> Union[int, float]:
        """
        Returns the number of distinct values in the space.

        Returns:
            Union[int, float]: The cardinality of the space. Continuous spaces
                               return `math.inf`.
        """
        raise NotImplementedError("Subclasses must implement the length method.")

    @abc.abstractmethod
    def contains(self, x: Any) -> bool:
        """
        Checks whether `x` is a legal value of this space.

        Implementations must never raise: a value of the wrong shape or kind
        is simply not contained.

        Args:
            x (Any): The candidate value.

        Returns:
            bool: True if `x` belongs to the space.
        """
        raise NotImplementedError("Subclasses must implement the contains method.")

    @abc.abstractmethod
    def sample(self, rng: np.random.Generator) -> Any:
        """
        Draws a uniformly random value from the space.

        Args:
            rng (np.random.Generator): The random number generator to consume.

        Returns:
            Any: A value for which `contains` is True.
        """
        raise NotImplementedError("Subclasses must implement the sample method.")

    def __contains__(self, x: Any) -> bool:
        return self.contains(x)

    def __len__(self) -> int:
        # len() only accepts integers, infinite spaces must use length()
        return self.length()
