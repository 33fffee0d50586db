"""
Compound space made of one sub-space per element. The batched environment
uses it to describe "one legal action per replica".
"""

import math
from typing import Any, Iterator, List, Sequence, Union

import numpy as np

from spaces.abstractSpace import AbstractSpace


class ArraySpace(AbstractSpace):
    """
    An ordered collection of sub-spaces; a value is a sequence holding one
    element of each sub-space, in the same order.

    Attributes:
        spaces (List[AbstractSpace]): The sub-spaces, one per position.
    """

    def __init__(self, spaces: Sequence[AbstractSpace]) -> None:
        spaces = list(spaces)
        for i, space in enumerate(spaces):
            if not isinstance(space, AbstractSpace):
                raise TypeError(
                    f"Element {i} of ArraySpace must be an AbstractSpace, got {type(space).__name__}."
                )
        self.spaces: List[AbstractSpace] = spaces

    def length(self) -> Union[int, float]:
        return math.prod(space.length() for space in self.spaces)

    def contains(self, x: Any) -> bool:
        try:
            n_values = len(x)
        except TypeError:
            return False
        if n_values != len(self.spaces):
            return False
        return all(space.contains(value) for space, value in zip(self.spaces, x))

    def sample(self, rng: np.random.Generator) -> List[Any]:
        return [space.sample(rng) for space in self.spaces]

    def __getitem__(self, index: int) -> AbstractSpace:
        return self.spaces[index]

    def __iter__(self) -> Iterator[AbstractSpace]:
        return iter(self.spaces)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArraySpace):
            return NotImplemented
        return self.spaces == other.spaces

    def __hash__(self) -> int:
        return hash(tuple(self.spaces))

    def __repr__(self) -> str:
        return f"ArraySpace({self.spaces!r})"
