"""
Conversion of `gym.spaces` objects into the spaces of this package, so that
environments adapted from Gym expose the same space capability as native ones.
"""

import gym  # For gym.spaces.Space and its concrete subclasses
import numpy as np

from spaces.abstractSpace import AbstractSpace
from spaces.arraySpace import ArraySpace
from spaces.boxSpace import BoxSpace
from spaces.discreteSpace import DiscreteSpace
from spaces.multiDiscreteSpace import MultiDiscreteSpace


def from_gym_space(space: gym.spaces.Space) -> AbstractSpace:
    """
    Converts a Gym space into the equivalent space of this package.

    Gym's discrete spaces are zero-based (`Discrete(n, start=s)` covers
    `s..s+n-1`, `MultiDiscrete(nvec)` covers `0..nvec-1` per axis); the
    converted spaces describe exactly the same values, so actions sampled
    from them can be passed to the Gym environment unchanged.

    Args:
        space (gym.spaces.Space): The Gym space to convert.

    Raises:
        TypeError: If the Gym space type has no counterpart.

    Returns:
        AbstractSpace: The converted space.
    """
    if isinstance(space, gym.spaces.Discrete):
        start = int(space.start)
        return DiscreteSpace(start, start + int(space.n) - 1)
    if isinstance(space, gym.spaces.MultiDiscrete):
        nvec = np.asarray(space.nvec, dtype=np.int64)
        return MultiDiscreteSpace(np.zeros_like(nvec), nvec - 1)
    if isinstance(space, gym.spaces.Box):
        return BoxSpace(space.low, space.high)
    if isinstance(space, gym.spaces.Tuple):
        return ArraySpace([from_gym_space(sub_space) for sub_space in space.spaces])
    raise TypeError(
        f"Unsupported gym space type: '{type(space).__name__}'. "
        f"Supported types are Discrete, MultiDiscrete, Box and Tuple."
    )
