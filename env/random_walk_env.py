"""
This module defines the RandomWalk1D environment, a small native environment
with a discrete state and action space.

The agent sits on a chain of `n_states` positions and moves one position left
or right per step. Reaching the left end yields a reward of -1, reaching the
right end a reward of +1; both ends terminate the episode. It is cheap enough
to be replicated many times inside a batched environment, which makes it a
convenient environment for smoke-testing wrappers, hooks and the run loop.
"""

from typing import Optional

import numpy as np

from env.abstractEnv import AbstractEnv
from spaces.discreteSpace import DiscreteSpace

# --- Action Mapping ---
# Discrete action values and the position offset they produce.
ACTION_LEFT: int = 1
ACTION_RIGHT: int = 2
ACTION_OFFSET = {ACTION_LEFT: -1, ACTION_RIGHT: +1}


class RandomWalk1D(AbstractEnv):
    """
    One-dimensional random walk on positions `1..n_states`.

    Attributes:
        n_states (int): Number of positions on the chain (including both ends).
        start_state (Optional[int]): Fixed start position, or None to draw a
                                     uniform non-terminal start on every reset.
        rng (np.random.Generator): Generator used to draw start positions.
        position (int): Current position on the chain.
    """

    def __init__(
        self,
        n_states: int = 7,  # Chain length including both terminal ends
        start_state: Optional[int] = None,  # None draws a random start per episode
        seed: Optional[int] = None,  # Seed of this instance's own generator
    ) -> None:
        """
        Initializes the RandomWalk1D environment in its first episode.

        Args:
            n_states (int, optional): Number of positions; must be at least 3 so
                that a non-terminal start exists. Defaults to 7.
            start_state (Optional[int], optional): Start position, strictly
                between 1 and `n_states`. Defaults to None (random start).
            seed (Optional[int], optional): Seed for the start-position
                generator. Defaults to None.

        Raises:
            ValueError: If `n_states < 3` or `start_state` is a terminal or
                        out-of-range position.
        """
        if n_states < 3:
            raise ValueError(f"RandomWalk1D needs at least 3 states, got {n_states}.")
        if start_state is not None and not 1 < start_state < n_states:
            raise ValueError(
                f"start_state must lie strictly between 1 and {n_states}, got {start_state}."
            )
        self.n_states: int = n_states
        self.start_state: Optional[int] = start_state
        self.rng: np.random.Generator = np.random.default_rng(seed)

        self._action_space = DiscreteSpace(ACTION_LEFT, ACTION_RIGHT)
        self._state_space = DiscreteSpace(1, n_states)

        self.position: int = 0
        self.reset()

    def reset(self) -> None:
        if self.start_state is None:
            self.position = int(self.rng.integers(2, self.n_states - 1, endpoint=True))
        else:
            self.position = self.start_state

    def act(self, action: int) -> None:
        if action not in self._action_space:
            raise ValueError(
                f"Invalid action {action!r}; legal actions are {ACTION_LEFT} (left) "
                f"and {ACTION_RIGHT} (right)."
            )
        if self.is_terminated():
            raise RuntimeError("Cannot act in a terminated episode; call reset() first.")
        self.position += ACTION_OFFSET[int(action)]

    def state(self) -> int:
        return self.position

    def reward(self) -> float:
        if self.position == 1:
            return -1.0
        if self.position == self.n_states:
            return 1.0
        return 0.0

    def is_terminated(self) -> bool:
        return self.position == 1 or self.position == self.n_states

    def action_space(self) -> DiscreteSpace:
        return self._action_space

    def state_space(self) -> DiscreteSpace:
        return self._state_space

    def __repr__(self) -> str:
        return f"RandomWalk1D(n_states={self.n_states}, position={self.position})"
