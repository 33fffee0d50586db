"""
This module defines the StateCachedEnv wrapper, which memoizes the state of its
inner environment between transitions.
"""

from typing import Any

from env.abstractEnv import AbstractEnv, AbstractEnvWrapper


class StateCachedEnv(AbstractEnvWrapper):
    """
    Remembers the inner state from the first `state()` call after a transition
    until the next `act()` or `reset()`.

    This is a pure optimization: results are identical to reading the inner
    environment directly, the transform pipeline beneath it simply runs once
    per transition instead of once per read. It must sit above a
    `StateTransformedEnv` so that the transformed state is what gets cached.
    """

    def __init__(self, env: AbstractEnv) -> None:
        super().__init__(env)
        self._cached_state: Any = None
        self._is_state_cached: bool = False

    def state(self) -> Any:
        if not self._is_state_cached:
            self._cached_state = self.env.state()
            self._is_state_cached = True
        return self._cached_state

    def act(self, action: Any) -> None:
        self._invalidate()
        self.env.act(action)

    def reset(self) -> None:
        self._invalidate()
        self.env.reset()

    def _invalidate(self) -> None:
        self._cached_state = None
        self._is_state_cached = False
