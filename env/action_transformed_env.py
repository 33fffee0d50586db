"""
This module defines the ActionTransformedEnv wrapper, which translates the
actions chosen by an agent before they reach the inner environment.
"""

from typing import Any, Callable

from env.abstractEnv import AbstractEnv, AbstractEnvWrapper
from env.state_transformed_env import identity
from spaces.abstractSpace import AbstractSpace


class ActionTransformedEnv(AbstractEnvWrapper):
    """
    Applies `action_mapping` to every action before delegating `act`.

    `action_space_mapping` computes the action space exposed to the agent from
    the inner action space, e.g. re-indexing Gym's zero-based `Discrete`
    actions as `1..n`.

    Attributes:
        action_mapping (Callable[[Any], Any]): Maps an exposed action to an inner one.
        action_space_mapping (Callable[[AbstractSpace], AbstractSpace]): Computes
            the exposed action space.
    """

    def __init__(
        self,
        env: AbstractEnv,
        action_mapping: Callable[[Any], Any] = identity,
        action_space_mapping: Callable[[AbstractSpace], AbstractSpace] = identity,
    ) -> None:
        for name, mapping in (
            ("action_mapping", action_mapping),
            ("action_space_mapping", action_space_mapping),
        ):
            if not callable(mapping):
                raise TypeError(f"'{name}' must be callable, got {type(mapping).__name__}.")
        super().__init__(env)
        self.action_mapping: Callable[[Any], Any] = action_mapping
        self.action_space_mapping: Callable[[AbstractSpace], AbstractSpace] = (
            action_space_mapping
        )

    def act(self, action: Any) -> None:
        self.env.act(self.action_mapping(action))

    def action_space(self) -> AbstractSpace:
        return self.action_space_mapping(self.env.action_space())
