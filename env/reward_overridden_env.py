"""
This module defines the RewardOverriddenEnv wrapper, which reshapes the reward
signal of its inner environment (e.g. clipping Atari scores to [-1, 1]).
"""

from typing import Any, Callable

from env.abstractEnv import AbstractEnv, AbstractEnvWrapper


class RewardOverriddenEnv(AbstractEnvWrapper):
    """
    Exposes `reward_mapping(env.reward())` as the reward.

    The unshaped reward stays observable: `self.env.reward()` reads the inner
    environment directly, and `original_reward()` (inherited delegation)
    reports the reward from below every reshaping layer of the chain.

    Attributes:
        reward_mapping (Callable[[Any], Any]): Pure reshaping function.
    """

    def __init__(self, env: AbstractEnv, reward_mapping: Callable[[Any], Any]) -> None:
        """
        Initializes the RewardOverriddenEnv.

        Args:
            env (AbstractEnv): The inner environment.
            reward_mapping (Callable[[Any], Any]): Maps a raw reward to the
                reshaped one, e.g. `ClipReward(-1, 1)`.

        Raises:
            TypeError: If `reward_mapping` is not callable.
        """
        if not callable(reward_mapping):
            raise TypeError(
                f"'reward_mapping' must be callable, got {type(reward_mapping).__name__}."
            )
        super().__init__(env)
        self.reward_mapping: Callable[[Any], Any] = reward_mapping

    def reward(self) -> Any:
        return self.reward_mapping(self.env.reward())
