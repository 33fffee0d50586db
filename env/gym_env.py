"""
This module defines the GymEnv class, an adapter that exposes any `gym.Env`
through the AbstractEnv capability set.

Gym environments return the whole transition from `step()`; the adapter keeps
the last observation, reward and termination flag so they can be queried
independently, which is what the wrappers of this package rely on. Both the
`terminated` and `truncated` flags of the Gym API end an episode here.
"""

from typing import Any, Optional, Union

import gym  # For gym.Env, gym.make and gym.spaces

from env.abstractEnv import AbstractEnv
from spaces.abstractSpace import AbstractSpace
from spaces.gym_conversion import from_gym_space


class GymEnv(AbstractEnv):
    """
    Adapter from a `gym.Env` (reset/step API of gym >= 0.26) to AbstractEnv.

    Attributes:
        gym_env (gym.Env): The adapted Gym environment.
        seed (Optional[int]): Seed passed to the first `reset` only; later
                              episodes continue the environment's own RNG stream.
    """

    def __init__(
        self,
        env: Union[gym.Env, str],
        seed: Optional[int] = None,
        **make_kwargs: Any,  # Forwarded to gym.make when `env` is an id
    ) -> None:
        """
        Initializes the adapter and resets the Gym environment once.

        Args:
            env (Union[gym.Env, str]): A Gym environment instance, or a registered
                environment id to create with `gym.make`.
            seed (Optional[int], optional): Seed for the first reset. Defaults to None.
            **make_kwargs (Any): Keyword arguments for `gym.make`.

        Raises:
            TypeError: If `env` is neither a `gym.Env` nor a string, or if its
                       spaces have no counterpart in this package.
        """
        if isinstance(env, str):
            env = gym.make(env, **make_kwargs)
        elif make_kwargs:
            raise TypeError("make_kwargs can only be used together with an environment id.")
        if not isinstance(env, gym.Env):
            raise TypeError(f"GymEnv expects a gym.Env or an id, got {type(env).__name__}.")

        self.gym_env: gym.Env = env
        self.seed: Optional[int] = seed
        self._action_space: AbstractSpace = from_gym_space(env.action_space)
        self._state_space: AbstractSpace = from_gym_space(env.observation_space)

        self._is_first_reset: bool = True
        self._observation: Any = None
        self._reward: float = 0.0
        self._terminated: bool = False
        self.last_info: dict = {}
        self.reset()

    def reset(self) -> None:
        seed = self.seed if self._is_first_reset else None
        self._is_first_reset = False
        self._observation, self.last_info = self.gym_env.reset(seed=seed)
        self._reward = 0.0
        self._terminated = False

    def act(self, action: Any) -> None:
        observation, reward, terminated, truncated, info = self.gym_env.step(action)
        self._observation = observation
        self._reward = float(reward)
        self._terminated = bool(terminated or truncated)
        self.last_info = info

    def state(self) -> Any:
        return self._observation

    def reward(self) -> float:
        return self._reward

    def is_terminated(self) -> bool:
        return self._terminated

    def action_space(self) -> AbstractSpace:
        return self._action_space

    def state_space(self) -> AbstractSpace:
        return self._state_space

    def close(self) -> None:
        self.gym_env.close()

    def __repr__(self) -> str:
        return f"GymEnv({self.gym_env!r})"
