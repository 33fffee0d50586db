"""
Accumulator hooks that record per-episode statistics.

- `TotalRewardPerEpisode`: sum of the reward the agent sees (after reshaping).
- `TotalOriginalRewardPerEpisode`: sum of the reward before any reshaping,
  e.g. the true game score when rewards are clipped for training.
- `TotalBatchOriginalRewardPerEpisode`: the same, tracked independently for
  every replica of a `MultiThreadEnv`.
- `StepsPerEpisode`: number of transitions in each episode.

Totals are accumulated on `POST_ACT` and moved to the history when the
episode ends, after which the running value restarts from zero.
"""

from typing import Any, List

import numpy as np

from env.abstractEnv import AbstractEnv
from hooks.abstractHook import AbstractHook


class TotalRewardPerEpisode(AbstractHook):
    """
    Total reward per episode, as returned by `env.reward()`.

    Attributes:
        rewards (List[float]): Totals of the completed episodes.
        reward (float): Running total of the current episode.
    """

    def __init__(self) -> None:
        self.rewards: List[float] = []
        self.reward: float = 0.0

    def _step_reward(self, env: AbstractEnv) -> float:
        return float(env.reward())

    def on_post_act(self, step: int, agent: Any, env: AbstractEnv) -> None:
        self.reward += self._step_reward(env)

    def on_post_episode(self, step: int, agent: Any, env: AbstractEnv) -> None:
        self.rewards.append(self.reward)
        self.reward = 0.0


class TotalOriginalRewardPerEpisode(TotalRewardPerEpisode):
    """Total reward per episode before reward reshaping (`env.original_reward()`)."""

    def _step_reward(self, env: AbstractEnv) -> float:
        return float(env.original_reward())


class TotalBatchOriginalRewardPerEpisode(AbstractHook):
    """
    Total reward of each replica per episode, before reward reshaping.

    Intended for batched environments, whose `is_terminated()` reports, after
    each step, which replicas have just finished an episode.

    Attributes:
        rewards (List[List[float]]): Completed-episode totals, one list per replica.
        reward (np.ndarray): Running total of each replica's current episode.
    """

    def __init__(self, batch_size: int) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}.")
        self.rewards: List[List[float]] = [[] for _ in range(batch_size)]
        self.reward: np.ndarray = np.zeros(batch_size)

    def on_post_act(self, step: int, agent: Any, env: AbstractEnv) -> None:
        step_rewards = np.asarray(env.original_reward(), dtype=np.float64)
        terminals = np.asarray(env.is_terminated(), dtype=bool)
        if step_rewards.shape != self.reward.shape or terminals.shape != self.reward.shape:
            raise ValueError(
                f"Hook tracks {len(self.reward)} replicas but the environment "
                f"reported {step_rewards.size} rewards and {terminals.size} terminal flags."
            )
        for i in range(len(self.reward)):
            self.reward[i] += step_rewards[i]
            if terminals[i]:
                self.rewards[i].append(float(self.reward[i]))
                self.reward[i] = 0.0


class StepsPerEpisode(AbstractHook):
    """
    Number of transitions per episode.

    Attributes:
        steps (List[int]): Lengths of the completed episodes.
        count (int): Transitions so far in the current episode.
    """

    def __init__(self) -> None:
        self.steps: List[int] = []
        self.count: int = 0

    def on_post_act(self, step: int, agent: Any, env: AbstractEnv) -> None:
        self.count += 1

    def on_post_episode(self, step: int, agent: Any, env: AbstractEnv) -> None:
        self.steps.append(self.count)
        self.count = 0
