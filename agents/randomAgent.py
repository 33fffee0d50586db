"""
This module defines a RandomAgent class, which inherits from AbstractAgent.
The RandomAgent selects actions uniformly at random from the action space of
the environment. It is the baseline every learning agent should beat, and the
agent used to smoke-test environment pipelines and hooks.
"""

from typing import Any, Dict, Optional

import numpy as np

from agents.abstractAgent import AbstractAgent
from spaces.abstractSpace import AbstractSpace


class RandomAgent(AbstractAgent):
    """
    An agent that samples actions uniformly from its action space.

    It works unchanged with batched environments: sampling the compound
    action space of a `MultiThreadEnv` yields one action per replica.

    Attributes:
        rng (np.random.Generator): The agent's own random number generator.
        n_actions_taken (int): Number of actions selected so far.
    """

    def __init__(
        self,
        action_space: AbstractSpace,
        seed: Optional[int] = None,
        **kwargs: Any,  # Allow for unused parameters passed from config
    ) -> None:
        """
        Initializes the RandomAgent.

        Args:
            action_space (AbstractSpace): The space actions are sampled from.
            seed (Optional[int], optional): Seed of the agent's generator. Defaults to None.
            **kwargs (Any): Other configuration keys, ignored by this agent.
        """
        super().__init__(action_space)
        self.rng: np.random.Generator = np.random.default_rng(seed)
        self.n_actions_taken: int = 0

    def select_action(self, state: Any, is_training: bool = True) -> Any:
        # State and mode are ignored, the behavior is purely random
        self.n_actions_taken += 1
        return self.action_space.sample(self.rng)

    def update(
        self,
        state: Any,
        action: Any,
        reward: Any,
        next_state: Any,
        done: Any,
    ) -> None:
        pass  # Non-learning agent, no update logic needed.

    def get_update_info(self) -> Dict[str, Any]:
        return {"actions_taken": self.n_actions_taken}
