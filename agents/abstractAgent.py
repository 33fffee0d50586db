"""
This module defines the AbstractAgent class, an abstract base class (ABC)
that outlines the interface the run loop relies on to drive a policy.

The run loop treats the agent as an opaque capability: given a state it
produces an action, and it is told about every transition so it can learn
from it. Learning algorithms, networks and model persistence live behind this
interface and are not part of this package.
"""

import abc  # Abstract Base Classes module
from typing import Any, Dict

from spaces.abstractSpace import AbstractSpace


class AbstractAgent(metaclass=abc.ABCMeta):
    """
    Abstract base class defining the core structure and required methods of an agent.

    Attributes:
        action_space (AbstractSpace): The space actions are chosen from. For a
                                      batched environment this is the compound
                                      space holding one action per replica.
    """

    def __init__(self, action_space: AbstractSpace) -> None:
        """
        Initializes the AbstractAgent.

        Args:
            action_space (AbstractSpace): The environment's action space.
        """
        self.action_space: AbstractSpace = action_space

    @abc.abstractmethod
    def select_action(self, state: Any, is_training: bool = True) -> Any:
        """
        Selects an action for the current state.

        Args:
            state (Any): The current state (for a batch, the stacked replica states).
            is_training (bool, optional): If True the agent may explore; if False
                it should act according to its learned policy. Defaults to True.

        Returns:
            Any: An element of `action_space`.
        """
        raise NotImplementedError("Subclasses must implement the select_action method.")

    @abc.abstractmethod
    def update(
        self,
        state: Any,
        action: Any,
        reward: Any,
        next_state: Any,
        done: Any,
    ) -> None:
        """
        Observes one transition (state, action, reward, next_state, done).

        Called by the run loop in training mode, after the environment step and
        before the `POST_ACT` hooks. For a batch every argument is batched and
        `next_state` already holds the fresh states of replicas that were reset.
        """
        raise NotImplementedError("Subclasses must implement the update method.")

    @abc.abstractmethod
    def get_update_info(self) -> Dict[str, Any]:
        """
        Returns a dictionary of agent-specific metrics (e.g. epsilon, loss) for hooks to log.
        """
        raise NotImplementedError("Subclasses must implement the get_update_info method.")

    def on_episode_start(self) -> None:
        """Called by the run loop at the beginning of each episode."""

    def on_episode_end(self) -> None:
        """Called by the run loop when an episode ends, before the POST_EPISODE hooks."""
