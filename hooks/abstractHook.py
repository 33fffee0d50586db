"""
This module defines the lifecycle stages of a run and the AbstractHook class,
the base of every observer the run loop notifies.

The run loop calls `hook(stage, step, agent, env)` at each lifecycle point,
strictly after the transition the stage describes. The base class dispatches
the event to one handler per stage (`on_post_act`, `on_post_episode`, ...),
all of which do nothing by default, so a hook only implements the stages it
cares about. Hooks keep their own accumulated state and may read the agent
and the environment, but must not step either of them.
"""

import abc  # Abstract Base Classes module
import enum
from typing import Any

from env.abstractEnv import AbstractEnv


class Stage(enum.Enum):
    """Lifecycle points of a run, in the order they occur."""

    PRE_EXPERIMENT = "pre_experiment"
    PRE_EPISODE = "pre_episode"
    PRE_ACT = "pre_act"
    POST_ACT = "post_act"  # After the transition and the agent's update
    POST_EPISODE = "post_episode"
    POST_EXPERIMENT = "post_experiment"


class AbstractHook(metaclass=abc.ABCMeta):
    """
    Base class of all hooks.

    Subclasses override the `on_<stage>` handlers they need, or `__call__`
    itself when the same logic applies to a configurable stage (see the
    periodic hooks).
    """

    def __call__(self, stage: Stage, step: int, agent: Any, env: AbstractEnv) -> None:
        """
        Dispatches a lifecycle event to the handler of its stage.

        Args:
            stage (Stage): The lifecycle point being reported.
            step (int): Global step count (number of transitions so far).
            agent (Any): The agent driving the run.
            env (AbstractEnv): The environment of the run.
        """
        handler = getattr(self, f"on_{stage.value}")
        handler(step, agent, env)

    def on_pre_experiment(self, step: int, agent: Any, env: AbstractEnv) -> None:
        pass

    def on_pre_episode(self, step: int, agent: Any, env: AbstractEnv) -> None:
        pass

    def on_pre_act(self, step: int, agent: Any, env: AbstractEnv) -> None:
        pass

    def on_post_act(self, step: int, agent: Any, env: AbstractEnv) -> None:
        pass

    def on_post_episode(self, step: int, agent: Any, env: AbstractEnv) -> None:
        pass

    def on_post_experiment(self, step: int, agent: Any, env: AbstractEnv) -> None:
        pass


class EmptyHook(AbstractHook):
    """A hook that ignores every event."""
