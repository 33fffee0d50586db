"""
This module defines the AbstractEnv class, the minimal capability set that every
environment in this framework exposes, and AbstractEnvWrapper, the base class
of all environments that forward to an inner environment.

Environments here are stateful objects queried through methods rather than
through the tuple returned by `gym.Env.step`: after `act(action)` has advanced
the environment by exactly one transition, `state()`, `reward()` and
`is_terminated()` describe the result of that transition. This lets wrappers
alter one aspect (the state, the reward, the action) while the rest of the
interface is forwarded untouched.

Ownership is single: an environment can be held by at most one wrapper (or
batch). Wrapper chains are therefore plain trees of exclusive references,
never shared and never cyclic.
"""

import abc  # Abstract Base Classes module
from typing import Any

from spaces.abstractSpace import AbstractSpace


class AbstractEnv(metaclass=abc.ABCMeta):
    """
    Abstract base class defining the capability set of an environment.

    A concrete environment must be in a valid, steppable state right after
    construction.
    """

    # Set when a wrapper or a batch takes exclusive ownership of this instance
    _is_owned: bool = False

    @abc.abstractmethod
    def state(self) -> Any:
        """Returns the current state (observation) of the environment."""
        raise NotImplementedError("Subclasses must implement the state method.")

    @abc.abstractmethod
    def reward(self) -> Any:
        """Returns the reward produced by the most recent transition."""
        raise NotImplementedError("Subclasses must implement the reward method.")

    @abc.abstractmethod
    def is_terminated(self) -> Any:
        """Returns True if the current episode has ended."""
        raise NotImplementedError(
            "Subclasses must implement the is_terminated method."
        )

    @abc.abstractmethod
    def act(self, action: Any) -> None:
        """
        Applies `action` and advances the environment by exactly one transition.

        Args:
            action (Any): An element of `action_space()`.
        """
        raise NotImplementedError("Subclasses must implement the act method.")

    @abc.abstractmethod
    def reset(self) -> None:
        """Starts a fresh episode."""
        raise NotImplementedError("Subclasses must implement the reset method.")

    @abc.abstractmethod
    def action_space(self) -> AbstractSpace:
        """Returns the space of legal actions."""
        raise NotImplementedError("Subclasses must implement the action_space method.")

    @abc.abstractmethod
    def state_space(self) -> AbstractSpace:
        """Returns the space the states belong to."""
        raise NotImplementedError("Subclasses must implement the state_space method.")

    def original_reward(self) -> Any:
        """
        Returns the reward before any reshaping applied by wrappers.

        For an environment that is not wrapped this is simply `reward()`.
        """
        return self.reward()

    def close(self) -> None:
        """Releases external resources. Nothing to release by default."""

    @property
    def unwrapped(self) -> "AbstractEnv":
        """The innermost (leaf) environment."""
        return self

    def _take_ownership(self, owner: object) -> None:
        if self._is_owned:
            raise ValueError(
                f"Environment {self!r} is already owned by another wrapper or batch; "
                f"create a separate instance for {type(owner).__name__}."
            )
        self._is_owned = True


class AbstractEnvWrapper(AbstractEnv):
    """
    Base class for environments that forward to exactly one inner environment.

    Every capability is delegated to `self.env`; subclasses override only the
    aspect they alter. Attributes that are not defined on the wrapper itself
    are looked up on the inner environment, so leaf-specific attributes stay
    reachable through any number of wrapper layers. Failures raised by the
    inner environment are never caught here.

    Attributes:
        env (AbstractEnv): The wrapped (inner) environment.
    """

    def __init__(self, env: AbstractEnv) -> None:
        """
        Initializes the wrapper and takes exclusive ownership of `env`.

        Args:
            env (AbstractEnv): The environment to wrap.

        Raises:
            TypeError: If `env` is not an AbstractEnv.
            ValueError: If `env` is already owned by another wrapper or batch.
        """
        if not isinstance(env, AbstractEnv):
            raise TypeError(
                f"{type(self).__name__} can only wrap an AbstractEnv, got {type(env).__name__}."
            )
        env._take_ownership(self)
        self.env: AbstractEnv = env

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails on the wrapper itself
        if name == "env" or name.startswith("__"):
            raise AttributeError(name)
        return getattr(self.env, name)

    def state(self) -> Any:
        return self.env.state()

    def reward(self) -> Any:
        return self.env.reward()

    def is_terminated(self) -> Any:
        return self.env.is_terminated()

    def act(self, action: Any) -> None:
        self.env.act(action)

    def reset(self) -> None:
        self.env.reset()

    def action_space(self) -> AbstractSpace:
        return self.env.action_space()

    def state_space(self) -> AbstractSpace:
        return self.env.state_space()

    def original_reward(self) -> Any:
        return self.env.original_reward()

    def close(self) -> None:
        self.env.close()

    @property
    def unwrapped(self) -> AbstractEnv:
        return self.env.unwrapped

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.env!r})"
