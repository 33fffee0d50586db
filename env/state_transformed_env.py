"""
This module defines the StateTransformedEnv wrapper, which exposes the state of
its inner environment after passing it through a pipeline of transforms
(e.g. resizing a frame, then stacking it with the previous ones).
"""

from typing import Any, Callable

from env.abstractEnv import AbstractEnv, AbstractEnvWrapper
from spaces.abstractSpace import AbstractSpace


def identity(x: Any) -> Any:
    return x


class StateTransformedEnv(AbstractEnvWrapper):
    """
    Applies `state_mapping` to the raw state of the inner environment.

    The mapping is re-run on every `state()` call. Stateful mappings (such as
    `StackFrames`, which pushes one frame per call) must therefore be wrapped
    by a `StateCachedEnv` so that they run once per transition.

    `state_space_mapping` computes the declared space of the transformed
    states from the inner state space. It is used for introspection only;
    transformed states are not checked against it.

    Attributes:
        state_mapping (Callable[[Any], Any]): Transform applied to raw states.
        state_space_mapping (Callable[[AbstractSpace], AbstractSpace]): Computes
            the declared transformed state space.
    """

    def __init__(
        self,
        env: AbstractEnv,
        state_mapping: Callable[[Any], Any] = identity,
        state_space_mapping: Callable[[AbstractSpace], AbstractSpace] = identity,
    ) -> None:
        """
        Initializes the StateTransformedEnv.

        Args:
            env (AbstractEnv): The inner environment.
            state_mapping (Callable[[Any], Any], optional): The state pipeline,
                e.g. a `Compose` of transforms. Defaults to identity.
            state_space_mapping (Callable[[AbstractSpace], AbstractSpace], optional):
                Maps the inner state space to the declared transformed one.
                Defaults to identity.

        Raises:
            TypeError: If either mapping is not callable.
        """
        for name, mapping in (
            ("state_mapping", state_mapping),
            ("state_space_mapping", state_space_mapping),
        ):
            if not callable(mapping):
                raise TypeError(f"'{name}' must be callable, got {type(mapping).__name__}.")
        super().__init__(env)
        self.state_mapping: Callable[[Any], Any] = state_mapping
        self.state_space_mapping: Callable[[AbstractSpace], AbstractSpace] = (
            state_space_mapping
        )

    def state(self) -> Any:
        return self.state_mapping(self.env.state())

    def state_space(self) -> AbstractSpace:
        return self.state_space_mapping(self.env.state_space())

    def reset(self) -> None:
        self.env.reset()
        # Stateful pipelines (frame stacks) must not leak frames across episodes
        reset_mapping = getattr(self.state_mapping, "reset", None)
        if callable(reset_mapping):
            reset_mapping()
