"""
This module defines ComposedHook, which fans a lifecycle event out to an
ordered list of child hooks.
"""

from typing import Any, Iterator, List

from env.abstractEnv import AbstractEnv
from hooks.abstractHook import AbstractHook, Stage


class ComposedHook(AbstractHook):
    """
    Forwards every event to each child hook, in list order.

    Children receive exactly the event the composite received; periodic
    children evaluate their own period, so siblings may use different ones.
    A composite may contain other composites. Exceptions raised by a child
    propagate immediately and the remaining children are not called.

    Attributes:
        hooks (List[AbstractHook]): The child hooks.
    """

    def __init__(self, *hooks: AbstractHook) -> None:
        for i, hook in enumerate(hooks):
            if not callable(hook):
                raise TypeError(f"Child hook {i} is not callable: {hook!r}.")
        self.hooks: List[AbstractHook] = list(hooks)

    def __call__(self, stage: Stage, step: int, agent: Any, env: AbstractEnv) -> None:
        for hook in self.hooks:
            hook(stage, step, agent, env)

    def __getitem__(self, index: int) -> AbstractHook:
        return self.hooks[index]

    def __len__(self) -> int:
        return len(self.hooks)

    def __iter__(self) -> Iterator[AbstractHook]:
        return iter(self.hooks)
