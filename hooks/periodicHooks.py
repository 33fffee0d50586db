"""
Hooks that run a user callback periodically, every N steps or every N episodes.

Typical uses are console summaries and periodic evaluation, e.g.

    DoEveryNEpisode(lambda t, agent, env: print(f"episode {t}: {tracker.rewards[-1]}"))
    DoEveryNStep(lambda t, agent, env: evaluate(agent, make_env(), 10_000), n=250_000)
"""

from typing import Any, Callable

from env.abstractEnv import AbstractEnv
from hooks.abstractHook import AbstractHook, Stage


def _check_period(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValueError(f"The period must be a positive integer, got {n!r}.")
    return n


class DoEveryNStep(AbstractHook):
    """
    Calls `fn(step, agent, env)` at `stage` when the global step count is an
    exact multiple of `n`.

    Attributes:
        fn (Callable[[int, Any, AbstractEnv], None]): The callback.
        n (int): The period, in steps.
        stage (Stage): The stage the hook listens to.
    """

    def __init__(
        self,
        fn: Callable[[int, Any, AbstractEnv], None],
        n: int = 1,
        stage: Stage = Stage.POST_ACT,
    ) -> None:
        if not callable(fn):
            raise TypeError(f"'fn' must be callable, got {type(fn).__name__}.")
        self.fn = fn
        self.n: int = _check_period(n)
        self.stage: Stage = stage

    def __call__(self, stage: Stage, step: int, agent: Any, env: AbstractEnv) -> None:
        if stage is self.stage and step % self.n == 0:
            self.fn(step, agent, env)


class DoEveryNEpisode(AbstractHook):
    """
    Counts the episodes ending at `stage` and calls `fn(episode, agent, env)`
    each time the count is an exact multiple of `n`.

    Attributes:
        fn (Callable[[int, Any, AbstractEnv], None]): The callback.
        n (int): The period, in episodes.
        stage (Stage): The stage the hook listens to.
        t (int): Number of episodes seen so far.
    """

    def __init__(
        self,
        fn: Callable[[int, Any, AbstractEnv], None],
        n: int = 1,
        stage: Stage = Stage.POST_EPISODE,
    ) -> None:
        if not callable(fn):
            raise TypeError(f"'fn' must be callable, got {type(fn).__name__}.")
        self.fn = fn
        self.n: int = _check_period(n)
        self.stage: Stage = stage
        self.t: int = 0

    def __call__(self, stage: Stage, step: int, agent: Any, env: AbstractEnv) -> None:
        if stage is not self.stage:
            return
        self.t += 1
        if self.t % self.n == 0:
            self.fn(self.t, agent, env)
