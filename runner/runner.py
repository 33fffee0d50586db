# runner/runner.py

"""
Defines the Runner class, which orchestrates the agent-environment interaction
loop, and the `run` / `evaluate` helpers built on it.

The Runner manages:
- The main step loop: select an action, apply it, notify agent and hooks.
- Episode boundaries: POST_EPISODE hooks and environment resets.
- The stop condition, evaluated once per iteration.

Every hook stage fires strictly after the transition it describes, and an
episode that ends is always reported before the environment is reset. The
Runner catches nothing: failures of the agent, the environment or a hook end
the run and propagate to the caller.

Batched environments (`MultiThreadEnv`) reset finished replicas themselves
inside `act`; for them per-replica episode ends are reported to hooks at
POST_ACT through `env.is_terminated()`, and POST_EPISODE is not fired.
"""

from typing import Any, Callable, Dict, Optional

import numpy as np

from agents.abstractAgent import AbstractAgent
from env.abstractEnv import AbstractEnv
from env.multi_thread_env import MultiThreadEnv
from hooks.abstractHook import AbstractHook, EmptyHook, Stage
from hooks.composedHook import ComposedHook
from hooks.episodeHooks import (
    StepsPerEpisode,
    TotalBatchOriginalRewardPerEpisode,
    TotalOriginalRewardPerEpisode,
)
from runner.stopConditions import StopAfterStep


def _detach(value: Any) -> Any:
    # Arrays may be reused output buffers of the environment; scalars are immutable
    return np.copy(value) if isinstance(value, np.ndarray) else value


class Runner:
    """
    Orchestrates the interaction between an agent and an environment until a
    stop condition is met, notifying a hook at every lifecycle stage.

    Attributes:
        agent (AbstractAgent): The agent selecting actions.
        env (AbstractEnv): The environment (single or batched).
        stop_condition (Callable[[int], bool]): Ends the run when it returns True.
        hook (AbstractHook): Observer of the lifecycle stages.
        is_training (bool): Whether `agent.update` is called after each step.
        description (str): Free-form label printed when the run starts.
        step (int): Global step count, the number of transitions taken so far.
    """

    def __init__(
        self,
        agent: AbstractAgent,
        env: AbstractEnv,
        stop_condition: Callable[[int], bool],
        hook: Optional[AbstractHook] = None,
        is_training: bool = True,
        description: str = "",
        verbose: bool = True,
    ) -> None:
        """
        Initializes the Runner.

        Args:
            agent (AbstractAgent): The agent.
            env (AbstractEnv): The environment.
            stop_condition (Callable[[int], bool]): Called with the global step
                count once per iteration.
            hook (Optional[AbstractHook], optional): Hook notified at every stage.
                Defaults to an EmptyHook.
            is_training (bool, optional): True to let the agent learn. Defaults to True.
            description (str, optional): Label of the run. Defaults to "".
            verbose (bool, optional): Print run start/finish messages. Defaults to True.
        """
        if not callable(stop_condition):
            raise TypeError("stop_condition must be callable with the step count.")
        self.agent: AbstractAgent = agent
        self.env: AbstractEnv = env
        self.stop_condition: Callable[[int], bool] = stop_condition
        self.hook: AbstractHook = EmptyHook() if hook is None else hook
        self.is_training: bool = is_training
        self.description: str = description
        self.verbose: bool = verbose
        self.step: int = 0
        self.n_episodes: int = 0

    def _notify(self, stage: Stage) -> None:
        self.hook(stage, self.step, self.agent, self.env)

    def _start_episode(self) -> None:
        self.agent.on_episode_start()
        self._notify(Stage.PRE_EPISODE)

    def _end_episode(self) -> None:
        self.n_episodes += 1
        self.agent.on_episode_end()
        self._notify(Stage.POST_EPISODE)

    def run(self) -> AbstractHook:
        """
        Runs the loop until the stop condition is met.

        Returns:
            AbstractHook: The hook, so accumulated statistics can be read.
        """
        is_batched = isinstance(self.env, MultiThreadEnv)
        if self.verbose:
            print(
                f"\nRunner starting. {self.description + '. ' if self.description else ''}"
                f"Agent: {type(self.agent).__name__}. Environment: {self.env!r}. "
                f"Mode: {'Training' if self.is_training else 'Evaluation'}."
            )
        try:
            self._notify(Stage.PRE_EXPERIMENT)
            self.env.reset()
            self._start_episode()

            while True:
                # Transforms and batches rewrite their output buffers in place during act()
                state = _detach(self.env.state())
                action = self.agent.select_action(state, is_training=self.is_training)
                self._notify(Stage.PRE_ACT)

                self.env.act(action)
                self.step += 1

                if self.is_training:
                    reward, next_state, done = (
                        _detach(self.env.reward()),
                        _detach(self.env.state()),
                        _detach(self.env.is_terminated()),
                    )
                    self.agent.update(state, action, reward, next_state, done)
                self._notify(Stage.POST_ACT)

                if not is_batched and self.env.is_terminated():
                    self._end_episode()
                    self.env.reset()
                    self._start_episode()

                if self.stop_condition(self.step):
                    break

            self._notify(Stage.POST_EXPERIMENT)
        finally:
            # Release the progress bar even when the run ended with an exception
            close_stop_condition = getattr(self.stop_condition, "close", None)
            if callable(close_stop_condition):
                close_stop_condition()
            if self.verbose:
                print(
                    f"Runner finished. Total steps: {self.step}. "
                    f"Completed episodes: {self.n_episodes if not is_batched else 'n/a (batched)'}."
                )
        return self.hook

    def close(self) -> None:
        """Closes the environment, e.g. the worker pool of a batch."""
        self.env.close()

    def __enter__(self) -> "Runner":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def run(
    agent: AbstractAgent,
    env: AbstractEnv,
    stop_condition: Callable[[int], bool],
    hook: Optional[AbstractHook] = None,
    is_training: bool = True,
) -> AbstractHook:
    """Shorthand for `Runner(agent, env, stop_condition, hook, is_training).run()`."""
    return Runner(agent, env, stop_condition, hook, is_training=is_training).run()


def evaluate(agent: AbstractAgent, env: AbstractEnv, n_steps: int) -> Dict[str, Any]:
    """
    Runs `agent` without training for `n_steps` and summarizes completed episodes.

    Scores are measured on the original (unshaped) reward. Episodes still
    running when the budget is exhausted are not counted.

    Args:
        agent (AbstractAgent): The agent to evaluate.
        env (AbstractEnv): A dedicated evaluation environment (single or batched).
        n_steps (int): Number of steps to run.

    Returns:
        Dict[str, Any]: `avg_score`, `avg_length` (None for batched environments,
            whose replicas do not share episode boundaries) and `n_episodes`.
            Averages are None when no episode completed.
    """
    if isinstance(env, MultiThreadEnv):
        batch_rewards = TotalBatchOriginalRewardPerEpisode(len(env))
        Runner(agent, env, StopAfterStep(n_steps), batch_rewards, is_training=False, verbose=False).run()
        scores = [score for replica_scores in batch_rewards.rewards for score in replica_scores]
        lengths = []
    else:
        hook = ComposedHook(TotalOriginalRewardPerEpisode(), StepsPerEpisode())
        Runner(agent, env, StopAfterStep(n_steps), hook, is_training=False, verbose=False).run()
        scores = hook[0].rewards
        lengths = hook[1].steps

    summary = {
        "avg_score": float(np.mean(scores)) if scores else None,
        "avg_length": float(np.mean(lengths)) if lengths else None,
        "n_episodes": len(scores),
    }
    print(
        f"Evaluation finished after {n_steps} steps: {summary['n_episodes']} episodes, "
        f"average score {summary['avg_score']}, average length {summary['avg_length']}."
    )
    return summary
