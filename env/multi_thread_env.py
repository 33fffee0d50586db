"""
This module defines the MultiThreadEnv class, which steps a fixed number of
independent environment replicas as one batched environment.

The batch exposes the same capability set as a single environment, lifted to
the batch level:

- `state()` is the replica states stacked along a new leading batch axis,
- `reward()`, `original_reward()` and `is_terminated()` are length-N arrays,
- `action_space()` / `state_space()` are `ArraySpace`s of the replica spaces.

`act(actions)` steps every replica with its own action. The reward, original
reward and terminal flag recorded for a replica describe the transition it
just made; a replica that terminated is then reset immediately, so `state()`
always holds steppable states. Callers (and hooks) detect per-replica episode
ends through `is_terminated()` after each call.

Replica steps touch disjoint state and are executed on a thread pool; the
arrays are written by replica index, so results are identical to stepping the
replicas sequentially.
"""

import os
from multiprocessing.pool import ThreadPool
from typing import Any, Iterator, List, Optional, Sequence

import numpy as np

from env.abstractEnv import AbstractEnv
from spaces.arraySpace import ArraySpace


class MultiThreadEnv(AbstractEnv):
    """
    A batch of N independent environment replicas.

    Attributes:
        envs (List[AbstractEnv]): The replicas, owned exclusively by the batch.
        n_workers (int): Number of pool threads; 0 steps replicas in the caller's thread.
        states (np.ndarray): Stacked replica states, shape `(N, *state_shape)`.
        rewards (np.ndarray): Reward of each replica's last transition.
        original_rewards (np.ndarray): Unshaped reward of each replica's last transition.
        terminals (np.ndarray): Whether each replica's last transition ended its episode.
    """

    def __init__(
        self, envs: Sequence[AbstractEnv], n_workers: Optional[int] = None
    ) -> None:
        """
        Initializes the batch and takes ownership of the replicas.

        Args:
            envs (Sequence[AbstractEnv]): Distinct, already configured replicas whose
                states share one shape.
            n_workers (Optional[int], optional): Pool size. Defaults to
                `min(N, cpu_count)`; 0 disables the pool.

        Raises:
            ValueError: If `envs` is empty, contains the same instance twice,
                        contains an already owned environment, or if the
                        replica states differ in shape.
            TypeError: If a replica is not an AbstractEnv.
        """
        envs = list(envs)
        if not envs:
            raise ValueError("MultiThreadEnv needs at least one replica.")
        for i, env in enumerate(envs):
            if not isinstance(env, AbstractEnv):
                raise TypeError(f"Replica {i} is not an AbstractEnv: {type(env).__name__}.")
        if len({id(env) for env in envs}) != len(envs):
            raise ValueError("Replicas must be distinct environment instances.")

        first_states = [np.asarray(env.state()) for env in envs]
        state_shape = first_states[0].shape
        for i, state in enumerate(first_states):
            if state.shape != state_shape:
                raise ValueError(
                    f"All replicas must share one state shape: replica 0 has "
                    f"{state_shape}, replica {i} has {state.shape}."
                )
        for env in envs:
            env._take_ownership(self)

        if n_workers is None:
            n_workers = min(len(envs), os.cpu_count() or 1)
        if n_workers < 0:
            raise ValueError(f"n_workers must be >= 0, got {n_workers}.")

        self.envs: List[AbstractEnv] = envs
        self.n_workers: int = n_workers
        self._pool: Optional[ThreadPool] = None

        n = len(envs)
        self.states: np.ndarray = np.stack(first_states)
        self.rewards: np.ndarray = np.array([env.reward() for env in envs], dtype=np.float64)
        self.original_rewards: np.ndarray = np.array(
            [env.original_reward() for env in envs], dtype=np.float64
        )
        self.terminals: np.ndarray = np.zeros(n, dtype=bool)
        self._action_space = ArraySpace([env.action_space() for env in envs])
        self._state_space = ArraySpace([env.state_space() for env in envs])

    # --- Batched capability set ---

    def state(self) -> np.ndarray:
        return self.states

    def reward(self) -> np.ndarray:
        return self.rewards

    def original_reward(self) -> np.ndarray:
        return self.original_rewards

    def is_terminated(self) -> np.ndarray:
        return self.terminals

    def action_space(self) -> ArraySpace:
        return self._action_space

    def state_space(self) -> ArraySpace:
        return self._state_space

    def act(self, actions: Sequence[Any]) -> None:
        """
        Steps every replica with its own action, resetting replicas that terminate.

        Every replica is stepped even if another one fails. When one or more
        replicas raised, the exception of the lowest failing index is re-raised
        unchanged once all replicas have been processed; the entries of a failed
        replica keep their previous values.

        Args:
            actions (Sequence[Any]): One action per replica, in replica order.

        Raises:
            ValueError: If the number of actions differs from the number of replicas.
        """
        if len(actions) != len(self.envs):
            raise ValueError(
                f"Expected {len(self.envs)} actions (one per replica), got {len(actions)}."
            )
        jobs = list(enumerate(actions))
        if self.n_workers == 0:
            errors = [self._step_replica(job) for job in jobs]
        else:
            errors = self._get_pool().map(self._step_replica, jobs)
        for error in errors:
            if error is not None:
                raise error

    def reset(self) -> None:
        """Starts a fresh episode in every replica."""
        for i, env in enumerate(self.envs):
            env.reset()
            self.states[i] = env.state()
            self.rewards[i] = env.reward()
            self.original_rewards[i] = env.original_reward()
            self.terminals[i] = False

    def close(self) -> None:
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
            self._pool = None
        for env in self.envs:
            env.close()

    # --- Replica access ---

    def __len__(self) -> int:
        return len(self.envs)

    def __getitem__(self, index: int) -> AbstractEnv:
        return self.envs[index]

    def __iter__(self) -> Iterator[AbstractEnv]:
        return iter(self.envs)

    def __enter__(self) -> "MultiThreadEnv":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"MultiThreadEnv(n_replicas={len(self.envs)}, n_workers={self.n_workers})"

    # --- Internals ---

    def _get_pool(self) -> ThreadPool:
        if self._pool is None:
            self._pool = ThreadPool(processes=self.n_workers)
        return self._pool

    def _step_replica(self, job: tuple) -> Optional[BaseException]:
        # Runs on a worker thread: only replica `i` and row `i` of the arrays are touched
        i, action = job
        env = self.envs[i]
        try:
            env.act(action)
            self.rewards[i] = env.reward()
            self.original_rewards[i] = env.original_reward()
            self.terminals[i] = env.is_terminated()
            if self.terminals[i]:
                env.reset()
            self.states[i] = env.state()
        except Exception as error:
            # Handed back to act(), which re-raises it after the other replicas ran
            return error
        return None
