"""
A factory module for creating and registering environments.

This module provides a centralized way to instantiate leaf environments from a
string name, typically defined in a configuration file (e.g., YAML), and to
compose them with the standard wrapper pipeline:

    RewardOverriddenEnv(            # optional reward clipping
        StateCachedEnv(             # run the state pipeline once per transition
            StateTransformedEnv(    # optional resize + frame stacking
                <leaf environment>
            )
        )
    )

When a number of replicas is requested, every replica is built with its own
pipeline (transforms own their buffers) and its own seed, and the replicas are
grouped into a `MultiThreadEnv`.

To add a new environment:
1. Implement the environment class, ensuring it inherits from `AbstractEnv`.
2. Import the new environment class into this file.
3. Add an entry to the `ENV_REGISTRY` dictionary, mapping a unique string name
   (used in configuration files) to the environment class.
"""

from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type

import numpy as np

from env.abstractEnv import AbstractEnv
from env.gym_env import GymEnv
from env.multi_thread_env import MultiThreadEnv
from env.random_walk_env import RandomWalk1D
from env.reward_overridden_env import RewardOverriddenEnv
from env.state_cached_env import StateCachedEnv
from env.state_transformed_env import StateTransformedEnv, identity
from env.transforms import ClipReward, Compose, ResizeImage, StackFrames
from spaces.abstractSpace import AbstractSpace
from spaces.boxSpace import BoxSpace

# --- Environment Registry ---
# Maps string identifiers (names) to leaf environment classes. The names are
# used in YAML configuration files under the `environment.name` key.
ENV_REGISTRY: Dict[str, Type[AbstractEnv]] = {
    "RandomWalk1D": RandomWalk1D,
    "GymEnv": GymEnv,
}

# Upper bound of the declared pixel range of image pipelines
PIXEL_MAX: float = 255.0


def create_environment(name: str, params: Optional[Dict[str, Any]] = None) -> AbstractEnv:
    """
    Instantiates a leaf environment from its registered name using provided parameters.

    Args:
        name (str): The registered name of the environment (a key of `ENV_REGISTRY`).
        params (Optional[Dict[str, Any]], optional): Keyword arguments for the
            environment's constructor, typically the `environment.params`
            section of a YAML configuration file. Defaults to None.

    Raises:
        ValueError: If `name` is not found in `ENV_REGISTRY`.

    Returns:
        AbstractEnv: An initialized environment in its first episode.
    """
    if name not in ENV_REGISTRY:
        available_environments = list(ENV_REGISTRY.keys())
        raise ValueError(
            f"Unknown environment name: '{name}'. "
            f"Available environments in registry are: {available_environments}"
        )

    params_to_pass = {} if params is None else params
    env_class: Type[AbstractEnv] = ENV_REGISTRY[name]

    try:
        environment_instance = env_class(**params_to_pass)
    except TypeError as e:
        # Missing or unexpected constructor arguments in the configuration
        print(
            f"Error: TypeError during instantiation of environment '{name}'. "
            f"Check if all required parameters are provided in the configuration "
            f"and match the environment's __init__ signature. Details: {e}"
        )
        raise

    return environment_instance


def _build_state_pipeline(
    state_size: Optional[Sequence[int]], n_frames: Optional[int]
) -> Tuple[Callable[[Any], Any], Callable[[AbstractSpace], AbstractSpace]]:
    """Returns (state_mapping, state_space_mapping) for the requested image pipeline."""
    transforms = []
    frame_dims = None
    if state_size is not None:
        frame_dims = tuple(state_size)
        transforms.append(ResizeImage(*frame_dims))
    if n_frames is not None:
        if frame_dims is None:
            raise ValueError("n_frames requires state_size, the shape of the stacked frames.")
        transforms.append(StackFrames(*frame_dims, n_frames=n_frames))

    if not transforms:
        return identity, identity

    declared_shape = frame_dims if n_frames is None else (n_frames, *frame_dims)
    declared_space = BoxSpace.filled(0.0, PIXEL_MAX, declared_shape)
    return Compose(*transforms), lambda _: declared_space


def _build_single_environment(
    name: str,
    params: Dict[str, Any],
    state_size: Optional[Sequence[int]],
    n_frames: Optional[int],
    reward_clip: Optional[Sequence[float]],
) -> AbstractEnv:
    state_mapping, state_space_mapping = _build_state_pipeline(state_size, n_frames)
    env: AbstractEnv = StateCachedEnv(
        StateTransformedEnv(
            create_environment(name, params),
            state_mapping=state_mapping,
            state_space_mapping=state_space_mapping,
        )
    )
    if reward_clip is not None:
        low, high = reward_clip
        env = RewardOverriddenEnv(env, ClipReward(low, high))
    return env


def create_wrapped_environment(
    name: str,
    params: Optional[Dict[str, Any]] = None,
    state_size: Optional[Sequence[int]] = None,  # Resize target, e.g. (84, 84)
    n_frames: Optional[int] = None,  # Number of stacked frames, needs state_size
    reward_clip: Optional[Sequence[float]] = None,  # (low, high) reward clamp
    n_replica: Optional[int] = None,  # None builds a single environment
    seed: Optional[int] = None,
    n_workers: Optional[int] = None,  # Pool size of the batch, see MultiThreadEnv
) -> AbstractEnv:
    """
    Builds a leaf environment wrapped in the standard pipeline, or a batch of them.

    If `seed` is given it is added to `params` under the `seed` key; for a
    batch, every replica receives its own seed spawned from `seed` through a
    `numpy.random.SeedSequence`, so replicas are independent but reproducible.

    Args:
        name (str): Registered leaf environment name.
        params (Optional[Dict[str, Any]], optional): Leaf constructor parameters.
        state_size (Optional[Sequence[int]], optional): Resize frames to this size.
        n_frames (Optional[int], optional): Stack this many frames.
        reward_clip (Optional[Sequence[float]], optional): Clamp rewards to (low, high).
        n_replica (Optional[int], optional): Number of replicas of a batch.
        seed (Optional[int], optional): Base seed.
        n_workers (Optional[int], optional): Thread pool size of the batch.

    Raises:
        ValueError: On unknown names or inconsistent wrapper configuration.

    Returns:
        AbstractEnv: The wrapped environment or a `MultiThreadEnv`.
    """
    base_params: Dict[str, Any] = dict(params or {})

    if n_replica is None:
        if seed is not None:
            base_params["seed"] = seed
        env = _build_single_environment(name, base_params, state_size, n_frames, reward_clip)
        print(f"Successfully created environment: '{name}' with parameters: {base_params}")
        return env

    if n_replica < 1:
        raise ValueError(f"n_replica must be >= 1, got {n_replica}.")

    replica_seeds = [None] * n_replica
    if seed is not None:
        replica_seeds = [
            int(child.generate_state(1)[0])
            for child in np.random.SeedSequence(seed).spawn(n_replica)
        ]

    replicas = []
    for replica_seed in replica_seeds:
        replica_params = dict(base_params)
        if replica_seed is not None:
            replica_params["seed"] = replica_seed
        replicas.append(
            _build_single_environment(name, replica_params, state_size, n_frames, reward_clip)
        )

    batch = MultiThreadEnv(replicas, n_workers=n_workers)
    print(
        f"Successfully created {n_replica} replicas of environment '{name}' "
        f"with parameters: {base_params} (workers: {batch.n_workers})"
    )
    return batch
