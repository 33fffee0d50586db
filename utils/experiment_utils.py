# utils/experiment_utils.py
"""
Utility functions for setting up experiments from a YAML configuration.

A configuration file has three sections, mirroring the components of a run:

    experiment_name: RandomWalk_RandomAgent
    environment:            # leaf environment + wrapper pipeline (+ replicas)
      name: RandomWalk1D
      params: {n_states: 7}
      wrappers: {reward_clip: [-1, 1], state_size: null, n_frames: null}
      n_replica: 4          # omit for a single environment
      n_workers: 0
      seed: 42
    agent:
      name: RandomAgent
      params: {seed: 0}
    runner:
      is_training: true
      total_steps: 10000
      show_progress: false
      log_every_n_episodes: 10   # 0 disables console summaries

`create_experiment` turns such a dictionary into a ready-to-run `Runner`
whose hook records the original reward of every episode. The runner owns the
environment it built (for a batch, a worker pool), so use it as a context
manager to release it:

    with create_experiment(load_config_or_exit(path)) as runner:
        hook = runner.run()
"""

import sys  # For sys.exit in helper functions
from typing import Any, Dict, Optional

import yaml  # For parsing YAML configuration files

from agents.factory import create_agent
from env.abstractEnv import AbstractEnv
from env.factory import create_wrapped_environment
from env.multi_thread_env import MultiThreadEnv
from hooks.abstractHook import AbstractHook
from hooks.composedHook import ComposedHook
from hooks.episodeHooks import (
    StepsPerEpisode,
    TotalBatchOriginalRewardPerEpisode,
    TotalOriginalRewardPerEpisode,
)
from hooks.periodicHooks import DoEveryNEpisode, DoEveryNStep
from runner.runner import Runner
from runner.stopConditions import StopAfterStep


def load_config_or_exit(config_file_path: str) -> Dict[str, Any]:
    """
    Loads a YAML configuration file. Prints an error message and exits the
    program if loading fails (file not found, invalid YAML, empty file).

    Args:
        config_file_path (str): The path to the YAML configuration file.

    Returns:
        Dict[str, Any]: The loaded configuration dictionary.
    """
    print(f"Attempting to load configuration from: {config_file_path}")
    try:
        with open(config_file_path, "r") as f:
            config: Optional[Dict[str, Any]] = yaml.safe_load(f)
    except FileNotFoundError:
        print(f"Error: Configuration file not found at '{config_file_path}'.")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error parsing YAML configuration file '{config_file_path}': {e}")
        sys.exit(1)

    if not isinstance(config, dict):  # Empty file or a bare scalar/list
        print(
            f"Error: Configuration file '{config_file_path}' is empty or is not a mapping."
        )
        sys.exit(1)
    print(f"Configuration loaded successfully from '{config_file_path}'.")
    return config


def create_environment_from_config(env_config: Dict[str, Any]) -> AbstractEnv:
    """
    Builds the (possibly batched) wrapped environment described by the
    `environment` section of a configuration.

    Raises:
        ValueError: If the section has no `name`, or on invalid wrapper settings.
    """
    if "name" not in env_config:
        raise ValueError("The 'environment' section must define a 'name'.")
    wrappers: Dict[str, Any] = env_config.get("wrappers") or {}
    unknown_keys = set(wrappers) - {"state_size", "n_frames", "reward_clip"}
    if unknown_keys:
        raise ValueError(f"Unknown wrapper settings: {sorted(unknown_keys)}.")
    return create_wrapped_environment(
        env_config["name"],
        params=env_config.get("params") or {},
        state_size=wrappers.get("state_size"),
        n_frames=wrappers.get("n_frames"),
        reward_clip=wrappers.get("reward_clip"),
        n_replica=env_config.get("n_replica"),
        seed=env_config.get("seed"),
        n_workers=env_config.get("n_workers"),
    )


def create_hook_for_env(env: AbstractEnv, log_every_n_episodes: int = 0) -> ComposedHook:
    """
    Builds the standard hook of an experiment: original reward per episode
    (per replica for a batch), episode lengths for single environments, and
    an optional periodic console summary.

    Args:
        env (AbstractEnv): The environment the hook will observe.
        log_every_n_episodes (int, optional): Period of the console summary;
            0 disables it. For a batch the period counts global steps rather
            than episodes. Defaults to 0.

    Returns:
        ComposedHook: The reward tracker is always the first child.
    """
    if isinstance(env, MultiThreadEnv):
        batch_rewards = TotalBatchOriginalRewardPerEpisode(len(env))
        hooks: list = [batch_rewards]
        if log_every_n_episodes > 0:

            def print_batch_summary(step: int, agent: Any, env: AbstractEnv) -> None:
                finished = [r for r in batch_rewards.rewards if r]
                if finished:
                    last_scores = ", ".join(f"{r[-1]:.2f}" for r in finished)
                    print(f"Step {step}: last episodic scores per replica: {last_scores}")

            # Replicas finish episodes independently, so summaries follow the global step
            hooks.append(DoEveryNStep(print_batch_summary, n=log_every_n_episodes))
        return ComposedHook(*hooks)

    rewards = TotalOriginalRewardPerEpisode()
    steps = StepsPerEpisode()
    hooks = [rewards, steps]
    if log_every_n_episodes > 0:

        def print_episode_summary(episode: int, agent: Any, env: AbstractEnv) -> None:
            print(
                f"Episode {episode} Finished. Episodic Score: {rewards.rewards[-1]:.2f}. "
                f"Episode Length: {steps.steps[-1]}. Agent: {agent.get_update_info()}"
            )

        hooks.append(DoEveryNEpisode(print_episode_summary, n=log_every_n_episodes))
    return ComposedHook(*hooks)


def create_experiment(config: Dict[str, Any], hook: Optional[AbstractHook] = None) -> Runner:
    """
    Creates environment, agent and hook from a configuration dictionary and
    wires them into a Runner.

    Args:
        config (Dict[str, Any]): The full configuration (see module docstring).
        hook (Optional[AbstractHook], optional): Extra hook appended after the
            standard ones. Defaults to None.

    Raises:
        ValueError: On missing sections or invalid values.

    Returns:
        Runner: A runner ready to `run()`; `close()` it (or use it in a `with`
            block) to close the environment afterwards.
    """
    experiment_name: str = config.get("experiment_name", "Default_RL_Experiment")
    print(f"\n--- Setting up experiment: {experiment_name} ---")

    env = create_environment_from_config(config.get("environment") or {})

    agent_config: Dict[str, Any] = config.get("agent") or {}
    if "name" not in agent_config:
        raise ValueError("The 'agent' section must define a 'name'.")
    agent = create_agent(
        agent_config["name"], env.action_space(), params=agent_config.get("params") or {}
    )

    runner_config: Dict[str, Any] = config.get("runner") or {}
    if "total_steps" not in runner_config:
        raise ValueError("The 'runner' section must define 'total_steps'.")
    stop_condition = StopAfterStep(
        runner_config["total_steps"],
        is_show_progress=runner_config.get("show_progress", False),
    )

    experiment_hook = create_hook_for_env(env, runner_config.get("log_every_n_episodes", 0))
    if hook is not None:
        experiment_hook.hooks.append(hook)

    return Runner(
        agent=agent,
        env=env,
        stop_condition=stop_condition,
        hook=experiment_hook,
        is_training=runner_config.get("is_training", True),
        description=experiment_name,
    )
