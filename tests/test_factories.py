"""
Unit tests for the environment and agent factories and for building
experiments from YAML configuration files.
"""

import os
import tempfile
import unittest

import numpy as np

from agents.factory import AGENT_REGISTRY, create_agent
from agents.randomAgent import RandomAgent
from env.factory import create_environment, create_wrapped_environment
from env.multi_thread_env import MultiThreadEnv
from env.random_walk_env import RandomWalk1D
from env.reward_overridden_env import RewardOverriddenEnv
from env.state_cached_env import StateCachedEnv
from hooks.composedHook import ComposedHook
from hooks.episodeHooks import TotalBatchOriginalRewardPerEpisode, TotalOriginalRewardPerEpisode
from runner.runner import Runner
from spaces.boxSpace import BoxSpace
from spaces.discreteSpace import DiscreteSpace
from utils.experiment_utils import create_experiment, load_config_or_exit

CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "configs")


class TestEnvironmentFactory(unittest.TestCase):
    """create_environment / create_wrapped_environment"""

    def test_create_leaf_environment(self):
        env = create_environment("RandomWalk1D", {"n_states": 9, "start_state": 4})
        self.assertIsInstance(env, RandomWalk1D)
        self.assertEqual(env.state(), 4)

    def test_unknown_name_lists_available_environments(self):
        with self.assertRaises(ValueError) as ctx:
            create_environment("NoSuchEnv")
        self.assertIn("RandomWalk1D", str(ctx.exception))

    def test_bad_parameters_raise_type_error(self):
        with self.assertRaises(TypeError):
            create_environment("RandomWalk1D", {"no_such_param": 1})

    def test_standard_pipeline(self):
        env = create_wrapped_environment("RandomWalk1D", {"n_states": 5}, reward_clip=(-0.5, 0.5))
        self.assertIsInstance(env, RewardOverriddenEnv)
        self.assertIsInstance(env.env, StateCachedEnv)
        self.assertIsInstance(env.unwrapped, RandomWalk1D)
        self.assertEqual(env.state_space(), DiscreteSpace(1, 5))
        while not env.is_terminated():
            env.act(2)
        self.assertEqual(env.reward(), 0.5)
        self.assertEqual(env.original_reward(), 1.0)

    def test_seed_is_forwarded(self):
        a = create_wrapped_environment("RandomWalk1D", {"n_states": 21}, seed=5)
        b = create_wrapped_environment("RandomWalk1D", {"n_states": 21}, seed=5)
        self.assertEqual(a.unwrapped.rng.integers(1000), b.unwrapped.rng.integers(1000))

    def test_frame_stacking_requires_size(self):
        with self.assertRaises(ValueError):
            create_wrapped_environment("RandomWalk1D", n_frames=4)

    def test_batch_of_replicas(self):
        batch = create_wrapped_environment(
            "RandomWalk1D", {"n_states": 7}, reward_clip=(-1, 1), n_replica=4, seed=0, n_workers=0
        )
        self.assertIsInstance(batch, MultiThreadEnv)
        self.assertEqual(len(batch), 4)
        self.assertEqual(batch.n_workers, 0)
        replica_streams = [env.unwrapped.rng.integers(10**9) for env in batch]
        self.assertEqual(len(set(replica_streams)), 4)

    def test_batch_is_reproducible_from_seed(self):
        def first_states(seed):
            batch = create_wrapped_environment(
                "RandomWalk1D", {"n_states": 51}, n_replica=5, seed=seed, n_workers=0
            )
            return batch.state().copy()

        np.testing.assert_array_equal(first_states(9), first_states(9))

    def test_invalid_replica_count_raises(self):
        with self.assertRaises(ValueError):
            create_wrapped_environment("RandomWalk1D", n_replica=0)


class TestImagePipeline(unittest.TestCase):
    """Resize + frame stacking built by the factory on a Gym image environment"""

    def test_declared_and_actual_state_shapes(self):
        import gym

        class NoiseImageEnv(gym.Env):
            def __init__(self, seed=None):
                self.action_space = gym.spaces.Discrete(2)
                self.observation_space = gym.spaces.Box(0, 255, shape=(20, 16), dtype=np.uint8)

            def reset(self, *, seed=None, options=None):
                super().reset(seed=seed)
                return self.np_random.integers(0, 256, (20, 16), dtype=np.uint8), {}

            def step(self, action):
                frame = self.np_random.integers(0, 256, (20, 16), dtype=np.uint8)
                return frame, 3.0, False, False, {}

        env = create_wrapped_environment(
            "GymEnv", {"env": NoiseImageEnv()}, state_size=(8, 8), n_frames=4, reward_clip=(-1, 1)
        )
        self.assertEqual(env.state_space(), BoxSpace.filled(0.0, 255.0, (4, 8, 8)))
        state = env.state()
        self.assertEqual(state.shape, (4, 8, 8))
        self.assertIn(state, env.state_space())
        np.testing.assert_array_equal(state[0], state[3])
        env.act(1)
        self.assertFalse(np.array_equal(env.state()[3], state[3]))
        np.testing.assert_array_equal(env.state()[2], state[3])
        self.assertEqual(env.reward(), 1.0)


class TestAgentFactory(unittest.TestCase):
    """create_agent"""

    def test_create_random_agent(self):
        agent = create_agent("RandomAgent", DiscreteSpace(1, 4), {"seed": 0, "unused": True})
        self.assertIsInstance(agent, RandomAgent)
        action = agent.select_action(None)
        self.assertIn(action, DiscreteSpace(1, 4))

    def test_unknown_agent_lists_registry(self):
        with self.assertRaises(ValueError) as ctx:
            create_agent("NoSuchAgent", DiscreteSpace(2))
        for name in AGENT_REGISTRY:
            self.assertIn(name, str(ctx.exception))


class TestExperimentUtils(unittest.TestCase):
    """load_config_or_exit / create_experiment"""

    def _write_config(self, text):
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        handle.write(text)
        handle.close()
        self.addCleanup(os.remove, handle.name)
        return handle.name

    def test_missing_file_exits(self):
        with self.assertRaises(SystemExit):
            load_config_or_exit("/no/such/config.yaml")

    def test_invalid_yaml_exits(self):
        path = self._write_config("environment: [unclosed")
        with self.assertRaises(SystemExit):
            load_config_or_exit(path)

    def test_empty_file_exits(self):
        path = self._write_config("")
        with self.assertRaises(SystemExit):
            load_config_or_exit(path)

    def test_single_environment_experiment(self):
        config = load_config_or_exit(os.path.join(CONFIG_DIR, "random_walk.yaml"))
        config["runner"]["total_steps"] = 300
        runner = create_experiment(config)
        self.assertIsInstance(runner, Runner)
        self.assertTrue(runner.is_training)
        hook = runner.run()
        self.assertIsInstance(hook, ComposedHook)
        self.assertIsInstance(hook[0], TotalOriginalRewardPerEpisode)
        self.assertGreater(len(hook[0].rewards), 0)
        self.assertEqual(runner.step, 300)

    def test_batch_experiment(self):
        config = load_config_or_exit(os.path.join(CONFIG_DIR, "random_walk_batch.yaml"))
        config["runner"]["total_steps"] = 200
        config["runner"]["show_progress"] = False
        with create_experiment(config) as runner:
            self.assertIsInstance(runner.env, MultiThreadEnv)
            hook = runner.run()
            self.assertIsNotNone(runner.env._pool)
        self.assertIsNone(runner.env._pool)
        self.assertIsInstance(hook[0], TotalBatchOriginalRewardPerEpisode)
        self.assertEqual(len(hook[0].rewards), 8)

    def test_extra_hook_is_appended(self):
        config = {
            "environment": {"name": "RandomWalk1D", "params": {"n_states": 5}},
            "agent": {"name": "RandomAgent"},
            "runner": {"total_steps": 10},
        }
        extra = TotalOriginalRewardPerEpisode()
        runner = create_experiment(config, hook=extra)
        self.assertIs(runner.hook[-1], extra)

    def test_missing_sections_raise(self):
        with self.assertRaises(ValueError):
            create_experiment({"agent": {"name": "RandomAgent"}, "runner": {"total_steps": 1}})
        with self.assertRaises(ValueError):
            create_experiment({"environment": {"name": "RandomWalk1D"}, "runner": {"total_steps": 1}})
        with self.assertRaises(ValueError):
            create_experiment({"environment": {"name": "RandomWalk1D"}, "agent": {"name": "RandomAgent"}})

    def test_unknown_wrapper_setting_raises(self):
        config = {
            "environment": {"name": "RandomWalk1D", "wrappers": {"frame_skip": 4}},
            "agent": {"name": "RandomAgent"},
            "runner": {"total_steps": 1},
        }
        with self.assertRaises(ValueError):
            create_experiment(config)


if __name__ == "__main__":
    unittest.main()
