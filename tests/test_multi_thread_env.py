"""
Unit tests for MultiThreadEnv, the batch of independent environment replicas.
"""

import unittest

import numpy as np

from env.multi_thread_env import MultiThreadEnv
from env.random_walk_env import ACTION_LEFT, ACTION_RIGHT, RandomWalk1D
from env.reward_overridden_env import RewardOverriddenEnv
from env.state_cached_env import StateCachedEnv
from env.transforms import ClipReward
from spaces.arraySpace import ArraySpace
from spaces.discreteSpace import DiscreteSpace
from tests.fakes import ScriptedEnv


class TestMultiThreadEnvConstruction(unittest.TestCase):
    """Validation performed when the batch is built"""

    def test_empty_batch_raises(self):
        with self.assertRaises(ValueError):
            MultiThreadEnv([])

    def test_non_environment_replica_raises(self):
        with self.assertRaises(TypeError):
            MultiThreadEnv([ScriptedEnv(), "not an env"])

    def test_same_instance_twice_raises(self):
        env = ScriptedEnv()
        with self.assertRaises(ValueError):
            MultiThreadEnv([env, env])

    def test_state_shape_mismatch_raises(self):
        with self.assertRaises(ValueError):
            MultiThreadEnv([ScriptedEnv(state_shape=(2,)), ScriptedEnv(state_shape=(3,))])

    def test_owned_replica_raises(self):
        env = ScriptedEnv()
        StateCachedEnv(env)
        with self.assertRaises(ValueError):
            MultiThreadEnv([env, ScriptedEnv()])

    def test_negative_worker_count_raises(self):
        with self.assertRaises(ValueError):
            MultiThreadEnv([ScriptedEnv()], n_workers=-1)

    def test_batched_spaces_and_arrays(self):
        batch = MultiThreadEnv(
            [ScriptedEnv(state_shape=(2,)) for _ in range(3)], n_workers=0
        )
        self.assertEqual(batch.state().shape, (3, 2))
        self.assertEqual(batch.reward().shape, (3,))
        self.assertEqual(batch.is_terminated().dtype, bool)
        self.assertEqual(len(batch), 3)
        self.assertIsInstance(batch.action_space(), ArraySpace)
        self.assertIn([1, 2, 1], batch.action_space())
        self.assertNotIn([1, 2], batch.action_space())


class TestMultiThreadEnvStepping(unittest.TestCase):
    """Stepping, automatic resets and failure propagation"""

    def _walks(self, n_workers):
        return MultiThreadEnv(
            [RandomWalk1D(n_states=5, start_state=s) for s in (2, 3, 4)],
            n_workers=n_workers,
        )

    def test_each_replica_receives_its_own_action(self):
        replicas = [ScriptedEnv(episode_length=10) for _ in range(3)]
        with MultiThreadEnv(replicas, n_workers=2) as batch:
            batch.act([1, 2, 1])
            batch.act([2, 2, 1])
        self.assertEqual([r.actions for r in replicas], [[1, 2], [2, 2], [1, 1]])

    def test_results_are_in_replica_order(self):
        batch = self._walks(n_workers=3)
        batch.act([ACTION_RIGHT, ACTION_RIGHT, ACTION_RIGHT])
        np.testing.assert_array_equal(batch.state(), [3, 4, 4])
        np.testing.assert_array_equal(batch.reward(), [0.0, 0.0, 1.0])
        np.testing.assert_array_equal(batch.is_terminated(), [False, False, True])
        batch.close()

    def test_terminated_replica_is_reset_and_steppable(self):
        batch = self._walks(n_workers=0)
        batch.act([ACTION_LEFT, ACTION_RIGHT, ACTION_RIGHT])
        # Replica 0 and 2 ended; their rewards describe the finishing transition
        np.testing.assert_array_equal(batch.reward(), [-1.0, 0.0, 1.0])
        np.testing.assert_array_equal(batch.is_terminated(), [True, False, True])
        np.testing.assert_array_equal(batch.state(), [2, 4, 4])
        self.assertFalse(any(env.is_terminated() for env in batch))
        batch.act([ACTION_RIGHT, ACTION_RIGHT, ACTION_LEFT])
        np.testing.assert_array_equal(batch.state(), [3, 3, 3])
        np.testing.assert_array_equal(batch.is_terminated(), [False, True, False])

    def test_original_rewards_survive_reset_and_reshaping(self):
        replicas = [
            RewardOverriddenEnv(ScriptedEnv(episode_length=1, rewards=[r]), ClipReward())
            for r in (5.0, -3.0)
        ]
        batch = MultiThreadEnv(replicas, n_workers=0)
        batch.act([1, 1])
        np.testing.assert_array_equal(batch.reward(), [1.0, -1.0])
        np.testing.assert_array_equal(batch.original_reward(), [5.0, -3.0])
        np.testing.assert_array_equal(batch.is_terminated(), [True, True])

    def test_threaded_and_sequential_stepping_agree(self):
        def trajectory(n_workers):
            batch = MultiThreadEnv(
                [RandomWalk1D(n_states=7, seed=seed) for seed in range(6)],
                n_workers=n_workers,
            )
            rng = np.random.default_rng(99)
            history = []
            for _ in range(100):
                batch.act(batch.action_space().sample(rng))
                history.append(
                    (batch.state().copy(), batch.reward().copy(), batch.is_terminated().copy())
                )
            batch.close()
            return history

        for (s0, r0, t0), (s1, r1, t1) in zip(trajectory(0), trajectory(4)):
            np.testing.assert_array_equal(s0, s1)
            np.testing.assert_array_equal(r0, r1)
            np.testing.assert_array_equal(t0, t1)

    def test_wrong_number_of_actions_raises(self):
        batch = self._walks(n_workers=0)
        with self.assertRaises(ValueError):
            batch.act([ACTION_RIGHT, ACTION_RIGHT])
        with self.assertRaises(ValueError):
            batch.act([ACTION_RIGHT] * 4)

    def test_replica_failure_propagates_after_others_step(self):
        replicas = [
            ScriptedEnv(episode_length=10),
            ScriptedEnv(episode_length=10, fail_on_step=1),
            ScriptedEnv(episode_length=10, rewards=[7.0]),
        ]
        batch = MultiThreadEnv(replicas, n_workers=3)
        with self.assertRaises(RuntimeError) as ctx:
            batch.act([1, 1, 1])
        self.assertIn("scripted failure", str(ctx.exception))
        self.assertEqual(len(replicas[0].actions), 1)
        self.assertEqual(len(replicas[2].actions), 1)
        self.assertEqual(batch.reward()[2], 7.0)
        batch.close()

    def test_lowest_failing_replica_wins(self):
        def fail_with_key_error(action):
            raise KeyError("replica 2")

        replicas = [ScriptedEnv(), ScriptedEnv(fail_on_step=1), ScriptedEnv()]
        replicas[2].act = fail_with_key_error
        batch = MultiThreadEnv(replicas, n_workers=2)
        with self.assertRaises(RuntimeError):
            batch.act([1, 1, 1])
        self.assertEqual(replicas[0].actions, [1])

    def test_reset_restarts_every_replica(self):
        replicas = [ScriptedEnv(episode_length=10) for _ in range(2)]
        batch = MultiThreadEnv(replicas, n_workers=0)
        batch.act([1, 1])
        batch.reset()
        np.testing.assert_array_equal(batch.state(), [0.0, 0.0])
        np.testing.assert_array_equal(batch.is_terminated(), [False, False])
        self.assertEqual([r.n_resets for r in replicas], [1, 1])

    def test_close_closes_replicas(self):
        replicas = [ScriptedEnv() for _ in range(2)]
        batch = MultiThreadEnv(replicas, n_workers=2)
        batch.act([1, 1])
        batch.close()
        self.assertTrue(all(r.is_closed for r in replicas))

    def test_replica_spaces_are_exposed_per_position(self):
        batch = MultiThreadEnv([RandomWalk1D(n_states=n) for n in (3, 5)], n_workers=0)
        self.assertEqual(batch.state_space()[1], DiscreteSpace(1, 5))


if __name__ == "__main__":
    unittest.main()
