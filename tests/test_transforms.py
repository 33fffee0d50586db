"""
Unit tests for the state and reward transforms.
"""

import unittest

import numpy as np

from env.transforms import ClipReward, Compose, ResizeImage, StackFrames, bilinear_resize


class TestResizeImage(unittest.TestCase):
    """ResizeImage with the default and an injected resize method"""

    def test_constant_image_stays_constant(self):
        resize = ResizeImage(4, 4)
        out = resize(np.full((10, 8), 7.0))
        self.assertEqual(out.shape, (4, 4))
        self.assertEqual(out.dtype, np.float32)
        np.testing.assert_allclose(out, 7.0, rtol=1e-6)

    def test_output_buffer_is_reused(self):
        resize = ResizeImage(2, 2)
        first = resize(np.zeros((6, 6)))
        second = resize(np.ones((6, 6)))
        self.assertIs(first, second)
        self.assertIs(second, resize.img)

    def test_bilinear_resize_preserves_gradient_direction(self):
        image = np.tile(np.arange(8, dtype=np.float32), (8, 1))
        out = bilinear_resize(image, (4, 4))
        self.assertTrue(np.all(np.diff(out, axis=1) > 0))
        np.testing.assert_allclose(out[0], out[-1])

    def test_injected_resize_function(self):
        calls = []

        def nearest(image, dims):
            calls.append(dims)
            rows = np.arange(dims[0]) * image.shape[0] // dims[0]
            cols = np.arange(dims[1]) * image.shape[1] // dims[1]
            return image[np.ix_(rows, cols)]

        resize = ResizeImage(2, 2, dtype=np.uint8, resize_fn=nearest)
        out = resize(np.arange(16).reshape(4, 4))
        np.testing.assert_array_equal(out, [[0, 2], [8, 10]])
        self.assertEqual(out.dtype, np.uint8)
        self.assertEqual(calls, [(2, 2)])

    def test_resize_function_with_wrong_shape_raises(self):
        resize = ResizeImage(2, 2, resize_fn=lambda image, dims: np.zeros((3, 3)))
        with self.assertRaises(ValueError):
            resize(np.zeros((4, 4)))

    def test_invalid_dimensions_raise(self):
        with self.assertRaises(ValueError):
            ResizeImage(0, 4)
        with self.assertRaises(ValueError):
            ResizeImage()
        with self.assertRaises(ValueError):
            ResizeImage(4, 4, 3)  # Default method is 2-D only


class TestStackFrames(unittest.TestCase):
    """StackFrames keeps the most recent frames, newest last"""

    def test_first_frame_fills_every_slot(self):
        stack = StackFrames(2, 2, n_frames=4)
        out = stack(np.full((2, 2), 5.0))
        self.assertEqual(out.shape, (4, 2, 2))
        np.testing.assert_array_equal(out, 5.0)

    def test_push_drops_oldest(self):
        stack = StackFrames(1, n_frames=3)
        for value in range(1, 6):
            out = stack(np.array([float(value)]))
        np.testing.assert_array_equal(out[:, 0], [3.0, 4.0, 5.0])

    def test_returned_states_are_not_overwritten(self):
        stack = StackFrames(1, n_frames=2)
        first = stack(np.array([1.0]))
        stack(np.array([2.0]))
        np.testing.assert_array_equal(first[:, 0], [1.0, 1.0])

    def test_reset_refills_on_next_frame(self):
        stack = StackFrames(1, n_frames=3)
        stack(np.array([1.0]))
        stack(np.array([2.0]))
        stack.reset()
        np.testing.assert_array_equal(stack(np.array([9.0]))[:, 0], [9.0, 9.0, 9.0])

    def test_wrong_frame_shape_raises(self):
        stack = StackFrames(2, 2, n_frames=2)
        with self.assertRaises(ValueError):
            stack(np.zeros((3, 3)))

    def test_invalid_frame_count_raises(self):
        with self.assertRaises(ValueError):
            StackFrames(2, 2, n_frames=0)


class TestComposeAndClip(unittest.TestCase):
    """Compose chains transforms; ClipReward clamps"""

    def test_compose_applies_in_order(self):
        pipeline = Compose(lambda x: x + 1, lambda x: x * 10)
        self.assertEqual(pipeline(1), 20)
        self.assertEqual(len(pipeline), 2)

    def test_resize_then_stack(self):
        pipeline = Compose(ResizeImage(3, 3), StackFrames(3, 3, n_frames=2))
        out = pipeline(np.full((9, 9), 1.0))
        out = pipeline(np.full((9, 9), 2.0))
        self.assertEqual(out.shape, (2, 3, 3))
        np.testing.assert_allclose(out[0], 1.0, rtol=1e-6)
        np.testing.assert_allclose(out[1], 2.0, rtol=1e-6)

    def test_compose_reset_forwards_to_members(self):
        stack = StackFrames(1, n_frames=2)
        pipeline = Compose(lambda x: x, stack)
        pipeline(np.array([1.0]))
        pipeline.reset()
        np.testing.assert_array_equal(pipeline(np.array([4.0]))[:, 0], [4.0, 4.0])

    def test_compose_rejects_non_callables(self):
        with self.assertRaises(TypeError):
            Compose(lambda x: x, 3)

    def test_clip_reward(self):
        clip = ClipReward(-1.0, 1.0)
        self.assertEqual(clip(5.0), 1.0)
        self.assertEqual(clip(-5.0), -1.0)
        self.assertEqual(clip(0.0), 0.0)
        np.testing.assert_array_equal(clip(np.array([-3.0, 0.25, 3.0])), [-1.0, 0.25, 1.0])
        with self.assertRaises(ValueError):
            ClipReward(1.0, -1.0)


if __name__ == "__main__":
    unittest.main()
