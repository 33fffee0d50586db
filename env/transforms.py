"""
State and reward transforms meant to be plugged into the environment wrappers.

- `ResizeImage` resizes a 2-D frame into a reusable buffer. The numerical
  method is injected through `resize_fn`; the default is bilinear
  interpolation with `torch.nn.functional.interpolate`.
- `StackFrames` keeps the most recent frames so the state carries motion.
- `Compose` chains transforms into one state pipeline.
- `ClipReward` clamps rewards into a fixed range.

Each `ResizeImage`/`StackFrames` instance owns its buffers, so every replica
of a batched environment must build its own pipeline.
"""

from typing import Any, Callable, Optional, Sequence, Tuple

import numpy as np
import torch
import torch.nn.functional as F


def _check_dims(dims: Sequence[int]) -> Tuple[int, ...]:
    if len(dims) == 0:
        raise ValueError("At least one dimension is required.")
    for d in dims:
        if isinstance(d, bool) or not isinstance(d, (int, np.integer)) or d <= 0:
            raise ValueError(f"Dimensions must be positive integers, got {tuple(dims)}.")
    return tuple(int(d) for d in dims)


def bilinear_resize(image: np.ndarray, dims: Tuple[int, int]) -> np.ndarray:
    """
    Resizes a 2-D image with bilinear interpolation.

    Args:
        image (np.ndarray): Frame of shape (height, width).
        dims (Tuple[int, int]): Target (height, width).

    Returns:
        np.ndarray: The resized frame as float32.
    """
    tensor = torch.as_tensor(np.asarray(image, dtype=np.float32))[None, None]
    resized = F.interpolate(tensor, size=dims, mode="bilinear", align_corners=False)
    return resized[0, 0].numpy()


class ResizeImage:
    """
    Resizes frames into an instance-local output buffer.

    Attributes:
        img (np.ndarray): The output buffer, overwritten on every call.
        resize_fn (Callable): `resize_fn(image, dims) -> array` of shape `dims`.
    """

    def __init__(
        self,
        *dims: int,
        dtype: Any = np.float32,
        resize_fn: Optional[Callable[[np.ndarray, Tuple[int, ...]], np.ndarray]] = None,
    ) -> None:
        """
        Initializes the ResizeImage transform.

        Args:
            *dims (int): Target size, e.g. `ResizeImage(84, 84)`.
            dtype (Any, optional): Element type of the output buffer. Defaults to np.float32.
            resize_fn (Optional[Callable], optional): Numerical resize method.
                Defaults to `bilinear_resize` (only valid for 2-D targets).

        Raises:
            ValueError: If a dimension is not a positive integer, or if the
                        default method is used with a non 2-D target.
        """
        self.dims: Tuple[int, ...] = _check_dims(dims)
        if resize_fn is None:
            if len(self.dims) != 2:
                raise ValueError(
                    f"The default bilinear resize needs a 2-D target, got {self.dims}."
                )
            resize_fn = bilinear_resize
        self.resize_fn = resize_fn
        self.img: np.ndarray = np.zeros(self.dims, dtype=dtype)

    def __call__(self, state: np.ndarray) -> np.ndarray:
        resized = np.asarray(self.resize_fn(state, self.dims))
        if resized.shape != self.dims:
            raise ValueError(
                f"resize_fn returned shape {resized.shape}, expected {self.dims}."
            )
        np.copyto(self.img, resized, casting="unsafe")
        return self.img


class StackFrames:
    """
    Stacks the last `n_frames` frames along a new leading axis.

    The first frame after construction or `reset()` fills every slot; each
    later call drops the oldest frame and appends the new one. Every call
    pushes a frame, so the transform must run once per transition (put a
    `StateCachedEnv` above the `StateTransformedEnv` that holds it).

    Attributes:
        frames (np.ndarray): Buffer of shape `(n_frames, *dims)`, newest last.
    """

    def __init__(self, *dims: int, n_frames: int, dtype: Any = np.float32) -> None:
        self.dims: Tuple[int, ...] = _check_dims(dims)
        if isinstance(n_frames, bool) or not isinstance(n_frames, (int, np.integer)) or n_frames <= 0:
            raise ValueError(f"n_frames must be a positive integer, got {n_frames!r}.")
        self.n_frames: int = int(n_frames)
        self.frames: np.ndarray = np.zeros((self.n_frames, *self.dims), dtype=dtype)
        self._is_empty: bool = True

    def __call__(self, frame: np.ndarray) -> np.ndarray:
        frame = np.asarray(frame)
        if frame.shape != self.dims:
            raise ValueError(f"Expected a frame of shape {self.dims}, got {frame.shape}.")
        if self._is_empty:
            self.frames[:] = frame
            self._is_empty = False
        else:
            self.frames[:-1] = self.frames[1:]
            self.frames[-1] = frame
        # Copy so that states handed out earlier are not changed by later pushes
        return self.frames.copy()

    def reset(self) -> None:
        self._is_empty = True


class Compose:
    """Applies a sequence of transforms in order."""

    def __init__(self, *transforms: Callable[[Any], Any]) -> None:
        for i, transform in enumerate(transforms):
            if not callable(transform):
                raise TypeError(f"Transform {i} is not callable: {transform!r}.")
        self.transforms: Tuple[Callable[[Any], Any], ...] = transforms

    def __call__(self, x: Any) -> Any:
        for transform in self.transforms:
            x = transform(x)
        return x

    def reset(self) -> None:
        for transform in self.transforms:
            reset = getattr(transform, "reset", None)
            if callable(reset):
                reset()

    def __getitem__(self, index: int) -> Callable[[Any], Any]:
        return self.transforms[index]

    def __len__(self) -> int:
        return len(self.transforms)


class ClipReward:
    """Clamps a reward into `[low, high]`."""

    def __init__(self, low: float = -1.0, high: float = 1.0) -> None:
        if low > high:
            raise ValueError(f"low ({low}) must be <= high ({high}).")
        self.low = low
        self.high = high

    def __call__(self, reward: Any) -> Any:
        return np.clip(reward, self.low, self.high)

    def __repr__(self) -> str:
        return f"ClipReward({self.low}, {self.high})"
