"""
Stop conditions for the run loop.

A stop condition is any callable `stop_condition(step) -> bool`, evaluated by
the run loop once per iteration with the global step count; the run ends the
first time it returns True. `StopAfterStep` is the standard one and can show a
progress bar while the run advances.
"""

from typing import Optional

from tqdm import tqdm  # Progress bar for long runs


class StopAfterStep:
    """
    Stops the run once `n` steps have been taken.

    Attributes:
        n (int): Number of steps to run.
        is_show_progress (bool): Whether a tqdm progress bar is displayed.
    """

    def __init__(self, n: int, is_show_progress: bool = False) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise ValueError(f"n must be a positive integer, got {n!r}.")
        self.n: int = n
        self.is_show_progress: bool = is_show_progress
        self._progress: Optional[tqdm] = None

    def __call__(self, step: int) -> bool:
        if self.is_show_progress:
            if self._progress is None:
                self._progress = tqdm(total=self.n, desc="Steps")
            self._progress.update(step - self._progress.n)
        is_done = step >= self.n
        if is_done:
            self.close()
        return is_done

    def close(self) -> None:
        """Closes the progress bar, if one is open. Safe to call repeatedly."""
        if self._progress is not None:
            self._progress.close()
            self._progress = None
