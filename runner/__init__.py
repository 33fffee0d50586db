"""Run loop, evaluation and stop conditions."""
