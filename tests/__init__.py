"""Unit tests for spaces, environments, wrappers, hooks and the run loop."""
