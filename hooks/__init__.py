"""Lifecycle hooks invoked by the run loop."""
