"""Environments, environment wrappers and the batched multi-environment."""
