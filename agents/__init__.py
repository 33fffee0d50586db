"""Agents (policies) driven by the run loop."""
