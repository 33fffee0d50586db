"""Experiment configuration helpers."""
