"""Deploys game level contracts and registers them with the level registry."""

__version__ = "0.1.0"
