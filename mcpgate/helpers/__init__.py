"""Shared helper functions used by config and runtime modules."""

from .env import env_csv, env_flag

__all__ = [
    "env_csv",
    "env_flag",
]
