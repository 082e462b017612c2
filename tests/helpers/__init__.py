"""Shared fakes and builders for the unit tests."""

__all__ = [
    "fakes",
]
