"""Utility helpers for exam mastering."""

from .logging import setup_logging

__all__ = [
    "setup_logging",
]
