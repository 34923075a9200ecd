"""Utilities."""

from .logger import BoardDisplay, setup_logging

__all__ = ["BoardDisplay", "setup_logging"]
