"""Pylint plugin and autofixer that keeps dictionary keys sorted."""

__version__ = "1.0.0"
