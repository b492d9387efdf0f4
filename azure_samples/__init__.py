"""Runnable Azure management samples with a shared lifecycle."""

__version__ = "2.0.0"
