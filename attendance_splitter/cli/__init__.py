"""Command line interface for the attendance division splitter."""

from .__main__ import main

__all__ = ["main"]
