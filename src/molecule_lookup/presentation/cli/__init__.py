"""Command-line interface modules."""

from .main import main

__all__ = ["main"]
