"""Timing and logging helpers."""

from .benchmarking import PerformanceStats, Timer, timer
from .logging_setup import setup_logging

__all__ = ["PerformanceStats", "Timer", "timer", "setup_logging"]
