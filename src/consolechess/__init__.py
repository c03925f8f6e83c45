"""Two-player chess rules engine for console front ends."""

__version__ = "1.1.0"
