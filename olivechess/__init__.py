"""A two-player chess game with clocks, played on one screen."""

__version__ = "0.1.0"