"""AIME card switcher bot with periodic rating snapshot uploads."""

__version__ = "0.1.0"
