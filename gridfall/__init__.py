"""Falling-block puzzle game logic and its network server."""

__version__ = "0.1.0"