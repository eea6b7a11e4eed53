"""Scheduled supervisor for a single long-running game server."""

__version__ = "0.1.0"
