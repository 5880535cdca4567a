"""Execution acceptor service for remote dispatch."""

from pathfinder.acceptor.app import create_app, serve

__all__ = [
    "create_app",
    "serve",
]
