"""Dealer host package: wraps the five-card engine with a WebSocket request layer."""

from .server import DealerServer

__all__ = ["DealerServer"]
