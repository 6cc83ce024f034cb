"""Channel layer.

Provides the duplex message channel the client runs over:
- WebSocketChannel - one client WebSocket connection
- MockChannel - in-memory, for tests
"""

from .base import BaseChannel, Channel, ChannelState, CloseHandler, MessageHandler
from .mock import MockChannel
from .websocket import WebSocketChannel

__all__ = [
    # Base abstractions
    "Channel",
    "BaseChannel",
    "ChannelState",
    "MessageHandler",
    "CloseHandler",
    # Implementations
    "WebSocketChannel",
    "MockChannel",
]
