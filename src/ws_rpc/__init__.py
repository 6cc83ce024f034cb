"""ws-rpc - correlated JSON-RPC calls over one WebSocket.

Connect once, call many times:

    client = await ws_rpc.connect("ws://localhost:1234/rpc")
    result = await client.call("Arith.Multiply", {"A": 7, "B": 8})

Replies may arrive in any order, alone or batched; each one resolves the
call that carries its id.
"""

from .client import RpcClient
from .config import ChannelConfig, ClientConfig
from .connector import connect
from .errors import (
    CallTimeoutError,
    ChannelClosedError,
    ConnectError,
    ProtocolError,
    RpcCallError,
    RpcClientError,
)
from .pending import IdCounter, PendingCall, PendingCallTable
from .protocol import BatchReply, InboundFrame, JsonCodec, RpcReply, RpcRequest, SingleReply
from .transport import BaseChannel, Channel, ChannelState, MockChannel, WebSocketChannel

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "connect",
    "RpcClient",
    # Configuration
    "ClientConfig",
    "ChannelConfig",
    # Bookkeeping
    "IdCounter",
    "PendingCall",
    "PendingCallTable",
    # Protocol
    "JsonCodec",
    "RpcRequest",
    "RpcReply",
    "SingleReply",
    "BatchReply",
    "InboundFrame",
    # Channels
    "Channel",
    "BaseChannel",
    "ChannelState",
    "WebSocketChannel",
    "MockChannel",
    # Errors
    "RpcClientError",
    "ConnectError",
    "ChannelClosedError",
    "ProtocolError",
    "RpcCallError",
    "CallTimeoutError",
]
