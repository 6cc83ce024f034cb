"""Connector: open one channel and promote it to an RpcClient."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .client import RpcClient
from .config import ChannelConfig, ClientConfig
from .errors import ConnectError
from .transport.base import Channel
from .transport.websocket import WebSocketChannel

logger = logging.getLogger(__name__)

ChannelFactory = Callable[[str, ChannelConfig], Channel]


async def connect(
    address: str,
    config: ClientConfig | None = None,
    *,
    channel_factory: ChannelFactory | None = None,
) -> RpcClient:
    """Open a channel to address and return a client bound to it.

    One attempt only. There is no open timeout unless
    ``config.channel.open_timeout`` is set.

    Args:
        address: WebSocket URL, e.g. "ws://localhost:1234/rpc"
        config: Client settings (default: ClientConfig())
        channel_factory: Builds the channel (default: WebSocketChannel)

    Raises:
        ConnectError: The channel could not be opened; the transport
            error is kept as ``__cause__`` and ``.cause``
    """
    config = config or ClientConfig()
    factory = channel_factory or WebSocketChannel
    channel = factory(address, config.channel)

    try:
        await channel.open()
    except Exception as e:
        logger.debug(f"Connect to {address} failed: {e}")
        raise ConnectError(address, e) from e

    return RpcClient(channel, config)
