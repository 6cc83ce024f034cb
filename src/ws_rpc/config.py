"""Client and channel configuration."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .protocol.envelopes import RpcReply

UnmatchedHandler = Callable[["RpcReply"], None]


def _env_float(name: str, default: float | None) -> float | None:
    """Read an optional float from the environment ("" or "none" disables)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw or raw.lower() == "none":
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass
class ChannelConfig:
    """Settings for the underlying WebSocket channel.

    ``open_timeout`` defaults to None: the opening handshake waits as long
    as the transport does.
    """

    open_timeout: float | None = None
    close_timeout: float = 10.0

    # Keep-alive
    ping_interval: float | None = 30.0
    ping_timeout: float | None = 10.0

    # Largest inbound frame accepted, in bytes
    max_size: int | None = 2**20


@dataclass
class ClientConfig:
    """Settings for an RpcClient.

    ``call_timeout`` is the optional expiry policy for pending calls. When
    set, a call with no reply after that many seconds is evicted from the
    pending table and fails with CallTimeoutError. Off by default.

    ``on_unmatched`` is called with every reply whose id has no pending
    call. Unmatched replies are otherwise dropped silently.
    """

    channel: ChannelConfig = field(default_factory=ChannelConfig)
    call_timeout: float | None = None
    on_unmatched: UnmatchedHandler | None = None

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from WS_RPC_* environment variables."""
        defaults = ChannelConfig()
        channel = ChannelConfig(
            open_timeout=_env_float("WS_RPC_OPEN_TIMEOUT", defaults.open_timeout),
            ping_interval=_env_float("WS_RPC_PING_INTERVAL", defaults.ping_interval),
        )
        return cls(
            channel=channel,
            call_timeout=_env_float("WS_RPC_CALL_TIMEOUT", None),
        )
