"""Exceptions raised by the RPC client.

Every error carries enough context to be handled by the caller of the
call it belongs to. Nothing here is ever broadcast to unrelated calls.
"""

from __future__ import annotations

from typing import Any


class RpcClientError(Exception):
    """Base class for all ws_rpc errors."""


class ConnectError(RpcClientError, ConnectionError):
    """The channel could not be opened."""

    def __init__(self, address: str, cause: BaseException | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to connect to {address}{detail}")
        self.address = address
        self.cause = cause


class ChannelClosedError(RpcClientError, ConnectionError):
    """The channel is closed, or closed while a call was pending."""


class ProtocolError(RpcClientError, ValueError):
    """An inbound frame could not be decoded."""


class CallTimeoutError(RpcClientError, TimeoutError):
    """No reply arrived within the configured call timeout."""

    def __init__(self, call_id: int, method: str, timeout: float) -> None:
        super().__init__(f"Call {call_id} ({method}) timed out after {timeout}s")
        self.call_id = call_id
        self.method = method
        self.timeout = timeout


class RpcCallError(RpcClientError):
    """The remote end answered a call with a non-null error.

    ``error`` holds the payload exactly as it came off the wire. When the
    payload is a JSON-RPC 2.0 error object, ``code``, ``message`` and
    ``data`` are filled from it.
    """

    def __init__(self, error: Any, call_id: int | str | None = None) -> None:
        self.error = error
        self.call_id = call_id
        self.code: int | None = None
        self.data: Any | None = None

        if isinstance(error, dict):
            code = error.get("code")
            self.code = code if isinstance(code, int) else None
            self.message = str(error.get("message", error))
            self.data = error.get("data")
        else:
            self.message = str(error)

        super().__init__(self.message)
