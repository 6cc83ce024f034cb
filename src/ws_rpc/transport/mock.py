"""In-memory channel for tests and embedding.

Usage:
    channel = MockChannel()
    client = RpcClient(channel)
    await channel.open()

    task = asyncio.create_task(client.call("Arith.Add", {"A": 1, "B": 2}))
    await asyncio.sleep(0)

    assert channel.sent_requests[0]["id"] == 1
    channel.deliver({"id": 1, "error": None, "result": 3})
    assert await task == 3
"""

from __future__ import annotations

import json
from typing import Any

from .base import BaseChannel


class MockChannel(BaseChannel):
    """Channel that records sent frames and delivers frames on demand.

    No actual I/O - everything is in-memory.
    """

    def __init__(self, open_error: BaseException | None = None) -> None:
        super().__init__()
        self._open_error = open_error
        self._send_error: BaseException | None = None
        self._sent: list[str] = []

    @property
    def sent(self) -> list[str]:
        """Raw frames sent through this channel."""
        return self._sent.copy()

    @property
    def sent_requests(self) -> list[dict[str, Any]]:
        """Sent frames parsed back into dicts."""
        return [json.loads(frame) for frame in self._sent]

    def fail_sends(self, error: BaseException | None) -> None:
        """Make every following send raise error (None to stop)."""
        self._send_error = error

    def deliver(self, frame: str | bytes | dict[str, Any] | list[Any]) -> None:
        """Deliver one inbound frame, encoding dicts and lists as JSON."""
        if isinstance(frame, (dict, list)):
            frame = json.dumps(frame)
        self._deliver(frame)

    def drop(self, error: BaseException | None = None) -> None:
        """Simulate the remote end closing the connection."""
        self._mark_closed(error)

    async def _do_open(self) -> None:
        if self._open_error is not None:
            raise self._open_error

    async def _do_close(self) -> None:
        """No-op for mock."""
        pass

    async def _do_send(self, data: str) -> None:
        if self._send_error is not None:
            raise self._send_error
        self._sent.append(data)
