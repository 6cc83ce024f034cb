"""WebSocket channel implementation.

Full-duplex channel over one client WebSocket connection, using the
``websockets`` library. A background reader task hands every inbound
frame to the message handler in arrival order.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK

from ..config import ChannelConfig
from ..errors import ChannelClosedError
from .base import BaseChannel

logger = logging.getLogger(__name__)


class WebSocketChannel(BaseChannel):
    """Client-side WebSocket channel.

    Wire format:
    - Outbound: one text frame per call
    - Inbound: text (or binary) frames, passed through untouched
    """

    def __init__(self, address: str, config: ChannelConfig | None = None):
        super().__init__()
        self.address = address
        self.config = config or ChannelConfig()
        self._ws: Any = None  # websockets ClientConnection
        self._reader_task: asyncio.Task[None] | None = None

    async def _do_open(self) -> None:
        """Run the opening handshake and start the reader."""
        self._ws = await websockets.connect(
            self.address,
            open_timeout=self.config.open_timeout,
            close_timeout=self.config.close_timeout,
            ping_interval=self.config.ping_interval,
            ping_timeout=self.config.ping_timeout,
            max_size=self.config.max_size,
        )
        self._reader_task = asyncio.create_task(self._read_loop())
        logger.debug(f"WebSocket handshake complete: {self.address}")

    async def _do_close(self) -> None:
        """Close the WebSocket and wait for the reader to finish."""
        if self._ws is not None:
            await self._ws.close()

        task = self._reader_task
        if task is not None and task is not asyncio.current_task():
            if not task.done():
                task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._reader_task = None

    async def _do_send(self, data: str) -> None:
        """Send one text frame."""
        try:
            await self._ws.send(data)
        except ConnectionClosed as e:
            raise ChannelClosedError(f"WebSocket closed: {e}") from e

    async def _read_loop(self) -> None:
        """Background task delivering inbound frames."""
        error: BaseException | None = None
        try:
            async for data in self._ws:
                try:
                    self._deliver(data)
                except Exception as e:
                    logger.exception(f"Message handler failed: {e}")
        except ConnectionClosedOK:
            pass
        except ConnectionClosed as e:
            error = e
        except Exception as e:
            logger.exception(f"WebSocket receive loop error: {e}")
            error = e
        finally:
            self._mark_closed(error)
