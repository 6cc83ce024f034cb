"""Channel abstraction.

A channel is one duplex, ordered, message-oriented connection. It knows
nothing about ids or replies: it sends text frames and hands every inbound
frame to a single message handler.

Architecture:
- Channel is the PROTOCOL (interface) the client depends on
- BaseChannel holds the state machine and handler plumbing
- Implementations provide _do_open / _do_close / _do_send
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import Protocol, runtime_checkable

from ..errors import ChannelClosedError

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str | bytes], None]
CloseHandler = Callable[[BaseException | None], None]


class ChannelState(str, Enum):
    """Connection state machine."""

    IDLE = "idle"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


@runtime_checkable
class Channel(Protocol):
    """Protocol for duplex message channels.

    All channels must implement:
    - open/close: lifecycle, each runs at most once
    - send: write one text frame
    - on_message: the single inbound notification point
    - on_close: notified once when the channel stops, with the error if any
    """

    @property
    def state(self) -> ChannelState:
        """Current connection state."""
        ...

    @property
    def is_open(self) -> bool:
        """Check if the channel can send."""
        ...

    async def open(self) -> None:
        """Open the channel.

        Raises:
            Exception: whatever the transport raised; no retry is attempted
        """
        ...

    async def close(self) -> None:
        """Close the channel gracefully."""
        ...

    async def send(self, data: str) -> None:
        """Send one frame.

        Raises:
            ChannelClosedError: If the channel is not open
        """
        ...

    def on_message(self, handler: MessageHandler) -> None:
        """Set the handler that receives every inbound frame."""
        ...

    def on_close(self, handler: CloseHandler) -> None:
        """Add a handler called once when the channel closes."""
        ...


class BaseChannel(ABC):
    """Base class for channels with common functionality.

    Provides:
    - State management
    - Message and close handler dispatch
    """

    def __init__(self) -> None:
        self._state = ChannelState.IDLE
        self._message_handler: MessageHandler | None = None
        self._close_handlers: list[CloseHandler] = []
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ChannelState:
        """Current connection state."""
        return self._state

    @property
    def is_open(self) -> bool:
        """Check if the channel can send."""
        return self._state == ChannelState.OPEN

    async def open(self) -> None:
        """Open the channel."""
        async with self._lock:
            if self._state == ChannelState.OPEN:
                return
            if self._state != ChannelState.IDLE:
                raise ChannelClosedError(f"Cannot open a channel in state {self._state.value}")

            self._state = ChannelState.OPENING
            try:
                await self._do_open()
            except BaseException:
                self._state = ChannelState.CLOSED
                raise

            # A frame or close may already have been handled by the reader
            if self._state == ChannelState.OPENING:
                self._state = ChannelState.OPEN
                logger.info(f"{self.__class__.__name__} open")

    async def close(self) -> None:
        """Close the channel."""
        async with self._lock:
            if self._state == ChannelState.CLOSED:
                return
            if self._state == ChannelState.IDLE:
                self._mark_closed(None)
                return

            self._state = ChannelState.CLOSING
            try:
                await self._do_close()
            finally:
                self._mark_closed(None)

    async def send(self, data: str) -> None:
        """Send one frame."""
        if not self.is_open:
            raise ChannelClosedError(f"Channel is {self._state.value}")
        await self._do_send(data)

    def on_message(self, handler: MessageHandler) -> None:
        """Set the handler that receives every inbound frame."""
        self._message_handler = handler

    def on_close(self, handler: CloseHandler) -> None:
        """Add a handler called once when the channel closes."""
        self._close_handlers.append(handler)

    def _deliver(self, data: str | bytes) -> None:
        """Hand one inbound frame to the message handler."""
        if self._message_handler is None:
            logger.debug("Dropping inbound frame: no message handler")
            return
        self._message_handler(data)

    def _mark_closed(self, error: BaseException | None) -> None:
        """Move to CLOSED and notify close handlers, once."""
        if self._state == ChannelState.CLOSED:
            return
        self._state = ChannelState.CLOSED

        if error is not None:
            logger.info(f"{self.__class__.__name__} closed: {error}")
        else:
            logger.info(f"{self.__class__.__name__} closed")

        for handler in self._close_handlers:
            try:
                handler(error)
            except Exception as e:
                logger.exception(f"Close handler failed: {e}")

    # Abstract methods for subclasses
    @abstractmethod
    async def _do_open(self) -> None:
        """Implementation-specific open logic."""
        ...

    @abstractmethod
    async def _do_close(self) -> None:
        """Implementation-specific close logic."""
        ...

    @abstractmethod
    async def _do_send(self, data: str) -> None:
        """Implementation-specific send logic."""
        ...
