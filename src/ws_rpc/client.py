"""Correlation client.

Turns a channel into an awaitable call interface. Each call gets a fresh
integer id and a pending entry; inbound replies are matched back to their
call by id, in whatever order and grouping they arrive.

All bookkeeping runs synchronously on the event loop: call() registers its
entry before its first await, and inbound frames are dispatched by a plain
function. Neither can observe the other half-way through.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .config import ClientConfig
from .errors import CallTimeoutError, ChannelClosedError, ProtocolError, RpcCallError
from .pending import IdCounter, PendingCallTable
from .protocol.codec import JsonCodec
from .protocol.envelopes import RpcReply, RpcRequest
from .transport.base import Channel

logger = logging.getLogger(__name__)


class RpcClient:
    """Awaitable RPC calls over one channel.

    The client owns the channel it is given. It does not check readiness
    before sending; use ``connect()`` to get a client over an open channel.

    Usage:
        async with await connect("ws://localhost:1234/rpc") as client:
            total = await client.call("Arith.Add", {"A": 1, "B": 2})
    """

    def __init__(
        self,
        channel: Channel,
        config: ClientConfig | None = None,
        codec: JsonCodec | None = None,
    ) -> None:
        self.channel = channel
        self.config = config or ClientConfig()
        self._codec = codec or JsonCodec()
        self._pending = PendingCallTable()
        self._ids = IdCounter()

        channel.on_message(self._handle_message)
        channel.on_close(self._handle_close)

    @property
    def is_connected(self) -> bool:
        return self.channel.is_open

    @property
    def pending_count(self) -> int:
        """Number of calls still waiting for a reply."""
        return len(self._pending)

    @property
    def next_id(self) -> int:
        """The id the next call will be sent with."""
        return self._ids.current

    async def call(self, method: str, argument: Any = None) -> Any:
        """Call method with a single argument and wait for its result.

        Raises:
            RpcCallError: The reply carried a non-null error
            ChannelClosedError: The channel was or became closed
            CallTimeoutError: call_timeout is configured and expired
        """
        call_id = self._ids.current
        frame = self._codec.encode_request(RpcRequest.create(call_id, method, argument))

        pending = self._pending.add(call_id, method)
        self._ids.advance()

        try:
            await self.channel.send(frame)
        except BaseException:
            self._pending.discard(call_id)
            raise

        logger.debug(f"Sent call {call_id}: {method}")

        timeout = self.config.call_timeout
        try:
            if timeout is None:
                return await pending.future
            try:
                return await asyncio.wait_for(pending.future, timeout)
            except TimeoutError as e:
                raise CallTimeoutError(call_id, method, timeout) from e
        finally:
            self._pending.discard(call_id)

    async def close(self) -> None:
        """Close the channel, failing any calls still pending."""
        await self.channel.close()

    def _handle_message(self, data: str | bytes) -> None:
        """Dispatch one inbound frame to the pending calls it answers."""
        try:
            frame = self._codec.decode_frame(data)
        except ProtocolError as e:
            logger.warning(f"Dropping undecodable frame: {e}")
            return

        for reply in frame.replies:
            self._fulfil(reply)

    def _fulfil(self, reply: RpcReply) -> None:
        call = self._pending.pop(reply.id)
        if call is None:
            self._handle_unmatched(reply)
            return

        if reply.is_error:
            call.reject(RpcCallError(reply.error, call_id=call.id))
        else:
            call.resolve(reply.result)

    def _handle_unmatched(self, reply: RpcReply) -> None:
        logger.debug(f"Dropping reply for unknown call id: {reply.id!r}")
        hook = self.config.on_unmatched
        if hook is None:
            return
        try:
            hook(reply)
        except Exception as e:
            logger.exception(f"Unmatched reply hook failed: {e}")

    def _handle_close(self, error: BaseException | None) -> None:
        reason = f"Channel closed: {error}" if error is not None else "Channel closed"
        failed = self._pending.fail_all(ChannelClosedError(reason))
        if failed:
            logger.info(f"Failed {failed} pending call(s): {reason}")

    async def __aenter__(self) -> RpcClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
