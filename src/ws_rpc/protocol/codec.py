"""JSON codec for the call protocol.

The codec is the only place that touches raw frame text. Everything past
it works with RpcRequest / RpcReply models and the InboundFrame union.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from ..errors import ProtocolError
from .envelopes import BatchReply, InboundFrame, RpcReply, RpcRequest, SingleReply

logger = logging.getLogger(__name__)


class JsonCodec:
    """Encodes requests to JSON text and decodes inbound frames."""

    def encode_request(self, request: RpcRequest) -> str:
        return request.model_dump_json()

    def decode_frame(self, data: str | bytes) -> InboundFrame:
        """Decode one inbound frame into a SingleReply or BatchReply.

        Raises ProtocolError if the frame is not JSON, is neither an object
        nor an array, or (for a single reply) does not validate. Invalid
        items inside a batch are skipped so the rest can still be delivered.
        """
        try:
            parsed = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProtocolError(f"Invalid JSON frame: {e}") from e

        if isinstance(parsed, dict):
            return SingleReply(message=self._decode_reply(parsed))

        if isinstance(parsed, list):
            messages: list[RpcReply] = []
            for index, item in enumerate(parsed):
                try:
                    messages.append(self._decode_reply(item))
                except ProtocolError as e:
                    logger.warning(f"Skipping batch item {index}: {e}")
            return BatchReply(messages=messages)

        raise ProtocolError(f"Expected object or array, got {type(parsed).__name__}")

    def _decode_reply(self, item: Any) -> RpcReply:
        if not isinstance(item, dict):
            raise ProtocolError(f"Reply must be an object, got {type(item).__name__}")
        try:
            return RpcReply.model_validate(item)
        except ValidationError as e:
            raise ProtocolError(f"Invalid reply: {e}") from e
