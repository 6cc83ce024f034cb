"""Wire envelopes for the JSON-RPC call protocol.

Outbound requests always wrap their argument in a single-element params
list; the remote convention expects exactly one positional argument.

Example (request):
    {"jsonrpc": "2.0", "id": 1, "method": "Arith.Multiply", "params": [{"A": 7, "B": 8}]}

Example (reply):
    {"id": 1, "error": null, "result": 56}

Inbound frames carry either one reply or an array of them. The codec
decodes a frame once into SingleReply or BatchReply.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class RpcRequest(BaseModel):
    """An outbound call."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int
    method: str
    params: list[Any] = Field(min_length=1, max_length=1)

    @classmethod
    def create(cls, call_id: int, method: str, argument: Any = None) -> RpcRequest:
        """Build a request, wrapping argument as the single positional param."""
        return cls(id=call_id, method=method, params=[argument])

    @property
    def argument(self) -> Any:
        return self.params[0]


class RpcReply(BaseModel):
    """An inbound reply to a previous call.

    A reply is an error when ``error`` is not None. Any other reply is a
    success, including falsy results such as 0, "" or null.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    result: Any = None
    error: Any = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class SingleReply(BaseModel):
    """A frame carrying one reply."""

    kind: Literal["single"] = "single"
    message: RpcReply

    @property
    def replies(self) -> Sequence[RpcReply]:
        return (self.message,)


class BatchReply(BaseModel):
    """A frame carrying an ordered sequence of replies."""

    kind: Literal["batch"] = "batch"
    messages: list[RpcReply] = Field(default_factory=list)

    @property
    def replies(self) -> Sequence[RpcReply]:
        return tuple(self.messages)


InboundFrame = SingleReply | BatchReply
