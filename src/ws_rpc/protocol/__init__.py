"""Wire protocol for correlated calls.

- RpcRequest: client -> server call carrying an integer correlation id
- RpcReply: server -> client result or error for one id
- InboundFrame: SingleReply | BatchReply, decoded once per frame
"""

from .codec import JsonCodec
from .envelopes import BatchReply, InboundFrame, RpcReply, RpcRequest, SingleReply

__all__ = [
    "JsonCodec",
    "RpcRequest",
    "RpcReply",
    "SingleReply",
    "BatchReply",
    "InboundFrame",
]
