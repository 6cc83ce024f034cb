"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import pytest
import pytest_asyncio

from ws_rpc import ClientConfig, MockChannel, RpcClient

StartCall = Callable[..., Awaitable["asyncio.Task[Any]"]]


@pytest.fixture
def channel() -> MockChannel:
    """A fresh, unopened in-memory channel."""
    return MockChannel()


@pytest_asyncio.fixture
async def client(channel: MockChannel) -> RpcClient:
    """A client over an open in-memory channel."""
    rpc = RpcClient(channel, ClientConfig())
    await channel.open()
    return rpc


@pytest.fixture
def start_call() -> StartCall:
    """Start a call in the background and let it reach the wire."""

    async def _start(client: RpcClient, method: str, argument: Any = None) -> asyncio.Task[Any]:
        task = asyncio.create_task(client.call(method, argument))
        await asyncio.sleep(0)
        return task

    return _start
