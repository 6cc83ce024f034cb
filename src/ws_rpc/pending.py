"""In-flight call bookkeeping.

Each outgoing call gets an id from an IdCounter and a PendingCall in the
owning client's PendingCallTable. The table is private to one client.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .errors import RpcCallError


class IdCounter:
    """Monotonically increasing call id, starting at 1."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @property
    def current(self) -> int:
        """The id the next call will use."""
        return self._next

    def advance(self) -> None:
        self._next += 1


@dataclass
class PendingCall:
    """One outstanding call awaiting its reply.

    ``resolve`` and ``reject`` are single-shot: only the first of them to
    run has any effect. Both return whether they completed the call.
    """

    id: int
    method: str
    future: asyncio.Future[Any] = field(repr=False)

    @property
    def done(self) -> bool:
        return self.future.done()

    def resolve(self, result: Any) -> bool:
        if self.future.done():
            return False
        self.future.set_result(result)
        return True

    def reject(self, error: Any) -> bool:
        if self.future.done():
            return False
        if isinstance(error, BaseException):
            self.future.set_exception(error)
        else:
            self.future.set_exception(RpcCallError(error, call_id=self.id))
        return True


class PendingCallTable:
    """Maps call id to PendingCall. Lookup is by id only."""

    def __init__(self) -> None:
        self._calls: dict[int, PendingCall] = {}

    def add(self, call_id: int, method: str = "") -> PendingCall:
        """Register a new pending call and return it.

        Raises ValueError if call_id is already tracked.
        """
        if call_id in self._calls:
            raise ValueError(f"Call {call_id} is already pending")
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        call = PendingCall(id=call_id, method=method, future=future)
        self._calls[call_id] = call
        return call

    def pop(self, call_id: Any) -> PendingCall | None:
        """Remove and return the call for call_id, or None if unknown."""
        return self._calls.pop(call_id, None)

    def discard(self, call_id: Any) -> None:
        self._calls.pop(call_id, None)

    def fail_all(self, error: BaseException) -> int:
        """Reject every pending call with error and clear the table.

        Returns the number of calls that were failed.
        """
        calls = list(self._calls.values())
        self._calls.clear()
        return sum(1 for call in calls if call.reject(error))

    def ids(self) -> list[int]:
        return list(self._calls)

    def __contains__(self, call_id: object) -> bool:
        return call_id in self._calls

    def __len__(self) -> int:
        return len(self._calls)

    def __iter__(self) -> Iterator[PendingCall]:
        return iter(list(self._calls.values()))
