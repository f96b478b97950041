"""Composable cancellation tokens."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

CancelCallback = Callable[[Any], None]


class CancelToken:
    """A push-based cancellation signal.

    Callbacks registered with :meth:`add_callback` run synchronously, in
    registration order, the first time :meth:`cancel` is called. Later
    calls are no-ops.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Any = None
        self._callbacks: list[CancelCallback] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Any:
        return self._reason

    def cancel(self, reason: Any = None) -> None:
        """Fire the token. Only the first call has any effect."""
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb(reason)

    def add_callback(self, callback: CancelCallback) -> Callable[[], None]:
        """Run *callback(reason)* when the token fires.

        If the token already fired, the callback runs immediately. Returns
        a function that unregisters the callback.
        """
        if self._cancelled:
            callback(self._reason)
            return lambda: None
        self._callbacks.append(callback)

        def remove() -> None:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

        return remove

    async def wait(self) -> Any:
        """Suspend until the token fires and return the reason."""
        if self._cancelled:
            return self._reason
        future = asyncio.get_running_loop().create_future()

        def wake(reason: Any) -> None:
            if not future.done():
                future.set_result(reason)

        remove = self.add_callback(wake)
        try:
            return await future
        finally:
            remove()

    @classmethod
    def any(cls, *sources: CancelToken | None) -> LinkedCancelToken:
        """Return a token that fires when the first of *sources* fires."""
        return LinkedCancelToken([s for s in sources if s is not None])

    def __repr__(self) -> str:
        state = f"cancelled reason={self._reason!r}" if self._cancelled else "active"
        return f"{type(self).__name__}({state})"


class LinkedCancelToken(CancelToken):
    """A token observing other tokens without owning them.

    Cancelling a linked token never cancels its sources. :meth:`detach`
    drops the registrations held by the sources so a long-lived outer
    token does not keep settled work alive.
    """

    def __init__(self, sources: list[CancelToken]) -> None:
        super().__init__()
        self._removers: list[Callable[[], None]] = []
        for source in sources:
            if source.cancelled:
                self.cancel(source.reason)
                break
            self._removers.append(source.add_callback(self.cancel))

    def cancel(self, reason: Any = None) -> None:
        if self._cancelled:
            return
        self.detach()
        super().cancel(reason)

    def detach(self) -> None:
        removers, self._removers = self._removers, []
        for remove in removers:
            remove()
