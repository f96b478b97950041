"""Duplex message channels carrying protocol messages as JSON objects."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

from formterm.config import DEFAULT_MAX_MESSAGE_BYTES
from formterm.errors import TransportError

logger = logging.getLogger(__name__)


class Channel(Protocol):
    """A duplex, message-oriented connection to one peer.

    ``send`` never blocks: messages are buffered and written in order.
    ``receive`` returns ``None`` once the channel is closed and raises
    :class:`TransportError` if the connection failed.
    """

    @property
    def closed(self) -> bool: ...

    def send(self, message: dict[str, Any]) -> None: ...

    async def receive(self) -> dict[str, Any] | None: ...

    def close(self) -> None: ...


class _Closed:
    pass


class _Failed:
    def __init__(self, error: TransportError) -> None:
        self.error = error


_CLOSED = _Closed()


class MemoryChannel:
    """One end of an in-process channel pair.

    Messages are copied through JSON on send, so only wire-representable
    payloads get through. Closing either end closes both.
    """

    def __init__(self) -> None:
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()
        self._peer: MemoryChannel | None = None
        self._closed = False

    @classmethod
    def pair(cls) -> tuple[MemoryChannel, MemoryChannel]:
        """Return two connected ends: (engine side, peer side)."""
        a, b = cls(), cls()
        a._peer, b._peer = b, a
        return a, b

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: dict[str, Any]) -> None:
        if self._closed or self._peer is None:
            raise TransportError("channel closed")
        self._peer._inbox.put_nowait(json.loads(json.dumps(message)))

    async def receive(self) -> dict[str, Any] | None:
        item = await self._inbox.get()
        if isinstance(item, (_Closed, _Failed)):
            # keep the terminal marker visible to later receivers
            self._inbox.put_nowait(item)
            if isinstance(item, _Failed):
                raise item.error
            return None
        return item

    def drain(self) -> list[dict[str, Any]]:
        """Return the messages already waiting to be received."""
        messages: list[dict[str, Any]] = []
        while not self._inbox.empty():
            item = self._inbox.get_nowait()
            if isinstance(item, (_Closed, _Failed)):
                self._inbox.put_nowait(item)
                break
            messages.append(item)
        return messages

    def close(self) -> None:
        self._terminate(_CLOSED)

    def fail(self, error: TransportError) -> None:
        """Break the connection: receivers on both ends raise *error*."""
        self._terminate(_Failed(error))

    def _terminate(self, marker: Any) -> None:
        for end in (self, self._peer):
            if end is not None and not end._closed:
                end._closed = True
                end._inbox.put_nowait(marker)


class StreamChannel:
    """Newline-delimited JSON over an asyncio stream pair.

    The longest accepted line is the reader's ``limit``. A longer line is
    logged and skipped like an undecodable one; the connection stays up.
    """

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._reader = reader
        self._writer = writer
        self._closed = False

    @classmethod
    async def connect(
        cls, host: str, port: int, *, limit: int = DEFAULT_MAX_MESSAGE_BYTES
    ) -> StreamChannel:
        reader, writer = await asyncio.open_connection(host, port, limit=limit)
        return cls(reader, writer)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def peer(self) -> str:
        peername = self._writer.get_extra_info("peername")
        return f"{peername[0]}:{peername[1]}" if peername else "<unknown>"

    def send(self, message: dict[str, Any]) -> None:
        if self._closed or self._writer.is_closing():
            raise TransportError("channel closed")
        self._writer.write(json.dumps(message).encode("utf-8") + b"\n")

    async def receive(self) -> dict[str, Any] | None:
        while True:
            line = await self._read_line()
            if line is None:
                continue
            if not line:
                self._closed = True
                return None
            try:
                message = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping undecodable line from %s: %r", self.peer, line[:200])
                continue
            if not isinstance(message, dict):
                logger.warning("Skipping non-object message from %s", self.peer)
                continue
            return message

    async def _read_line(self) -> bytes | None:
        """Return the next line, ``b""`` at EOF, or None for a skipped oversized line."""
        try:
            try:
                return await self._reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as exc:
                # EOF; an unterminated last line is still delivered
                return exc.partial
            except asyncio.LimitOverrunError as exc:
                logger.warning("Skipping oversized line from %s", self.peer)
                await self._discard_line(exc.consumed)
                return None
        except (ConnectionError, OSError) as exc:
            raise TransportError(f"connection to {self.peer} failed: {exc}", cause=exc) from exc

    async def _discard_line(self, consumed: int) -> None:
        # drop buffered bytes until the newline ending the oversized line
        while True:
            try:
                await self._reader.readexactly(consumed)
                await self._reader.readuntil(b"\n")
                return
            except asyncio.LimitOverrunError as exc:
                consumed = exc.consumed
            except asyncio.IncompleteReadError:
                return

    def close(self) -> None:
        if self._closed and self._writer.is_closing():
            return
        self._closed = True
        self._writer.close()
