"""Tests for line framing and size limits of the stream channel."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from formterm.asker.base import Asker
from formterm.channel.transport import StreamChannel
from formterm.config import FormtermConfig
from formterm.model.form import form
from formterm.server import FormServer


class FakeWriter:
    """Just enough of a StreamWriter for reading tests."""

    def __init__(self) -> None:
        self.written: list[bytes] = []
        self._closing = False

    def get_extra_info(self, name: str) -> Any:
        return ("h", 1) if name == "peername" else None

    def is_closing(self) -> bool:
        return self._closing

    def write(self, data: bytes) -> None:
        self.written.append(data)

    def close(self) -> None:
        self._closing = True


def line(message: dict[str, Any]) -> bytes:
    return json.dumps(message).encode() + b"\n"


def channel_for(reader: asyncio.StreamReader) -> StreamChannel:
    return StreamChannel(reader, FakeWriter())  # type: ignore[arg-type]


@form(id="notes")
async def notes(asker: Asker) -> None:
    text = await asker.multiline("Notes")
    await asker.info(f"Got {len(text)} characters")


class TestLineLimits:
    def test_oversized_line_is_skipped(self) -> None:
        async def main() -> None:
            reader = asyncio.StreamReader(limit=1024)
            reader.feed_data(line({"type": "answer", "id": "q1", "answer": "x" * 70_000}))
            reader.feed_data(line({"type": "answer", "id": "q2", "answer": "short"}))
            reader.feed_eof()
            channel = channel_for(reader)

            assert await channel.receive() == {"type": "answer", "id": "q2", "answer": "short"}
            assert await channel.receive() is None
            assert channel.closed

        asyncio.run(main())

    def test_oversized_line_arriving_in_pieces(self) -> None:
        async def main() -> None:
            reader = asyncio.StreamReader(limit=1024)
            channel = channel_for(reader)
            reader.feed_data(b'{"type": "answer", "id": "q1", "answer": "' + b"x" * 5000)
            pending = asyncio.ensure_future(channel.receive())
            await asyncio.sleep(0)
            reader.feed_data(b"x" * 5000)
            await asyncio.sleep(0)
            reader.feed_data(b'"}\n' + line({"type": "answer", "id": "q2", "answer": 1}))

            assert await asyncio.wait_for(pending, timeout=5) == {
                "type": "answer",
                "id": "q2",
                "answer": 1,
            }

        asyncio.run(main())

    def test_unterminated_last_line_is_delivered(self) -> None:
        async def main() -> None:
            reader = asyncio.StreamReader()
            reader.feed_data(b'{"type": "answer", "id": "q1", "answer": true}')
            reader.feed_eof()
            channel = channel_for(reader)

            assert await channel.receive() == {"type": "answer", "id": "q1", "answer": True}
            assert await channel.receive() is None

        asyncio.run(main())

    def test_answer_longer_than_default_stream_limit(self) -> None:
        async def main() -> None:
            server = FormServer(notes, FormtermConfig(port=0))
            port = await server.start()
            try:
                peer = await StreamChannel.connect("127.0.0.1", port)
                ask = await asyncio.wait_for(peer.receive(), timeout=5)
                assert ask is not None
                peer.send({"type": "answer", "id": ask["id"], "answer": "x" * 70_000})
                info = await asyncio.wait_for(peer.receive(), timeout=5)
                assert info is not None
                assert info["config"]["title"] == "Got 70000 characters"
                peer.close()
            finally:
                await server.stop()

        asyncio.run(main())
