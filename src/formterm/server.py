"""TCP server running one form session per connection."""

from __future__ import annotations

import asyncio
import logging

from formterm.channel.codec import get_codec
from formterm.channel.session import run_session
from formterm.channel.transport import StreamChannel
from formterm.config import FormtermConfig
from formterm.errors import CancellationError, TransportError
from formterm.events.bus import EventBus
from formterm.model.form import Form

logger = logging.getLogger(__name__)


class FormServer:
    """Serves *form* to every peer that connects.

    Each connection gets its own channel, asker and pending table, so a
    peer disconnecting only fails its own session.
    """

    def __init__(
        self,
        form: Form,
        config: FormtermConfig | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.form = form
        self.config = config or FormtermConfig()
        self.events = events
        self._server: asyncio.AbstractServer | None = None

    async def start(self) -> int:
        """Start listening and return the bound port."""
        self._server = await asyncio.start_server(
            self._handle,
            self.config.host,
            self.config.port,
            limit=self.config.max_message_bytes,
        )
        port = self._server.sockets[0].getsockname()[1]
        logger.info("Serving form %r on %s:%d", self.form.id, self.config.host, port)
        return port

    async def serve_forever(self) -> None:
        if self._server is None:
            await self.start()
        assert self._server is not None
        async with self._server:
            await self._server.serve_forever()

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        channel = StreamChannel(reader, writer)
        peer = channel.peer
        logger.info("Session opened for %s", peer)
        try:
            await run_session(
                self.form,
                channel,
                codec=get_codec(self.config.protocol),
                events=self.events,
            )
        except (TransportError, CancellationError) as exc:
            logger.info("Session for %s ended early: %s", peer, exc)
        except Exception:
            logger.exception("Form %r failed for %s", self.form.id, peer)
        else:
            logger.info("Session for %s completed", peer)
        finally:
            channel.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError):
                pass
