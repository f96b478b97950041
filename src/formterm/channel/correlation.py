"""Correlation of concurrent question/answer exchanges over one channel."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from formterm.channel.codec import Codec, PlainCodec
from formterm.channel.transport import Channel
from formterm.errors import TransportError, ValidationError
from formterm.events.bus import EventBus
from formterm.events.types import (
    AnswerReceived,
    AnswerRejected,
    ChannelClosed,
    QuestionAsked,
    QuestionCancelled,
)
from formterm.ids import CounterIds, IdGenerator
from formterm.model.question import QuestionConfig
from formterm.model.validation import validate

logger = logging.getLogger(__name__)

_MAX_ID_ATTEMPTS = 100


@dataclass
class _Pending:
    config: QuestionConfig
    future: asyncio.Future[Any]


class Correlator:
    """Multiplexes question exchanges over a single channel.

    Every ask gets a fresh correlation id and an entry in the pending
    table; the matching answer settles that entry and nothing else.
    Answers may arrive in any order. The table is owned by this object
    and must only be touched from the event loop running :meth:`serve`.
    """

    def __init__(
        self,
        channel: Channel,
        codec: Codec | None = None,
        ids: IdGenerator | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.channel = channel
        self.codec: Codec = codec or PlainCodec()
        self.events = events or EventBus()
        self._ids: IdGenerator = ids or CounterIds()
        self._pending: dict[str, _Pending] = {}
        self._closed = False

    @property
    def pending(self) -> tuple[str, ...]:
        """Correlation ids currently awaiting an answer, in ask order."""
        return tuple(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    # --- outbound -------------------------------------------------------------

    def request(self, config: QuestionConfig) -> tuple[str, asyncio.Future[Any]]:
        """Send an ask for *config* and return its id and answer future."""
        if self._closed:
            raise TransportError("channel closed")
        id = self._fresh_id()
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[id] = _Pending(config=config, future=future)
        try:
            self.channel.send(self.codec.encode_ask(id, config.to_dict()))
        except TransportError:
            del self._pending[id]
            raise
        logger.debug("Asked %s (%s %r)", id, config.type.value, config.title)
        self.events.emit(QuestionAsked(id, config.type.value, config.title))
        return id, future

    def cancel(self, id: str) -> bool:
        """Drop a pending exchange and tell the peer, without waiting.

        Returns False if *id* was not pending (already answered, already
        cancelled, or the channel closed).
        """
        entry = self._pending.pop(id, None)
        if entry is None:
            return False
        if not entry.future.done():
            entry.future.cancel()
        if not self.channel.closed:
            try:
                self.channel.send(self.codec.encode_cancel(id))
            except TransportError as exc:
                logger.debug("Could not send cancel for %s: %s", id, exc)
        logger.debug("Cancelled %s", id)
        self.events.emit(QuestionCancelled(id))
        return True

    # --- inbound --------------------------------------------------------------

    def dispatch(self, message: Mapping[str, Any]) -> None:
        """Settle the exchange an inbound *message* answers, if any."""
        inbound = self.codec.decode(message)
        if inbound is None:
            logger.warning("Ignoring unexpected message: %.200r", message)
            return
        entry = self._pending.pop(inbound.id, None)
        if entry is None:
            # raced with a cancel or a duplicate answer
            logger.debug("Ignoring answer for unknown id %s", inbound.id)
            return
        if entry.future.done():
            return
        if inbound.error is not None:
            entry.future.set_exception(inbound.error)
            self.events.emit(AnswerRejected(inbound.id, str(inbound.error)))
            return
        try:
            value = validate(entry.config, inbound.answer)
        except ValidationError as exc:
            logger.debug("Answer for %s failed validation: %s", inbound.id, exc)
            entry.future.set_exception(exc)
            self.events.emit(AnswerRejected(inbound.id, str(exc)))
            return
        entry.future.set_result(value)
        self.events.emit(AnswerReceived(inbound.id))

    async def serve(self) -> None:
        """Dispatch inbound messages until the channel closes or fails.

        On exit every still-pending exchange is rejected with
        :class:`TransportError`.
        """
        error: BaseException | None = None
        try:
            while True:
                message = await self.channel.receive()
                if message is None:
                    break
                self.dispatch(message)
        except TransportError as exc:
            logger.warning("Channel failed: %s", exc)
            error = exc
        finally:
            self.close(error)

    def close(self, error: BaseException | None = None) -> None:
        """Reject every pending exchange and refuse new ones. Runs once."""
        if self._closed:
            return
        self._closed = True
        pending, self._pending = self._pending, {}
        for id, entry in pending.items():
            if entry.future.done():
                continue
            if error is None:
                exc = TransportError("channel closed")
            else:
                exc = TransportError(f"channel failed: {error}", cause=error)
            entry.future.set_exception(exc)
        if pending:
            logger.debug("Rejected %d pending question(s) on close", len(pending))
        self.events.emit(ChannelClosed(len(pending), "" if error is None else str(error)))

    def _fresh_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            id = self._ids()
            if id not in self._pending:
                return id
        raise TransportError("could not generate a unique correlation id")
