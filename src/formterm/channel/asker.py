"""ChannelAsker: asks questions of a remote peer over a message channel."""

from __future__ import annotations

import asyncio
from typing import Any

from formterm.asker.base import Asker
from formterm.channel.codec import Codec
from formterm.channel.correlation import Correlator
from formterm.channel.transport import Channel
from formterm.events.bus import EventBus
from formterm.ids import IdGenerator
from formterm.model.question import QuestionConfig
from formterm.question import Question, QuestionContext


class ChannelQuestion(Question[Any]):
    """A question whose answer comes back from the peer.

    Holds only its correlation id; the pending entry itself belongs to
    the asker's correlator. Groups go out as one ask and come back as
    one composite answer.
    """

    asker: ChannelAsker

    def __init__(
        self, asker: ChannelAsker, config: QuestionConfig, context: QuestionContext | None = None
    ) -> None:
        super().__init__(asker, config, context)
        self.correlation_id: str | None = None

    async def run(self) -> Any:
        correlator = self.asker.correlator
        self.correlation_id, future = correlator.request(self.config)
        try:
            return await future
        except asyncio.CancelledError:
            correlator.cancel(self.correlation_id)
            raise

    def on_cancel(self, reason: Any) -> None:
        if self.correlation_id is not None:
            self.asker.correlator.cancel(self.correlation_id)


class ChannelAsker(Asker):
    """Asker for one remote peer connected through *channel*.

    :meth:`serve` must run alongside the form to deliver answers; see
    :func:`formterm.channel.session.run_session`.
    """

    def __init__(
        self,
        channel: Channel,
        *,
        codec: Codec | None = None,
        ids: IdGenerator | None = None,
        events: EventBus | None = None,
        context: QuestionContext | None = None,
    ) -> None:
        super().__init__(context)
        self.channel = channel
        self.correlator = Correlator(channel, codec=codec, ids=ids, events=events)

    def create(self, config: QuestionConfig, context: QuestionContext | None) -> ChannelQuestion:
        return ChannelQuestion(self, config, context)

    async def serve(self) -> None:
        await self.correlator.serve()

    def close(self) -> None:
        self.correlator.close()
        self.channel.close()
