"""Running a form over a channel: one session per connection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from formterm.channel.asker import ChannelAsker
from formterm.channel.codec import Codec
from formterm.channel.transport import Channel
from formterm.events.bus import EventBus
from formterm.ids import IdGenerator
from formterm.model.form import Form

logger = logging.getLogger(__name__)


async def run_session(
    form: Form,
    channel: Channel,
    *,
    codec: Codec | None = None,
    ids: IdGenerator | None = None,
    events: EventBus | None = None,
) -> Any:
    """Run *form* against the peer on *channel* and return its result.

    Inbound messages are pumped on a separate task for the duration of
    the form. The channel is closed when the form returns or raises; if
    the peer goes away first, the form's pending questions fail with
    TransportError and that error propagates out of this call.
    """
    asker = ChannelAsker(channel, codec=codec, ids=ids, events=events)
    pump = asyncio.create_task(asker.serve())
    logger.debug("Session for form %r started", form.id)
    try:
        return await form.run(asker)
    finally:
        asker.close()
        pump.cancel()
        await asyncio.gather(pump, return_exceptions=True)
        logger.debug("Session for form %r ended", form.id)
