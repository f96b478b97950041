"""Tests for correlated question/answer exchanges over a channel."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from formterm.channel.asker import ChannelAsker
from formterm.channel.codec import JsonRpcCodec
from formterm.channel.correlation import Correlator
from formterm.channel.transport import MemoryChannel
from formterm.errors import CancellationError, ProtocolError, TransportError, ValidationError
from formterm.events.bus import EventBus
from formterm.events.types import AnswerReceived, ChannelClosed, QuestionAsked, QuestionCancelled
from formterm.ids import CounterIds
from formterm.model.question import ConfirmConfig, TextConfig


def answer(id: str, value: Any) -> dict[str, Any]:
    return {"type": "answer", "id": id, "answer": value}


async def settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


# ===========================================================================
# Correlator
# ===========================================================================


class TestCorrelator:
    def test_request_sends_ask(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds())
            id, future = correlator.request(TextConfig(title="Name"))
            assert id == "q1"
            assert peer.drain() == [
                {"type": "ask", "id": "q1", "config": {"type": "text", "title": "Name"}}
            ]
            assert correlator.pending == ("q1",)
            correlator.dispatch(answer("q1", "Ann"))
            assert await future == "Ann"
            assert correlator.pending == ()

        asyncio.run(main())

    def test_out_of_order_answers(self) -> None:
        async def main() -> None:
            engine, _ = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds())
            _, first = correlator.request(TextConfig(title="A"))
            _, second = correlator.request(ConfirmConfig(title="B"))
            correlator.dispatch(answer("q2", False))
            correlator.dispatch(answer("q1", "a"))
            assert await first == "a"
            assert await second is False

        asyncio.run(main())

    def test_unknown_and_duplicate_answers_ignored(self) -> None:
        async def main() -> None:
            engine, _ = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds())
            _, future = correlator.request(TextConfig(title="A"))
            correlator.dispatch(answer("q9", "nobody"))
            correlator.dispatch({"type": "hello"})
            assert not future.done()
            correlator.dispatch(answer("q1", "x"))
            correlator.dispatch(answer("q1", "y"))
            assert await future == "x"

        asyncio.run(main())

    def test_invalid_answer_rejects_only_its_question(self) -> None:
        async def main() -> None:
            engine, _ = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds())
            _, bad = correlator.request(ConfirmConfig(title="OK?"))
            _, good = correlator.request(TextConfig(title="Name"))
            correlator.dispatch(answer("q1", "yes"))
            correlator.dispatch(answer("q2", "Ann"))
            with pytest.raises(ValidationError):
                await bad
            assert await good == "Ann"

        asyncio.run(main())

    def test_jsonrpc_error_rejects_with_protocol_error(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            correlator = Correlator(engine, codec=JsonRpcCodec(), ids=CounterIds())
            _, future = correlator.request(TextConfig(title="Name"))
            assert peer.drain()[0]["method"] == "ask"
            correlator.dispatch({"jsonrpc": "2.0", "id": "q1", "error": {"code": 1, "message": "no"}})
            with pytest.raises(ProtocolError) as info:
                await future
            assert info.value.code == 1

        asyncio.run(main())

    def test_cancel_sends_one_cancel_message(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds())
            _, future = correlator.request(TextConfig(title="Name"))
            peer.drain()
            assert correlator.cancel("q1") is True
            assert correlator.cancel("q1") is False
            assert peer.drain() == [{"type": "cancel", "id": "q1"}]
            assert future.cancelled()
            correlator.dispatch(answer("q1", "late"))
            assert correlator.pending == ()

        asyncio.run(main())

    def test_close_rejects_pending_with_transport_error(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds())
            _, a = correlator.request(TextConfig(title="A"))
            _, b = correlator.request(TextConfig(title="B"))
            peer.close()
            await correlator.serve()
            for future in (a, b):
                with pytest.raises(TransportError, match="channel closed"):
                    await future
            with pytest.raises(TransportError):
                correlator.request(TextConfig(title="C"))
            assert correlator.cancel("q1") is False

        asyncio.run(main())

    def test_failure_is_wrapped(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds())
            _, future = correlator.request(TextConfig(title="A"))
            peer.fail(TransportError("reset by peer"))
            await correlator.serve()
            with pytest.raises(TransportError, match="reset by peer"):
                await future

        asyncio.run(main())

    def test_close_leaves_other_channels_alone(self) -> None:
        async def main() -> None:
            first_engine, first_peer = MemoryChannel.pair()
            second_engine, _ = MemoryChannel.pair()
            first = Correlator(first_engine, ids=CounterIds())
            second = Correlator(second_engine, ids=CounterIds())
            _, lost = first.request(TextConfig(title="A"))
            _, kept = second.request(TextConfig(title="A"))
            first_peer.close()
            await first.serve()
            with pytest.raises(TransportError):
                await lost
            second.dispatch(answer("q1", "still here"))
            assert await kept == "still here"

        asyncio.run(main())

    def test_pending_ids_are_skipped(self) -> None:
        async def main() -> None:
            engine, _ = MemoryChannel.pair()
            ids = iter(["dup", "dup", "other"])
            correlator = Correlator(engine, ids=lambda: next(ids))
            first, _ = correlator.request(TextConfig(title="A"))
            second, _ = correlator.request(TextConfig(title="B"))
            assert (first, second) == ("dup", "other")

        asyncio.run(main())

    def test_events(self) -> None:
        async def main() -> list[Any]:
            events = EventBus()
            seen: list[Any] = []
            events.on_all(seen.append)
            engine, peer = MemoryChannel.pair()
            correlator = Correlator(engine, ids=CounterIds(), events=events)
            correlator.request(TextConfig(title="A"))
            correlator.request(TextConfig(title="B"))
            correlator.dispatch(answer("q1", "a"))
            correlator.cancel("q2")
            correlator.close()
            return seen

        seen = asyncio.run(main())
        assert seen == [
            QuestionAsked("q1", "text", "A"),
            QuestionAsked("q2", "text", "B"),
            AnswerReceived("q1"),
            QuestionCancelled("q2"),
            ChannelClosed(0),
        ]


# ===========================================================================
# ChannelAsker
# ===========================================================================


class TestChannelAsker:
    def test_lazy_ask_and_memoized_answer(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            asker = ChannelAsker(engine, ids=CounterIds())
            pump = asyncio.create_task(asker.serve())
            q = asker.text("Name")
            await settle()
            assert peer.drain() == []

            waiter = asyncio.ensure_future(q.wait())
            await settle()
            assert [m["type"] for m in peer.drain()] == ["ask"]
            peer.send(answer("q1", "Ann"))
            assert await waiter == "Ann"
            assert await q == "Ann"
            assert peer.drain() == []

            asker.close()
            await pump

        asyncio.run(main())

    def test_cancel_running_question(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            asker = ChannelAsker(engine, ids=CounterIds())
            pump = asyncio.create_task(asker.serve())
            q = asker.confirm("OK?")
            q.start()
            await settle()
            q.cancel("changed my mind")
            await settle()
            assert [m["type"] for m in peer.drain()] == ["ask", "cancel"]
            with pytest.raises(CancellationError):
                await q
            peer.send(answer("q1", True))
            await settle()
            assert asker.correlator.pending == ()

            asker.close()
            await pump

        asyncio.run(main())

    def test_cancel_before_forcing_sends_nothing(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            asker = ChannelAsker(engine, ids=CounterIds())
            q = asker.text("Name")
            q.cancel()
            with pytest.raises(CancellationError):
                await q
            assert peer.drain() == []

        asyncio.run(main())

    def test_group_is_one_exchange(self) -> None:
        async def main() -> None:
            engine, peer = MemoryChannel.pair()
            asker = ChannelAsker(engine, ids=CounterIds())
            pump = asyncio.create_task(asker.serve())
            g = asker.group("G", {"x": asker.text("X"), "y": asker.confirm("Y")})
            waiter = asyncio.ensure_future(g.wait())
            await settle()
            (ask,) = peer.drain()
            assert ask["config"]["questions"] == {
                "x": {"type": "text", "title": "X"},
                "y": {"type": "confirm", "title": "Y"},
            }
            peer.send(answer("q1", {"y": False, "x": "1"}))
            assert await waiter == {"x": "1", "y": False}

            asker.close()
            await pump

        asyncio.run(main())
