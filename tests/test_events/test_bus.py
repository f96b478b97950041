"""Tests for the event bus, correlation ids and config defaults."""

from __future__ import annotations

import dataclasses
import threading

import pytest

from formterm.config import DEFAULT_MAX_MESSAGE_BYTES, FormtermConfig
from formterm.events.bus import EventBus
from formterm.events.types import AnswerReceived, QuestionCancelled
from formterm.ids import CounterIds, RandomIds


class TestEventBus:
    def test_subscribe_by_type(self) -> None:
        bus = EventBus()
        received: list[object] = []
        bus.subscribe(AnswerReceived, received.append)

        bus.emit(AnswerReceived("q1"))
        bus.emit(QuestionCancelled("q2"))

        assert received == [AnswerReceived("q1")]

    def test_global_listeners_run_first(self) -> None:
        bus = EventBus()
        order: list[str] = []
        bus.subscribe(AnswerReceived, lambda e: order.append("typed"))
        bus.on_all(lambda e: order.append("global"))

        bus.emit(AnswerReceived("q1"))

        assert order == ["global", "typed"]

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list[object] = []
        remove = bus.subscribe(AnswerReceived, received.append)
        remove_all = bus.on_all(received.append)

        remove()
        remove_all()
        bus.emit(AnswerReceived("q1"))

        assert received == []

    def test_failing_listener_does_not_stop_others(self) -> None:
        bus = EventBus()
        received: list[object] = []

        def broken(event: object) -> None:
            raise RuntimeError("listener bug")

        bus.on_all(broken)
        bus.subscribe(AnswerReceived, received.append)

        bus.emit(AnswerReceived("q1"))

        assert received == [AnswerReceived("q1")]


class TestIds:
    def test_counter_ids(self) -> None:
        ids = CounterIds()
        assert [ids(), ids(), ids()] == ["q1", "q2", "q3"]
        assert CounterIds(prefix="req-", start=10)() == "req-10"

    def test_counter_ids_are_unique_across_threads(self) -> None:
        ids = CounterIds()
        seen: list[str] = []
        lock = threading.Lock()

        def take() -> None:
            for _ in range(200):
                value = ids()
                with lock:
                    seen.append(value)

        threads = [threading.Thread(target=take) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(seen)) == 800

    def test_random_ids(self) -> None:
        ids = RandomIds()
        first, second = ids(), ids()
        assert len(first) == 12
        assert first != second


class TestConfig:
    def test_defaults(self) -> None:
        config = FormtermConfig()
        assert config.show_description is False
        assert (config.host, config.port, config.protocol) == ("127.0.0.1", 3000, "plain")
        assert config.max_message_bytes == DEFAULT_MAX_MESSAGE_BYTES

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            FormtermConfig().port = 1  # type: ignore[misc]
