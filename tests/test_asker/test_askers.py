"""Tests for the scripted, callback, auto and recording askers."""

from __future__ import annotations

import asyncio
import datetime
from typing import Any

import pytest

from formterm.asker.auto import AutoAsker, default_answer
from formterm.asker.callback import CallbackAsker
from formterm.asker.recording import RecordingAsker
from formterm.asker.scripted import ScriptedAsker
from formterm.errors import CancellationError, ScriptExhaustedError, ValidationError
from formterm.model.question import (
    CheckboxesConfig,
    DropdownConfig,
    GroupConfig,
    QuestionConfig,
    QuestionType,
    TextConfig,
)
from formterm.question import QuestionState


# ===========================================================================
# ScriptedAsker
# ===========================================================================


class TestScriptedAsker:
    def test_answers_in_forcing_order(self) -> None:
        async def main() -> None:
            asker = ScriptedAsker(["first", "second"])
            a = asker.text("A")
            b = asker.text("B")
            assert await b == "first"
            assert await a == "second"
            assert [c.title for c in asker.asked] == ["B", "A"]

        asyncio.run(main())

    def test_answers_are_validated(self) -> None:
        async def main() -> None:
            asker = ScriptedAsker(["c"])
            with pytest.raises(ValidationError):
                await asker.radio("Pick", {"a": "A", "b": "B"})

        asyncio.run(main())

    def test_exception_entry_rejects(self) -> None:
        async def main() -> None:
            asker = ScriptedAsker([RuntimeError("no")])
            q = asker.confirm("OK?")
            with pytest.raises(RuntimeError):
                await q
            assert q.state is QuestionState.REJECTED

        asyncio.run(main())

    def test_callable_entry_receives_config(self) -> None:
        async def later(config: QuestionConfig) -> str:
            return config.title.upper()

        async def main() -> None:
            asker = ScriptedAsker([lambda config: config.title, later])
            assert await asker.text("name") == "name"
            assert await asker.text("city") == "CITY"

        asyncio.run(main())

    def test_exhausted_script(self) -> None:
        async def main() -> None:
            asker = ScriptedAsker()
            with pytest.raises(ScriptExhaustedError):
                await asker.text("Name")
            asker.feed("Ann")
            assert asker.remaining == 1
            assert await asker.text("Name") == "Ann"

        asyncio.run(main())

    def test_group_consumes_one_entry(self) -> None:
        async def main() -> None:
            asker = ScriptedAsker([{"x": "1", "y": True}])
            g = asker.group("G", {"x": asker.text("X"), "y": asker.confirm("Y")})
            assert await g == {"x": "1", "y": True}
            assert asker.remaining == 0
            assert len(asker.asked) == 1

        asyncio.run(main())


# ===========================================================================
# CallbackAsker
# ===========================================================================


class TestCallbackAsker:
    def test_sync_callback(self) -> None:
        async def main() -> None:
            asker = CallbackAsker(lambda config: "hello")
            assert await asker.text("Greeting") == "hello"

        asyncio.run(main())

    def test_async_callback(self) -> None:
        async def answer(config: QuestionConfig) -> Any:
            await asyncio.sleep(0)
            return config.type is QuestionType.CONFIRM

        async def main() -> None:
            asker = CallbackAsker(answer)
            assert await asker.confirm("OK?") is True

        asyncio.run(main())

    def test_invalid_callback_answer(self) -> None:
        async def main() -> None:
            asker = CallbackAsker(lambda config: 42)
            with pytest.raises(ValidationError):
                await asker.text("Name")

        asyncio.run(main())


# ===========================================================================
# AutoAsker
# ===========================================================================


class TestAutoAsker:
    def test_defaults_per_type(self) -> None:
        async def main() -> None:
            asker = AutoAsker()
            assert await asker.info("Hi") is None
            assert await asker.confirm("OK?") is True
            assert await asker.text("Name") == ""
            assert await asker.text("Name", default="Ann") == "Ann"
            assert await asker.multiline("Bio") == ""
            assert await asker.password("Secret") == ""
            assert await asker.checkboxes("Pick", {"a": "A"}) == []
            assert await asker.radio("Pick", {"a": "A", "b": "B"}) == "a"
            assert await asker.dropdown("Pick", {"a": "A", "b": "B"}, default="b") == "b"
            assert await asker.time("At") == "00:00"

        asyncio.run(main())

    def test_date_is_today(self) -> None:
        async def main() -> str:
            return await AutoAsker().date("When")

        assert asyncio.run(main()) == datetime.date.today().isoformat()

    def test_group_default_is_recursive(self) -> None:
        config = GroupConfig(
            title="Address",
            questions={
                "city": TextConfig(title="City", default="Springfield"),
                "state": DropdownConfig(title="State", choices={"IL": "Illinois"}),
                "tags": CheckboxesConfig(title="Tags", choices={"home": "Home"}),
            },
        )
        assert default_answer(config) == {"city": "Springfield", "state": "IL", "tags": []}


# ===========================================================================
# RecordingAsker
# ===========================================================================


class TestRecordingAsker:
    def test_records_resolved_questions(self) -> None:
        async def main() -> None:
            recorder = RecordingAsker(ScriptedAsker(["Ann", 7, True]))
            await recorder.text("Name")
            with pytest.raises(ValidationError):
                await recorder.text("Age")
            await recorder.confirm("OK?")

            transcript = recorder.transcript()
            assert [(p.config.title, p.answer) for p in transcript] == [
                ("Name", "Ann"),
                ("OK?", True),
            ]
            transcript.clear()
            assert len(recorder.transcript()) == 2
            recorder.clear()
            assert recorder.transcript() == []

        asyncio.run(main())

    def test_records_in_settle_order_and_skips_unawaited(self) -> None:
        async def main() -> None:
            recorder = RecordingAsker(ScriptedAsker(["b", "a"]))
            first = recorder.text("A")
            second = recorder.text("B")
            recorder.text("Never awaited")
            cancelled = recorder.confirm("Cancelled")
            cancelled.cancel()

            await second
            await first
            with pytest.raises(CancellationError):
                await cancelled

            assert [(p.config.title, p.answer) for p in recorder.transcript()] == [
                ("B", "b"),
                ("A", "a"),
            ]

        asyncio.run(main())

    def test_supported_types_follow_inner(self) -> None:
        inner = ScriptedAsker()
        inner.supported_types = frozenset({QuestionType.TEXT})
        assert RecordingAsker(inner).supported_types == frozenset({QuestionType.TEXT})
