"""ScriptedAsker: answers questions from a programmer-supplied script."""

from __future__ import annotations

import inspect
from collections import deque
from typing import Any, Iterable

from formterm.asker.base import Asker
from formterm.errors import ScriptExhaustedError
from formterm.model.question import QuestionConfig
from formterm.model.validation import validate
from formterm.question import Question, QuestionContext


class ScriptedQuestion(Question[Any]):
    asker: ScriptedAsker

    async def run(self) -> Any:
        raw = await self.asker.next_answer(self.config)
        return validate(self.config, raw)


class ScriptedAsker(Asker):
    """Deterministic stand-in for a real medium, used to test form scripts.

    Each forced question consumes the next entry of *answers*, in the
    order questions are awaited (sub-questions passed to ``group`` are
    never awaited and consume nothing). An entry may be:

    - a raw answer, validated against the question like any medium's;
    - an exception instance, which the question rejects with;
    - a callable taking the config and returning a raw answer (or an
      awaitable of one).
    """

    def __init__(self, answers: Iterable[Any] = (), context: QuestionContext | None = None) -> None:
        super().__init__(context)
        self._answers: deque[Any] = deque(answers)
        self.asked: list[QuestionConfig] = []

    def create(self, config: QuestionConfig, context: QuestionContext | None) -> ScriptedQuestion:
        return ScriptedQuestion(self, config, context)

    def feed(self, *answers: Any) -> None:
        """Append more answers to the script."""
        self._answers.extend(answers)

    @property
    def remaining(self) -> int:
        return len(self._answers)

    async def next_answer(self, config: QuestionConfig) -> Any:
        self.asked.append(config)
        if not self._answers:
            raise ScriptExhaustedError(
                f"no scripted answer left for {config.type.value} question {config.title!r}"
            )
        entry = self._answers.popleft()
        if isinstance(entry, BaseException):
            raise entry
        if callable(entry):
            entry = entry(config)
            if inspect.isawaitable(entry):
                entry = await entry
        return entry
