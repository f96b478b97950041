"""Transcript recording layered over any asker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from formterm.asker.base import Asker
from formterm.model.question import QuestionConfig, QuestionType
from formterm.question import Question, QuestionContext, QuestionState


@dataclass(frozen=True)
class QAPair:
    """One answered question: its config and the validated answer."""

    config: QuestionConfig
    answer: Any


class RecordingAsker(Asker):
    """Keeps a transcript of the questions another asker got answered.

    Creation is delegated to *inner*, so the medium and its supported
    types are unchanged. A done callback on each question appends the
    config and validated answer once it resolves, in settle order rather
    than creation order. Cancelled and rejected questions leave no entry,
    and questions that are never awaited never appear.
    """

    def __init__(self, inner: Asker) -> None:
        super().__init__(inner.context)
        self._inner = inner
        self._records: list[QAPair] = []

    @property
    def supported_types(self) -> frozenset[QuestionType]:  # type: ignore[override]
        return self._inner.supported_types

    def create(self, config: QuestionConfig, context: QuestionContext | None) -> Question[Any]:
        question = self._inner.ask(config, context)
        question.add_done_callback(self._record)
        return question

    def _record(self, question: Question[Any]) -> None:
        if question.state is QuestionState.RESOLVED:
            self._records.append(QAPair(config=question.config, answer=question.result()))

    def transcript(self) -> list[QAPair]:
        """Return a copy of the exchanges recorded so far."""
        return list(self._records)

    def clear(self) -> None:
        """Forget everything recorded so far."""
        self._records.clear()
