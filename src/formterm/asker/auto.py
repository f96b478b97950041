"""AutoAsker: answers every question without user interaction."""

from __future__ import annotations

import datetime
from typing import Any

from formterm.asker.callback import CallbackAsker
from formterm.model.question import (
    DefaultTextConfig,
    GroupConfig,
    QuestionConfig,
    QuestionType,
    SingleChoiceConfig,
)
from formterm.question import QuestionContext


def default_answer(config: QuestionConfig) -> Any:
    """Return the answer a user accepting every default would give.

    - CONFIRM: True
    - TEXT / MULTILINE: the default, or ""
    - PASSWORD: ""
    - RADIO / DROPDOWN: the default, or the first choice
    - CHECKBOXES: nothing selected
    - DATE: today; TIME: "00:00"
    - GROUP: the default answer of every sub-question
    """
    qtype = config.type
    if qtype is QuestionType.INFO:
        return None
    if qtype is QuestionType.CONFIRM:
        return True
    if isinstance(config, DefaultTextConfig):
        return config.default or ""
    if qtype is QuestionType.PASSWORD:
        return ""
    if isinstance(config, SingleChoiceConfig):
        if config.default is not None:
            return config.default
        return next(iter(config.choices))
    if qtype is QuestionType.CHECKBOXES:
        return []
    if qtype is QuestionType.DATE:
        return datetime.date.today().isoformat()
    if qtype is QuestionType.TIME:
        return "00:00"
    if isinstance(config, GroupConfig):
        return {key: default_answer(sub) for key, sub in config.questions.items()}
    raise AssertionError(f"unhandled question type {qtype}")


class AutoAsker(CallbackAsker):
    """Asker for non-interactive runs: every question gets its default answer."""

    def __init__(self, context: QuestionContext | None = None) -> None:
        super().__init__(default_answer, context)
