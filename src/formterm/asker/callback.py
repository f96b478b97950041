"""CallbackAsker: delegates to a user-supplied callback function."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Union

from formterm.asker.base import Asker
from formterm.model.question import QuestionConfig
from formterm.model.validation import validate
from formterm.question import Question, QuestionContext

AnswerCallback = Callable[[QuestionConfig], Union[Any, Awaitable[Any]]]


class CallbackQuestion(Question[Any]):
    asker: CallbackAsker

    async def run(self) -> Any:
        raw = self.asker.callback(self.config)
        if inspect.isawaitable(raw):
            raw = await raw
        return validate(self.config, raw)


class CallbackAsker(Asker):
    """Asker that delegates answering to a callback.

    The callback receives the QuestionConfig and returns a raw answer,
    either directly or as an awaitable. The raw answer is validated.
    """

    def __init__(self, callback: AnswerCallback, context: QuestionContext | None = None) -> None:
        super().__init__(context)
        self.callback = callback

    def create(self, config: QuestionConfig, context: QuestionContext | None) -> CallbackQuestion:
        return CallbackQuestion(self, config, context)
