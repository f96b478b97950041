"""Asker base class: builds Questions for one answering medium."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from formterm.errors import ProtocolError
from formterm.model.question import (
    CheckboxesConfig,
    ConfirmConfig,
    DateConfig,
    Description,
    DropdownConfig,
    GroupConfig,
    InfoConfig,
    MultilineConfig,
    PasswordConfig,
    QuestionConfig,
    QuestionType,
    RadioConfig,
    TextConfig,
    TimeConfig,
)
from formterm.question import Question, QuestionContext

Choices = Union[Mapping[str, str], Iterable[tuple[str, str]]]


class Asker:
    """Creates :class:`Question` objects for a specific medium.

    Subclasses implement :meth:`create` for the question types listed in
    :attr:`supported_types`. The typed helpers (``text``, ``radio``,
    ``group``, ...) build a config and forward to :meth:`ask`.
    """

    supported_types: frozenset[QuestionType] = frozenset(QuestionType)

    def __init__(self, context: QuestionContext | None = None) -> None:
        self.context = context

    def create(self, config: QuestionConfig, context: QuestionContext | None) -> Question[Any]:
        raise NotImplementedError

    def ask(self, config: QuestionConfig, context: QuestionContext | None = None) -> Question[Any]:
        """Build a question for *config*. Nothing is asked until it is awaited."""
        if not isinstance(config, QuestionConfig):
            raise ProtocolError(f"not a question config: {config!r}")
        if config.type not in self.supported_types:
            raise ProtocolError(
                f"{type(self).__name__} cannot ask {config.type.value!r} questions"
            )
        return self.create(config, context if context is not None else self.context)

    # --- typed helpers --------------------------------------------------------

    def info(
        self,
        title: str,
        *,
        description: Description = None,
        context: QuestionContext | None = None,
    ) -> Question[None]:
        return self.ask(InfoConfig(title=title, description=description), context)

    def confirm(
        self,
        title: str,
        *,
        description: Description = None,
        context: QuestionContext | None = None,
    ) -> Question[bool]:
        return self.ask(ConfirmConfig(title=title, description=description), context)

    def text(
        self,
        title: str,
        *,
        description: Description = None,
        default: str | None = None,
        context: QuestionContext | None = None,
    ) -> Question[str]:
        return self.ask(TextConfig(title=title, description=description, default=default), context)

    def multiline(
        self,
        title: str,
        *,
        description: Description = None,
        default: str | None = None,
        context: QuestionContext | None = None,
    ) -> Question[str]:
        return self.ask(
            MultilineConfig(title=title, description=description, default=default), context
        )

    def password(
        self,
        title: str,
        *,
        description: Description = None,
        context: QuestionContext | None = None,
    ) -> Question[str]:
        return self.ask(PasswordConfig(title=title, description=description), context)

    def checkboxes(
        self,
        title: str,
        choices: Choices,
        *,
        description: Description = None,
        context: QuestionContext | None = None,
    ) -> Question[list[str]]:
        return self.ask(
            CheckboxesConfig(title=title, description=description, choices=choices), context
        )

    def radio(
        self,
        title: str,
        choices: Choices,
        *,
        description: Description = None,
        default: str | None = None,
        context: QuestionContext | None = None,
    ) -> Question[str]:
        return self.ask(
            RadioConfig(title=title, description=description, choices=choices, default=default),
            context,
        )

    def dropdown(
        self,
        title: str,
        choices: Choices,
        *,
        description: Description = None,
        default: str | None = None,
        context: QuestionContext | None = None,
    ) -> Question[str]:
        return self.ask(
            DropdownConfig(title=title, description=description, choices=choices, default=default),
            context,
        )

    def date(
        self,
        title: str,
        *,
        description: Description = None,
        context: QuestionContext | None = None,
    ) -> Question[str]:
        return self.ask(DateConfig(title=title, description=description), context)

    def time(
        self,
        title: str,
        *,
        description: Description = None,
        context: QuestionContext | None = None,
    ) -> Question[str]:
        return self.ask(TimeConfig(title=title, description=description), context)

    def group(
        self,
        title: str,
        questions: Mapping[str, Question[Any] | QuestionConfig],
        *,
        description: Description = None,
        context: QuestionContext | None = None,
    ) -> Question[dict[str, Any]]:
        """Bundle pre-built questions into one group question.

        Only the configs of *questions* are used; the sub-questions
        themselves are never forced. How the group is answered is up to
        the medium.
        """
        configs = {
            key: q.config if isinstance(q, Question) else q for key, q in questions.items()
        }
        return self.ask(
            GroupConfig(title=title, description=description, questions=configs), context
        )
