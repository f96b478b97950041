"""TerminalAsker: answers questions one prompt at a time in the terminal."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from formterm.asker.base import Asker
from formterm.asker.group_fill import fill_group
from formterm.asker.prompts import ClickPrompts, Prompts
from formterm.config import FormtermConfig
from formterm.errors import ValidationError
from formterm.model.question import GroupConfig, QuestionConfig, QuestionType
from formterm.model.validation import validate
from formterm.question import Question, QuestionContext


class TerminalQuestion(Question[Any]):
    """A question answered through the terminal prompt primitives.

    Every run issues a fresh prompt, so group filling can re-run the same
    sub-config when the user revisits it.
    """

    asker: TerminalAsker

    async def run(self) -> Any:
        handler = _HANDLERS[self.config.type]
        raw = await handler(self)
        return validate(self.config, raw)

    @property
    def prompts(self) -> Prompts:
        return self.asker.prompts

    def _show_info(self, force: bool = False) -> None:
        if force or self.asker.config.show_description:
            self.prompts.show(self.config.title, self.config.description)

    # --- per-type prompts -----------------------------------------------------

    async def _ask_info(self) -> None:
        self._show_info(force=True)
        return None

    async def _ask_confirm(self) -> bool:
        self._show_info()
        return await self.prompts.confirm(self.config.title, signal=self.signal)

    async def _ask_text(self) -> str:
        self._show_info()
        return await self.prompts.text(
            self.config.title, default=self.config.default, signal=self.signal
        )

    async def _ask_multiline(self) -> str:
        self._show_info()
        return await self.prompts.editor(
            self.config.title, default=self.config.default, signal=self.signal
        )

    async def _ask_password(self) -> str:
        self._show_info()
        return await self.prompts.password(self.config.title, signal=self.signal)

    async def _ask_checkboxes(self) -> list[str]:
        self._show_info()
        return await self.prompts.checkbox(
            self.config.title, list(self.config.choices.items()), signal=self.signal
        )

    async def _ask_select(self) -> str:
        self._show_info()
        return await self.prompts.select(
            self.config.title,
            list(self.config.choices.items()),
            default=self.config.default,
            signal=self.signal,
        )

    async def _ask_date(self) -> str:
        self._show_info()
        return await self.prompts.text(
            f"{self.config.title} (YYYY-MM-DD)",
            validate=_accepts(self.config),
            signal=self.signal,
        )

    async def _ask_time(self) -> str:
        self._show_info()
        return await self.prompts.text(
            f"{self.config.title} (HH:MM[:SS])",
            validate=_accepts(self.config),
            signal=self.signal,
        )

    async def _ask_group(self) -> dict[str, Any]:
        self._show_info()
        config: GroupConfig = self.config  # type: ignore[assignment]
        context = QuestionContext(signal=self.signal)

        async def select(message: str, choices: list[tuple[str, str]], default: str | None) -> str:
            return await self.prompts.select(message, choices, default=default, signal=self.signal)

        async def answer_one(key: str, sub: QuestionConfig) -> Any:
            return await self.asker.ask(sub, context)

        return await fill_group(config, select, answer_one, self.signal)


def _accepts(config: QuestionConfig) -> Callable[[str], bool]:
    def check(raw: str) -> bool:
        try:
            validate(config, raw)
        except ValidationError:
            return False
        return True

    return check


_HANDLERS: dict[QuestionType, Callable[[TerminalQuestion], Awaitable[Any]]] = {
    QuestionType.INFO: TerminalQuestion._ask_info,
    QuestionType.CONFIRM: TerminalQuestion._ask_confirm,
    QuestionType.TEXT: TerminalQuestion._ask_text,
    QuestionType.MULTILINE: TerminalQuestion._ask_multiline,
    QuestionType.PASSWORD: TerminalQuestion._ask_password,
    QuestionType.CHECKBOXES: TerminalQuestion._ask_checkboxes,
    QuestionType.RADIO: TerminalQuestion._ask_select,
    QuestionType.DROPDOWN: TerminalQuestion._ask_select,
    QuestionType.DATE: TerminalQuestion._ask_date,
    QuestionType.TIME: TerminalQuestion._ask_time,
    QuestionType.GROUP: TerminalQuestion._ask_group,
}


class TerminalAsker(Asker):
    """Asker for an interactive terminal session.

    Uses :class:`ClickPrompts` unless other prompt primitives are given.
    Titles and descriptions are printed before each prompt when
    ``show_description`` is set; ``info`` questions always print them.
    """

    supported_types = frozenset(_HANDLERS)

    def __init__(
        self,
        prompts: Prompts | None = None,
        config: FormtermConfig | None = None,
        context: QuestionContext | None = None,
    ) -> None:
        super().__init__(context)
        self.prompts: Prompts = prompts or ClickPrompts()
        self.config = config or FormtermConfig()

    def create(self, config: QuestionConfig, context: QuestionContext | None) -> TerminalQuestion:
        return TerminalQuestion(self, config, context)
