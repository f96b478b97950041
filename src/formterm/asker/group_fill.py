"""Group filling for media that can present one question at a time.

The user picks sub-questions from a menu in any order, may revisit an
answered one, and the group completes once every declared key has an
answer.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from formterm.cancellation import CancelToken
from formterm.errors import CancellationError
from formterm.model.question import GroupConfig, QuestionConfig

logger = logging.getLogger(__name__)

DONE_MARK = "✓ "
TODO_MARK = "  "

SelectFn = Callable[[str, list[tuple[str, str]], "str | None"], Awaitable[str]]
AnswerFn = Callable[[str, QuestionConfig], Awaitable[Any]]


def menu_choices(config: GroupConfig, answers: dict[str, Any]) -> list[tuple[str, str]]:
    """Return ``(key, label)`` menu entries with a done marker on answered keys."""
    return [
        (key, (DONE_MARK if key in answers else TODO_MARK) + sub.title)
        for key, sub in config.questions.items()
    ]


def first_unanswered(config: GroupConfig, answers: dict[str, Any]) -> str | None:
    for key in config.questions:
        if key not in answers:
            return key
    return None


async def fill_group(
    config: GroupConfig,
    select: SelectFn,
    answer_one: AnswerFn,
    signal: CancelToken | None = None,
) -> dict[str, Any]:
    """Collect an answer for every sub-question of *config*.

    *select(message, choices, default)* shows the menu and returns the
    chosen key; *answer_one(key, sub_config)* runs that sub-question to
    completion. The loop ends when the number of distinct answered keys
    equals the number of declared keys. The result follows declaration
    order, not selection order.
    """
    keys = list(config.questions)
    answers: dict[str, Any] = {}
    message = f"{config.title} (Select an option)"
    while len(answers) < len(keys):
        if signal is not None and signal.cancelled:
            raise CancellationError(signal.reason)
        selected = await select(message, menu_choices(config, answers), first_unanswered(config, answers))
        if selected not in config.questions:
            logger.warning("Ignoring unknown group key %r in %r", selected, config.title)
            continue
        answers[selected] = await answer_one(selected, config.questions[selected])
        logger.debug("Group %r: %d/%d answered", config.title, len(answers), len(keys))
    return {key: answers[key] for key in keys}
