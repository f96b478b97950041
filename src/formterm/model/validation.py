"""Answer validation: checks a raw answer against its question config.

Each validator takes the config and the raw (untyped) answer and returns
the typed answer, or raises :class:`ValidationError`.
"""

from __future__ import annotations

import datetime
import re
from typing import Any, Callable, Mapping

from formterm.errors import ValidationError
from formterm.model.question import (
    CheckboxesConfig,
    GroupConfig,
    QuestionConfig,
    QuestionType,
    SingleChoiceConfig,
)

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_TIME_RE = re.compile(r"(?:[01]\d|2[0-3]):[0-5]\d(?::[0-5]\d(?:\.\d+)?)?", re.ASCII)


def _validate_none(config: QuestionConfig, raw: Any) -> None:
    if raw is not None:
        raise ValidationError(f"expected no answer, got {type(raw).__name__}")
    return None


def _validate_bool(config: QuestionConfig, raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise ValidationError(f"expected a boolean, got {type(raw).__name__}")
    return raw


def _validate_string(config: QuestionConfig, raw: Any) -> str:
    if not isinstance(raw, str):
        raise ValidationError(f"expected a string, got {type(raw).__name__}")
    return raw


def _validate_checkboxes(config: CheckboxesConfig, raw: Any) -> list[str]:
    if not isinstance(raw, (list, tuple)):
        raise ValidationError(f"expected a list of choice keys, got {type(raw).__name__}")
    selected: dict[str, None] = {}
    for value in raw:
        if not isinstance(value, str) or value not in config.choices:
            raise ValidationError(f"{value!r} is not one of the choices")
        selected.setdefault(value, None)
    # first-occurrence order, not declaration order
    return list(selected)


def _validate_single_choice(config: SingleChoiceConfig, raw: Any) -> str:
    if not isinstance(raw, str) or raw not in config.choices:
        raise ValidationError(f"{raw!r} is not one of the choices")
    return raw


def _validate_date(config: QuestionConfig, raw: Any) -> str:
    if not isinstance(raw, str) or not _DATE_RE.fullmatch(raw):
        raise ValidationError(f"expected a date as YYYY-MM-DD, got {raw!r}")
    try:
        datetime.date.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"{raw!r} is not a calendar date") from None
    return raw


def _validate_time(config: QuestionConfig, raw: Any) -> str:
    if not isinstance(raw, str) or not _TIME_RE.fullmatch(raw):
        raise ValidationError(f"expected a time as HH:MM[:SS], got {raw!r}")
    return raw


def _validate_group(config: GroupConfig, raw: Any) -> dict[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"expected an object of answers, got {type(raw).__name__}")
    answers: dict[str, Any] = {}
    for key, sub in config.questions.items():
        if key not in raw:
            raise ValidationError("missing answer", (key,))
        try:
            answers[key] = validate(sub, raw[key])
        except ValidationError as exc:
            raise exc.nested(key) from None
    return answers


_VALIDATORS: dict[QuestionType, Callable[[Any, Any], Any]] = {
    QuestionType.INFO: _validate_none,
    QuestionType.CONFIRM: _validate_bool,
    QuestionType.TEXT: _validate_string,
    QuestionType.MULTILINE: _validate_string,
    QuestionType.PASSWORD: _validate_string,
    QuestionType.CHECKBOXES: _validate_checkboxes,
    QuestionType.RADIO: _validate_single_choice,
    QuestionType.DROPDOWN: _validate_single_choice,
    QuestionType.DATE: _validate_date,
    QuestionType.TIME: _validate_time,
    QuestionType.GROUP: _validate_group,
}


def validate(config: QuestionConfig, raw: Any) -> Any:
    """Validate *raw* against *config* and return the typed answer."""
    return _VALIDATORS[config.type](config, raw)
