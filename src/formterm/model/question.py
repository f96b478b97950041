"""Question model: immutable configs describing one question each."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Iterable, Mapping, Union

from formterm.errors import ConfigError, ProtocolError


class QuestionType(Enum):
    """Kind of question presented to the answering party."""

    INFO = "info"
    CONFIRM = "confirm"
    TEXT = "text"
    MULTILINE = "multiline"
    PASSWORD = "password"
    CHECKBOXES = "checkboxes"
    RADIO = "radio"
    DROPDOWN = "dropdown"
    DATE = "date"
    TIME = "time"
    GROUP = "group"


@dataclass(frozen=True)
class RichText:
    """Formatted description content (markdown is the only format)."""

    content: str
    format: str = "markdown"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "richText", "format": self.format, "content": self.content}


Description = Union[str, RichText, None]


def markdown(text: str) -> RichText:
    """Build a markdown description from an indented triple-quoted string.

    A leading newline is dropped, common indentation is removed and a
    trailing blank line is stripped, so descriptions can be written
    inline next to the code that uses them.
    """
    if text.startswith("\n"):
        text = text[1:]
    return RichText(content=textwrap.dedent(text).rstrip("\n"))


def _freeze_choices(choices: Mapping[str, str] | Iterable[tuple[str, str]]) -> Mapping[str, str]:
    if isinstance(choices, Mapping):
        items = list(choices.items())
    else:
        items = [tuple(pair) for pair in choices]
    frozen: dict[str, str] = {}
    for item in items:
        if len(item) != 2:
            raise ConfigError(f"choice must be a (key, label) pair, got {item!r}")
        key, label = item
        if not isinstance(key, str) or not isinstance(label, str):
            raise ConfigError(f"choice key and label must be strings, got {item!r}")
        if key in frozen:
            raise ConfigError(f"duplicate choice key: {key!r}")
        frozen[key] = label
    return MappingProxyType(frozen)


@dataclass(frozen=True, kw_only=True)
class QuestionConfig:
    """Fields shared by every question variant."""

    type: ClassVar[QuestionType]

    title: str
    description: Description = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title:
            raise ConfigError("question title must be a non-empty string")
        if self.description is not None and not isinstance(self.description, (str, RichText)):
            raise ConfigError(
                f"description must be a string or RichText, got {type(self.description).__name__}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form of this config."""
        data: dict[str, Any] = {"type": self.type.value, "title": self.title}
        if isinstance(self.description, RichText):
            data["description"] = self.description.to_dict()
        elif self.description is not None:
            data["description"] = self.description
        data.update(self._extra_fields())
        return data

    def _extra_fields(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True, kw_only=True)
class InfoConfig(QuestionConfig):
    type: ClassVar[QuestionType] = QuestionType.INFO


@dataclass(frozen=True, kw_only=True)
class ConfirmConfig(QuestionConfig):
    type: ClassVar[QuestionType] = QuestionType.CONFIRM


@dataclass(frozen=True, kw_only=True)
class DefaultTextConfig(QuestionConfig):
    default: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.default is not None and not isinstance(self.default, str):
            raise ConfigError("text default must be a string")

    def _extra_fields(self) -> dict[str, Any]:
        return {} if self.default is None else {"default": self.default}


@dataclass(frozen=True, kw_only=True)
class TextConfig(DefaultTextConfig):
    type: ClassVar[QuestionType] = QuestionType.TEXT


@dataclass(frozen=True, kw_only=True)
class MultilineConfig(DefaultTextConfig):
    type: ClassVar[QuestionType] = QuestionType.MULTILINE


@dataclass(frozen=True, kw_only=True)
class PasswordConfig(QuestionConfig):
    type: ClassVar[QuestionType] = QuestionType.PASSWORD


@dataclass(frozen=True, kw_only=True)
class CheckboxesConfig(QuestionConfig):
    type: ClassVar[QuestionType] = QuestionType.CHECKBOXES

    choices: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "choices", _freeze_choices(self.choices))

    def _extra_fields(self) -> dict[str, Any]:
        return {"choices": dict(self.choices)}


@dataclass(frozen=True, kw_only=True)
class SingleChoiceConfig(QuestionConfig):
    choices: Mapping[str, str] = field(default_factory=dict)
    default: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "choices", _freeze_choices(self.choices))
        if not self.choices:
            raise ConfigError(f"{self.type.value} question needs at least one choice")
        if self.default is not None and self.default not in self.choices:
            raise ConfigError(f"default {self.default!r} is not one of the choices")

    def _extra_fields(self) -> dict[str, Any]:
        data: dict[str, Any] = {"choices": dict(self.choices)}
        if self.default is not None:
            data["default"] = self.default
        return data


@dataclass(frozen=True, kw_only=True)
class RadioConfig(SingleChoiceConfig):
    type: ClassVar[QuestionType] = QuestionType.RADIO


@dataclass(frozen=True, kw_only=True)
class DropdownConfig(SingleChoiceConfig):
    type: ClassVar[QuestionType] = QuestionType.DROPDOWN


@dataclass(frozen=True, kw_only=True)
class DateConfig(QuestionConfig):
    type: ClassVar[QuestionType] = QuestionType.DATE


@dataclass(frozen=True, kw_only=True)
class TimeConfig(QuestionConfig):
    type: ClassVar[QuestionType] = QuestionType.TIME


@dataclass(frozen=True, kw_only=True)
class GroupConfig(QuestionConfig):
    """A set of named sub-questions answered as one composite value."""

    type: ClassVar[QuestionType] = QuestionType.GROUP

    questions: Mapping[str, QuestionConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__post_init__()
        questions: dict[str, QuestionConfig] = {}
        for key, sub in dict(self.questions).items():
            if not isinstance(key, str):
                raise ConfigError(f"group key must be a string, got {key!r}")
            if not isinstance(sub, QuestionConfig):
                raise ConfigError(f"group entry {key!r} is not a question config")
            questions[key] = sub
        object.__setattr__(self, "questions", MappingProxyType(questions))

    def _extra_fields(self) -> dict[str, Any]:
        return {"questions": {key: sub.to_dict() for key, sub in self.questions.items()}}


CONFIG_TYPES: dict[QuestionType, type[QuestionConfig]] = {
    QuestionType.INFO: InfoConfig,
    QuestionType.CONFIRM: ConfirmConfig,
    QuestionType.TEXT: TextConfig,
    QuestionType.MULTILINE: MultilineConfig,
    QuestionType.PASSWORD: PasswordConfig,
    QuestionType.CHECKBOXES: CheckboxesConfig,
    QuestionType.RADIO: RadioConfig,
    QuestionType.DROPDOWN: DropdownConfig,
    QuestionType.DATE: DateConfig,
    QuestionType.TIME: TimeConfig,
    QuestionType.GROUP: GroupConfig,
}


def _description_from_wire(value: Any) -> Description:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        # {"mimeType": "text/markdown"} is the older spelling of rich text
        if value.get("kind") == "richText" or value.get("mimeType") == "text/markdown":
            content = value.get("content")
            if isinstance(content, str):
                return RichText(content=content, format=value.get("format", "markdown"))
    raise ConfigError(f"unsupported description value: {value!r}")


def config_from_dict(data: Mapping[str, Any]) -> QuestionConfig:
    """Parse the wire form produced by :meth:`QuestionConfig.to_dict`."""
    if not isinstance(data, Mapping):
        raise ConfigError(f"question config must be an object, got {type(data).__name__}")
    raw_type = data.get("type")
    try:
        qtype = QuestionType(raw_type)
    except ValueError:
        raise ProtocolError(f"unknown question type: {raw_type!r}") from None

    kwargs: dict[str, Any] = {
        "title": data.get("title"),
        "description": _description_from_wire(data.get("description")),
    }
    if qtype in (QuestionType.TEXT, QuestionType.MULTILINE):
        kwargs["default"] = data.get("default")
    elif qtype is QuestionType.CHECKBOXES:
        kwargs["choices"] = data.get("choices") or {}
    elif qtype in (QuestionType.RADIO, QuestionType.DROPDOWN):
        kwargs["choices"] = data.get("choices") or {}
        kwargs["default"] = data.get("default")
    elif qtype is QuestionType.GROUP:
        questions = data.get("questions") or {}
        if not isinstance(questions, Mapping):
            raise ConfigError("group questions must be an object")
        kwargs["questions"] = {key: config_from_dict(sub) for key, sub in questions.items()}
    return CONFIG_TYPES[qtype](**kwargs)
