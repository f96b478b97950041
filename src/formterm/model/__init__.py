"""Formterm model layer -- public type re-exports."""

from formterm.model.form import Form, form
from formterm.model.question import (
    CONFIG_TYPES,
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
    RichText,
    TextConfig,
    TimeConfig,
    config_from_dict,
    markdown,
)
from formterm.model.validation import validate

__all__ = [
    # question configs
    "QuestionType",
    "QuestionConfig",
    "InfoConfig",
    "ConfirmConfig",
    "TextConfig",
    "MultilineConfig",
    "PasswordConfig",
    "CheckboxesConfig",
    "RadioConfig",
    "DropdownConfig",
    "DateConfig",
    "TimeConfig",
    "GroupConfig",
    "CONFIG_TYPES",
    "config_from_dict",
    # descriptions
    "Description",
    "RichText",
    "markdown",
    # validation
    "validate",
    # forms
    "Form",
    "form",
]
