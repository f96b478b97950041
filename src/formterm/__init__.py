"""Formterm: write a form once as a script, answer it anywhere."""
from __future__ import annotations

__version__ = "0.1.0"

from formterm.asker import (  # noqa: E402
    Asker,
    AutoAsker,
    CallbackAsker,
    RecordingAsker,
    ScriptedAsker,
    TerminalAsker,
)
from formterm.cancellation import CancelToken  # noqa: E402
from formterm.channel import ChannelAsker, MemoryChannel, StreamChannel, run_session  # noqa: E402
from formterm.config import FormtermConfig  # noqa: E402
from formterm.errors import (  # noqa: E402
    CancellationError,
    ConfigError,
    FormLoadError,
    FormtermError,
    ProtocolError,
    TransportError,
    ValidationError,
)
from formterm.model import Form, QuestionConfig, QuestionType, RichText, form, markdown, validate  # noqa: E402
from formterm.question import Question, QuestionContext, QuestionState  # noqa: E402

__all__ = [
    "__version__",
    # forms
    "Form",
    "form",
    "markdown",
    "RichText",
    # questions
    "QuestionType",
    "QuestionConfig",
    "Question",
    "QuestionContext",
    "QuestionState",
    "CancelToken",
    "validate",
    # askers
    "Asker",
    "TerminalAsker",
    "ScriptedAsker",
    "CallbackAsker",
    "AutoAsker",
    "RecordingAsker",
    "ChannelAsker",
    # channels
    "MemoryChannel",
    "StreamChannel",
    "run_session",
    # config
    "FormtermConfig",
    # errors
    "FormtermError",
    "ValidationError",
    "CancellationError",
    "TransportError",
    "ProtocolError",
    "ConfigError",
    "FormLoadError",
]
