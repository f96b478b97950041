"""Event system: bus and event types for question lifecycle."""

from formterm.events.bus import EventBus
from formterm.events.types import (
    AnswerReceived,
    AnswerRejected,
    ChannelClosed,
    QuestionAsked,
    QuestionCancelled,
)

__all__ = [
    "EventBus",
    "AnswerReceived",
    "AnswerRejected",
    "ChannelClosed",
    "QuestionAsked",
    "QuestionCancelled",
]
