"""Event types emitted while questions travel over a channel."""

from dataclasses import dataclass


@dataclass(frozen=True)
class QuestionAsked:
    correlation_id: str
    question_type: str
    title: str


@dataclass(frozen=True)
class AnswerReceived:
    correlation_id: str


@dataclass(frozen=True)
class AnswerRejected:
    correlation_id: str
    error: str


@dataclass(frozen=True)
class QuestionCancelled:
    correlation_id: str


@dataclass(frozen=True)
class ChannelClosed:
    pending: int
    error: str = ""
