"""Error hierarchy for formterm."""
from __future__ import annotations

from typing import Any


class FormtermError(Exception):
    """Base error for all formterm errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ValidationError(FormtermError):
    """An answer does not match the shape promised by its question.

    *path* is the sequence of group keys leading to the offending
    sub-answer; it is empty for a top-level answer.
    """

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        self.path = tuple(path)
        self.reason = message
        location = ".".join(self.path) if self.path else "<answer>"
        super().__init__(f"{location}: {message}")

    def nested(self, key: str) -> ValidationError:
        """Return a copy of this error with *key* prepended to the path."""
        return ValidationError(self.reason, (key, *self.path))


class CancellationError(FormtermError):
    """The cancellation signal of a question fired before it settled."""

    def __init__(self, reason: Any = None) -> None:
        self.reason = reason
        message = "question cancelled"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class TransportError(FormtermError):
    """The channel carrying a question closed or failed."""


class ProtocolError(FormtermError):
    """A question or message the medium cannot handle.

    Raised synchronously for unknown question types and used to reject a
    question when the remote peer answers with an error response.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        data: Any = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.code = code
        self.data = data


class ConfigError(FormtermError, ValueError):
    """A question config was constructed with inconsistent fields."""


class FormLoadError(FormtermError):
    """Form scripts could not be imported or collected."""


class ScriptExhaustedError(FormtermError):
    """A scripted asker was forced more times than it has answers."""
