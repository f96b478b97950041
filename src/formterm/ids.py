"""Correlation identifier generators."""

from __future__ import annotations

import itertools
import threading
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def __call__(self) -> str: ...


class CounterIds:
    """Monotonic ids (``q1``, ``q2``, ...), safe to share across threads."""

    def __init__(self, prefix: str = "q", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            return f"{self._prefix}{next(self._counter)}"


class RandomIds:
    """Random 12-character hex ids."""

    def __call__(self) -> str:
        return uuid.uuid4().hex[:12]
