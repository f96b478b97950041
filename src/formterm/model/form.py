"""Form: a named script that drives an asker to completion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from formterm.model.question import Description

if TYPE_CHECKING:
    from formterm.asker.base import Asker

FormScript = Callable[["Asker"], Awaitable[Any]]


@dataclass(frozen=True)
class Form:
    """A form script plus the catalog information shown to users."""

    id: str
    run: FormScript
    title: str | None = None
    description: Description = None

    @property
    def display_name(self) -> str:
        return f"{self.title or 'Untitled'} ({self.id})"


def form(
    id: str, *, title: str | None = None, description: Description = None
) -> Callable[[FormScript], Form]:
    """Decorator turning ``async def script(asker)`` into a :class:`Form`."""

    def decorator(script: FormScript) -> Form:
        return Form(id=id, run=script, title=title, description=description)

    return decorator
