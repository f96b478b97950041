"""Terminal prompt primitives used by the terminal asker."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol, Sequence, TypeVar

import click

from formterm.cancellation import CancelToken
from formterm.errors import CancellationError
from formterm.model.question import Description, RichText

T = TypeVar("T")

Choice = tuple[str, str]


class Prompts(Protocol):
    """One interactive prompt per call; each returns the raw user input."""

    def show(self, title: str, description: Description = None) -> None: ...

    async def text(
        self,
        message: str,
        *,
        default: str | None = None,
        validate: Callable[[str], bool] | None = None,
        signal: CancelToken | None = None,
    ) -> str: ...

    async def editor(
        self, message: str, *, default: str | None = None, signal: CancelToken | None = None
    ) -> str: ...

    async def password(self, message: str, *, signal: CancelToken | None = None) -> str: ...

    async def confirm(self, message: str, *, signal: CancelToken | None = None) -> bool: ...

    async def select(
        self,
        message: str,
        choices: Sequence[Choice],
        *,
        default: str | None = None,
        signal: CancelToken | None = None,
    ) -> str: ...

    async def checkbox(
        self, message: str, choices: Sequence[Choice], *, signal: CancelToken | None = None
    ) -> list[str]: ...


class ClickPrompts:
    """Prompt primitives built on click's terminal helpers.

    Each blocking prompt runs in a worker thread so other sessions keep
    running. A prompt that is already on screen cannot be withdrawn; when
    the signal fires the question settles immediately and the late input
    is discarded.
    """

    def show(self, title: str, description: Description = None) -> None:
        click.secho(title, bold=True)
        if isinstance(description, RichText):
            click.echo(description.content.strip())
        elif description:
            click.echo(description)

    async def text(
        self,
        message: str,
        *,
        default: str | None = None,
        validate: Callable[[str], bool] | None = None,
        signal: CancelToken | None = None,
    ) -> str:
        def ask() -> str:
            while True:
                raw = click.prompt(
                    message,
                    default=default if default is not None else "",
                    show_default=default is not None,
                )
                if validate is None or validate(raw):
                    return raw
                click.secho(f"  Invalid value: {raw!r}", fg="red", err=True)

        return await _blocking(ask, signal)

    async def editor(
        self, message: str, *, default: str | None = None, signal: CancelToken | None = None
    ) -> str:
        def ask() -> str:
            click.echo(f"{message} (opening editor)")
            edited = click.edit(default or "")
            # None means the editor was closed without saving
            return (default or "") if edited is None else edited

        return await _blocking(ask, signal)

    async def password(self, message: str, *, signal: CancelToken | None = None) -> str:
        return await _blocking(
            lambda: click.prompt(message, hide_input=True, default="", show_default=False),
            signal,
        )

    async def confirm(self, message: str, *, signal: CancelToken | None = None) -> bool:
        return await _blocking(lambda: click.confirm(message), signal)

    async def select(
        self,
        message: str,
        choices: Sequence[Choice],
        *,
        default: str | None = None,
        signal: CancelToken | None = None,
    ) -> str:
        keys = [key for key, _ in choices]

        def ask() -> str:
            click.echo(message)
            for i, (_, label) in enumerate(choices, start=1):
                click.echo(f"  [{i}] {label}")
            default_index = keys.index(default) + 1 if default in keys else None
            index = click.prompt(
                "  Choice",
                type=click.IntRange(1, len(keys)),
                default=default_index,
                show_default=default_index is not None,
            )
            return keys[index - 1]

        return await _blocking(ask, signal)

    async def checkbox(
        self, message: str, choices: Sequence[Choice], *, signal: CancelToken | None = None
    ) -> list[str]:
        keys = [key for key, _ in choices]

        def ask() -> list[str]:
            click.echo(message)
            for i, (_, label) in enumerate(choices, start=1):
                click.echo(f"  [{i}] {label}")
            while True:
                raw = click.prompt(
                    "  Choices (comma separated numbers)", default="", show_default=False
                )
                picked = parse_numbers(raw, len(keys))
                if picked is not None:
                    return [keys[i - 1] for i in picked]
                click.secho(f"  Invalid selection: {raw!r}", fg="red", err=True)

        return await _blocking(ask, signal)


def parse_numbers(raw: str, upper: int) -> list[int] | None:
    """Parse ``"1, 3"`` into ``[1, 3]``; ``None`` when out of range or malformed."""
    picked: list[int] = []
    for part in raw.replace(" ", "").split(","):
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= upper:
            return None
        picked.append(int(part))
    return picked


async def _blocking(fn: Callable[[], T], signal: CancelToken | None) -> T:
    if signal is not None and signal.cancelled:
        raise CancellationError(signal.reason)
    try:
        return await asyncio.to_thread(fn)
    except (click.Abort, EOFError) as exc:
        raise CancellationError("prompt aborted") from exc
