"""CLI command: formterm serve -- answer a form from remote peers."""

from __future__ import annotations

import asyncio
import sys

import click

from formterm.cli.common import load_or_exit, pick_form
from formterm.config import DEFAULT_MAX_MESSAGE_BYTES, PROTOCOLS, FormtermConfig
from formterm.server import FormServer


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--form", "form_id", default=None, help="Id of the form to serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Host to bind to")
@click.option(
    "--port", default=3000, type=int, envvar="PORT", show_default=True, help="Port to bind to"
)
@click.option(
    "--protocol",
    type=click.Choice(PROTOCOLS),
    default="plain",
    show_default=True,
    help="Message framing spoken on the wire",
)
@click.option(
    "--max-message-bytes",
    type=click.IntRange(min=1024),
    default=DEFAULT_MAX_MESSAGE_BYTES,
    show_default=True,
    help="Longest message line accepted from a peer; longer lines are skipped",
)
def serve(
    paths: tuple[str, ...],
    form_id: str | None,
    host: str,
    port: int,
    protocol: str,
    max_message_bytes: int,
) -> None:
    """Serve a form from PATHS over newline-delimited JSON on TCP.

    Every connection runs a fresh session of the form.
    """
    forms = load_or_exit(paths)
    form = pick_form(forms, form_id)
    if form is None:
        click.echo(
            f"Several forms found ({', '.join(sorted(forms))}); choose one with --form", err=True
        )
        sys.exit(1)

    config = FormtermConfig(
        host=host, port=port, protocol=protocol, max_message_bytes=max_message_bytes
    )
    server = FormServer(form, config)
    click.echo(f"Serving form {form.id!r} on {host}:{port} ({protocol})")
    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        click.echo("\nStopped")
    except OSError as exc:
        click.echo(f"Cannot listen on {host}:{port}: {exc}", err=True)
        sys.exit(1)
