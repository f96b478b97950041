"""CLI command: formterm term -- answer a form in this terminal."""

from __future__ import annotations

import asyncio
import sys

import click

from formterm.asker.auto import AutoAsker
from formterm.asker.base import Asker
from formterm.asker.prompts import ClickPrompts
from formterm.asker.terminal import TerminalAsker
from formterm.cli.common import load_or_exit, pick_form
from formterm.config import FormtermConfig
from formterm.errors import CancellationError, FormtermError
from formterm.model.form import Form


async def _run(forms: dict[str, Form], form: Form | None, asker: Asker, prompts: ClickPrompts) -> None:
    if form is None:
        choices = [(f.id, f.display_name) for f in sorted(forms.values(), key=lambda f: f.id)]
        selected = await prompts.select("Select a form", choices)
        form = forms[selected]
    await form.run(asker)


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--form", "form_id", default=None, help="Id of the form to run")
@click.option("--auto", is_flag=True, help="Answer every question with its default")
@click.option(
    "--show-description/--no-show-description",
    default=False,
    help="Print each question's title and description before prompting",
)
def term(paths: tuple[str, ...], form_id: str | None, auto: bool, show_description: bool) -> None:
    """Run a form from PATHS interactively in the terminal."""
    forms = load_or_exit(paths)
    form = pick_form(forms, form_id)
    if form is None and auto:
        click.echo("Several forms found; choose one with --form", err=True)
        sys.exit(1)

    config = FormtermConfig(show_description=show_description)
    prompts = ClickPrompts()
    asker: Asker = AutoAsker() if auto else TerminalAsker(prompts, config)

    try:
        asyncio.run(_run(forms, form, asker, prompts))
    except CancellationError:
        click.echo("\nCancelled", err=True)
        sys.exit(130)
    except FormtermError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
