"""CLI command: formterm list -- show the forms found in scripts."""

from __future__ import annotations

import click

from formterm.cli.common import load_or_exit


@click.command("list")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
def list_forms(paths: tuple[str, ...]) -> None:
    """List the forms defined in PATHS (files or directories)."""
    forms = load_or_exit(paths)
    width = max(len(form_id) for form_id in forms)
    for form_id, form in sorted(forms.items()):
        click.echo(f"{form_id.ljust(width)}  {form.title or 'Untitled'}")
