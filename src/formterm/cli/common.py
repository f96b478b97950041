"""Helpers shared by the CLI commands."""

from __future__ import annotations

import sys

import click

from formterm.errors import FormLoadError
from formterm.loader import load_forms
from formterm.model.form import Form


def load_or_exit(paths: tuple[str, ...]) -> dict[str, Form]:
    """Load forms from *paths*, exiting with status 1 if there are none."""
    try:
        forms = load_forms(paths)
    except FormLoadError as exc:
        click.echo(f"Load error: {exc}", err=True)
        sys.exit(1)
    if not forms:
        click.echo("No forms found", err=True)
        sys.exit(1)
    return forms


def pick_form(forms: dict[str, Form], form_id: str | None) -> Form | None:
    """Return the form named by *form_id*, or the only form.

    Returns None when several forms are loaded and none was named.
    """
    if form_id is not None:
        form = forms.get(form_id)
        if form is None:
            click.echo(
                f"Unknown form {form_id!r}; available: {', '.join(sorted(forms))}", err=True
            )
            sys.exit(1)
        return form
    if len(forms) == 1:
        return next(iter(forms.values()))
    return None
