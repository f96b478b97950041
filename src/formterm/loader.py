"""Discovery of form scripts on the filesystem."""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable

from formterm.errors import FormLoadError
from formterm.model.form import Form

logger = logging.getLogger(__name__)


def iter_script_paths(paths: Iterable[str | Path]) -> list[Path]:
    """Expand files and directories into a sorted list of ``.py`` files."""
    found: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.extend(
                p for p in sorted(path.rglob("*.py")) if not p.name.startswith("_")
            )
        elif path.is_file():
            found.append(path)
        else:
            raise FormLoadError(f"no such file or directory: {path}")
    return found


def _import_file(path: Path) -> ModuleType:
    resolved = path.resolve()
    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()[:8]
    name = f"formterm_form_{resolved.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(name, resolved)
    if spec is None or spec.loader is None:
        raise FormLoadError(f"cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        del sys.modules[name]
        raise FormLoadError(f"error importing {path}: {exc}", cause=exc) from exc
    return module


def load_forms(paths: Iterable[str | Path]) -> dict[str, Form]:
    """Import every script under *paths* and collect module-level forms by id."""
    forms: dict[str, Form] = {}
    for path in iter_script_paths(paths):
        module = _import_file(path)
        for value in vars(module).values():
            if not isinstance(value, Form):
                continue
            existing = forms.get(value.id)
            if existing is not None and existing is not value:
                raise FormLoadError(f"duplicate form id {value.id!r} in {path}")
            forms[value.id] = value
        logger.debug("Loaded %s", path)
    return forms
