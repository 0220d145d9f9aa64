from __future__ import annotations

"""Shared helpers for loading configuration with CLI-friendly errors."""

import typer
from rich.console import Console

from treegraph.core.config import SessionConfig
from treegraph.io.loaders import LoaderError, load_session_config


def load_or_exit(
    path: str | None,
    *,
    console: Console,
    verbose_errors: bool = False,
) -> SessionConfig:
    try:
        return load_session_config(path)
    except LoaderError as err:
        if verbose_errors and err.cause:
            console.print(f"[red]Failed to load configuration:[/red] {err.message}\n{err.cause}")
        else:
            console.print(f"[red]Failed to load configuration:[/red] {err}")
        raise typer.Exit(code=1)


__all__ = ["load_or_exit"]
