"""
Treegraph CLI: run scripted editing sessions and inspect configuration.

A session starts from a single root node "1". Steps are applied in order
and the resulting tree is printed along with the outcome of every step.
"""

from __future__ import annotations

from typing import List

import typer
from rich.console import Console

from treegraph.cli.formatters import build_graph_tree, build_stats_table, build_steps_table
from treegraph.cli.load_helpers import load_or_exit
from treegraph.cli.paths import resolve_config_path
from treegraph.cli.services import STEP_NAMES, ScriptError, parse_script, run_script
from treegraph.core.graph import GraphSession
from treegraph.utils.logging import configure_logging

app = typer.Typer(help="Treegraph CLI: build a tree step by step with undo/redo.")
console = Console()


@app.command()
def run(
    steps: List[str] = typer.Argument(
        ...,
        help=f"Steps to apply in order ({', '.join(STEP_NAMES)}; use select=ID, delete=ID, add*N)",
    ),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to a YAML configuration file"),
    stats: bool = typer.Option(True, "--stats/--no-stats", help="Show graph statistics"),
    show_steps: bool = typer.Option(True, "--steps/--no-steps", help="Show the outcome of every step"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log session operations at DEBUG level"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Apply a sequence of steps to a fresh session and print the result."""
    configure_logging(verbose)
    session_config = load_or_exit(resolve_config_path(config), console=console, verbose_errors=verbose_load)

    try:
        script = parse_script(steps)
    except ScriptError as exc:
        console.print(f"[red]Bad step[/red]: {exc}")
        raise typer.Exit(code=2)

    session = GraphSession(session_config)
    outcomes = run_script(session, script)

    if show_steps:
        console.print(build_steps_table(outcomes))
    console.print(build_graph_tree(session))
    if stats:
        console.print(build_stats_table(session))

    skipped = sum(1 for outcome in outcomes if not outcome.succeeded)
    if skipped:
        console.print(f"[yellow]{skipped} step(s) had no effect[/yellow]")


@app.command("config")
def show_config(
    config: str | None = typer.Option(None, "--config", "-c", help="Path to a YAML configuration file"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Show the effective session configuration."""
    path = resolve_config_path(config)
    session_config = load_or_exit(path, console=console, verbose_errors=verbose_load)

    console.print(f"[bold]Source:[/bold] {path or 'built-in defaults'}")
    console.print_json(data=session_config.model_dump())


__all__ = ["app"]
