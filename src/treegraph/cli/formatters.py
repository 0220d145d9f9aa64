"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import List, Optional

from rich.table import Table
from rich.tree import Tree

from treegraph.cli.services import StepOutcome
from treegraph.core.graph import GraphSession, Node


def format_node(node: Node, active_id: Optional[str]) -> str:
    """Format a node label, highlighting the active node."""
    if node.id == active_id:
        return f"[bold cyan]{node.label}[/bold cyan] [dim](active, depth {node.depth})[/dim]"
    return f"{node.label} [dim](depth {node.depth})[/dim]"


def build_graph_tree(session: GraphSession) -> Tree:
    """Render the session's tree as a rich Tree."""
    root = session.root
    if root is None:
        return Tree("[dim]<empty graph>[/dim]")

    active_id = session.active_node_id
    rendered = Tree(format_node(root, active_id), guide_style="dim")
    stack = [(root, rendered)]
    while stack:
        node, branch = stack.pop()
        for child in node.children:
            stack.append((child, branch.add(format_node(child, active_id))))
    return rendered


def build_stats_table(session: GraphSession) -> Table:
    """Summary statistics over ``get_all_nodes``."""
    nodes = session.get_all_nodes()
    table = Table(title="Graph Statistics", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Nodes", str(len(nodes)))
    table.add_row("Leaves", str(sum(1 for n in nodes if n.is_leaf)))
    table.add_row("Deepest level", str(max((n.depth for n in nodes), default=0)))
    table.add_row("Max depth", str(session.max_depth))
    table.add_row("Active node", session.active_node_id or "-")
    table.add_row("Next node id", str(session.next_node_id))
    history = session.history
    table.add_row("History", f"{history.cursor + 1}/{len(history)} (capacity {history.capacity})")
    table.add_row("Can undo", "yes" if session.can_undo() else "no")
    table.add_row("Can redo", "yes" if session.can_redo() else "no")
    return table


def build_steps_table(outcomes: List[StepOutcome]) -> Table:
    table = Table(title="Steps")
    table.add_column("#", justify="right")
    table.add_column("Step")
    table.add_column("Status")
    table.add_column("Result")
    table.add_column("Active")
    table.add_column("Nodes", justify="right")

    for idx, outcome in enumerate(outcomes, start=1):
        status = "[green]ok[/green]" if outcome.succeeded else "[yellow]skipped[/yellow]"
        table.add_row(
            str(idx),
            outcome.step.describe(),
            status,
            outcome.message,
            outcome.active_node_id or "-",
            str(outcome.node_count),
        )
    return table


__all__ = ["format_node", "build_graph_tree", "build_stats_table", "build_steps_table"]
