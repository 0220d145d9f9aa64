from __future__ import annotations

"""Higher-level helpers used by CLI commands.

A script is a list of step tokens applied in order to one session:

    add            add a child under the active node
    add*3          repeat a step three times
    select=2       make node 2 active
    delete         delete the active node and its subtree
    delete=4       delete node 4 and its subtree
    reset          start over from a single root
    undo / redo    move through history
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from treegraph.core.graph import GraphSession

# Steps that take an optional (delete) or required (select) node id.
_NODE_ARGUMENT = {"select": True, "delete": False}
STEP_NAMES = ("add", "select", "delete", "reset", "undo", "redo")


class ScriptError(ValueError):
    """Raised for a step token that cannot be parsed."""


@dataclass(frozen=True)
class ScriptStep:
    name: str
    argument: Optional[str] = None

    def describe(self) -> str:
        return f"{self.name}={self.argument}" if self.argument is not None else self.name


@dataclass(frozen=True)
class StepOutcome:
    step: ScriptStep
    succeeded: bool
    message: str
    active_node_id: Optional[str]
    node_count: int


def parse_step(token: str) -> List[ScriptStep]:
    """Parse one token, expanding ``name*N`` repetitions."""
    raw = token.strip()
    repeat = 1
    if "*" in raw:
        raw, count = raw.rsplit("*", 1)
        if not count.isdigit() or int(count) < 1:
            raise ScriptError(f"Bad repeat count in '{token}': expected a positive integer")
        repeat = int(count)

    argument: Optional[str] = None
    if "=" in raw:
        raw, argument = raw.split("=", 1)
        argument = argument.strip()
        if not argument:
            raise ScriptError(f"Bad step '{token}': expected 'step=node_id'")

    name = raw.strip().lower()
    if name not in STEP_NAMES:
        raise ScriptError(f"Unknown step '{name}' (expected one of: {', '.join(STEP_NAMES)})")
    if argument is not None and name not in _NODE_ARGUMENT:
        raise ScriptError(f"Step '{name}' does not take a node id")
    if argument is None and _NODE_ARGUMENT.get(name):
        raise ScriptError(f"Step '{name}' requires a node id ('{name}=<id>')")

    return [ScriptStep(name=name, argument=argument)] * repeat


def parse_script(tokens: List[str]) -> List[ScriptStep]:
    steps: List[ScriptStep] = []
    for token in tokens:
        steps.extend(parse_step(token))
    return steps


def _add(session: GraphSession, step: ScriptStep) -> tuple[bool, str]:
    if session.add_child_to_active():
        return True, f"Added node {session.active_node_id}"
    return False, "Cannot add child: maximum depth reached"


def _select(session: GraphSession, step: ScriptStep) -> tuple[bool, str]:
    session.select_node(step.argument)
    if session.active_node_id == step.argument:
        return True, f"Selected node {step.argument}"
    return False, f"Node {step.argument} not found"


def _delete(session: GraphSession, step: ScriptStep) -> tuple[bool, str]:
    target = step.argument or session.active_node_id
    root_id = session.root.id if session.root is not None else None
    ok = session.delete_node(step.argument) if step.argument is not None else session.delete_active_node()
    if not ok:
        return False, f"Failed to delete node {target}"
    if target == root_id:
        return True, "Deleted root, graph reset"
    return True, f"Deleted node {target}"


def _reset(session: GraphSession, step: ScriptStep) -> tuple[bool, str]:
    session.reset_graph()
    return True, "Graph reset"


def _undo(session: GraphSession, step: ScriptStep) -> tuple[bool, str]:
    if session.undo():
        return True, "Undone"
    return False, "Nothing to undo"


def _redo(session: GraphSession, step: ScriptStep) -> tuple[bool, str]:
    if session.redo():
        return True, "Redone"
    return False, "Nothing to redo"


_HANDLERS: Dict[str, Callable[[GraphSession, ScriptStep], tuple[bool, str]]] = {
    "add": _add,
    "select": _select,
    "delete": _delete,
    "reset": _reset,
    "undo": _undo,
    "redo": _redo,
}


def run_script(session: GraphSession, steps: List[ScriptStep]) -> List[StepOutcome]:
    """Apply ``steps`` to ``session`` in order, recording each outcome."""
    outcomes: List[StepOutcome] = []
    for step in steps:
        succeeded, message = _HANDLERS[step.name](session, step)
        outcomes.append(
            StepOutcome(
                step=step,
                succeeded=succeeded,
                message=message,
                active_node_id=session.active_node_id,
                node_count=len(session.get_all_nodes()),
            )
        )
    return outcomes


__all__ = [
    "ScriptError",
    "ScriptStep",
    "StepOutcome",
    "STEP_NAMES",
    "parse_step",
    "parse_script",
    "run_script",
]
