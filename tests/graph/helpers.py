"""Helpers for comparing trees structurally."""

from typing import List, Optional, Tuple

from treegraph.core.graph import GraphSession, Node
from treegraph.core.graph.mutator import iter_nodes

Shape = List[Tuple[str, str, int, Optional[str], List[str]]]


def tree_shape(root: Optional[Node]) -> Shape:
    """Structural fingerprint: (id, label, depth, parent_id, child ids) per node, pre-order."""
    return [(n.id, n.label, n.depth, n.parent_id, [c.id for c in n.children]) for n in iter_nodes(root)]


def node_ids(session: GraphSession) -> List[str]:
    return [n.id for n in session.get_all_nodes()]


def build_chain(session: GraphSession, length: int) -> None:
    """Add ``length`` nodes, each a child of the previous one."""
    for _ in range(length):
        assert session.add_child_to_active()
