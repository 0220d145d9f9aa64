"""
Graph editing core.

Provides the tree data model, pure tree operations, snapshot history and
the session that ties them together.

Components:
- Node: Immutable-per-version tree node with a non-owning parent link
- GraphState: Detached snapshot of the whole session state
- IdentifierAllocator: Monotonic, never-reused node labels
- HistoryManager: Bounded linear undo/redo over snapshots
- GraphSession: The object presentation layers call

Example:
    from treegraph.core.graph import GraphSession

    session = GraphSession()
    session.add_child_to_active()   # node "2" under root "1"
    session.undo()                  # back to the lone root
"""

from treegraph.core.graph.allocator import IdentifierAllocator
from treegraph.core.graph.errors import TreeInvariantError
from treegraph.core.graph.history import HistoryManager
from treegraph.core.graph.models import GraphState, Node
from treegraph.core.graph.session import GraphSession

__all__ = [
    "Node",
    "GraphState",
    "IdentifierAllocator",
    "HistoryManager",
    "GraphSession",
    "TreeInvariantError",
]
