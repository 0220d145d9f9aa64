"""
Graph data models.

These models represent one version of the tree being edited:
- Node: A labeled node owning its children, with a non-owning parent link
- GraphState: A detached snapshot of a whole tree plus session pointers

Nodes are immutable per version. Every structural change produces new node
objects along the path from the root to the changed node; untouched
subtrees are shared between versions.

Tree Structure:
    1 (root, depth 0)
    ├── 2 (depth 1)
    │   └── 3 (depth 2)
    └── 4 (depth 1)
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Node(BaseModel):
    """
    A node in the graph tree.

    ``parent_id`` is a lookup key into the owning tree, never an owning
    reference. Ownership flows top-down through ``children``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    depth: int = Field(default=0, ge=0)
    children: List[Node] = Field(default_factory=list)
    parent_id: Optional[str] = None

    @classmethod
    def create(cls, node_id: str, parent: Optional[Node] = None) -> Node:
        """Build a childless node whose label mirrors its id."""
        if parent is None:
            return cls(id=node_id, label=node_id, depth=0)
        return cls(id=node_id, label=node_id, depth=parent.depth + 1, parent_id=parent.id)

    @property
    def is_root(self) -> bool:
        """Check if this is the root node (no parent)."""
        return self.parent_id is None

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return len(self.children) == 0

    @property
    def child_count(self) -> int:
        return len(self.children)

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant in parent-before-children order, excluding self."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def descendants(self) -> List[Node]:
        return list(self.iter_descendants())

    def subtree_size(self) -> int:
        """Number of nodes in the subtree rooted here, including this node."""
        return 1 + sum(1 for _ in self.iter_descendants())

    def describe(self) -> str:
        """Human-readable description of this node."""
        kind = "root" if self.is_root else f"child of {self.parent_id}"
        return f"[{self.id}] {self.label} ({kind}, depth {self.depth}, {self.child_count} children)"


class GraphState(BaseModel):
    """
    Immutable snapshot of the session at a point in time.

    The tree held here is link-free (every ``parent_id`` is None) and must
    have its parent links rebuilt before it is used as a live tree.
    """

    model_config = ConfigDict(frozen=True)

    root: Optional[Node] = None
    active_node_id: Optional[str] = None
    next_id: int = Field(default=1, ge=1)

    def with_active(self, node_id: Optional[str]) -> GraphState:
        """Copy of this snapshot recording a different active node."""
        return self.model_copy(update={"active_node_id": node_id})


Node.model_rebuild()


__all__ = ["Node", "GraphState"]
