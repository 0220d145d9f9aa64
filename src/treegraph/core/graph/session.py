"""
Graph session: the single mutable owner of a graph being edited.

The session holds the live tree, the active node and the identifier
allocator, and routes every public operation through the pure tree
functions in ``mutator`` and the snapshot ``HistoryManager``.

Every state-changing operation runs to completion in order:

    check preconditions -> build new tree -> verify (optional)
        -> commit snapshot -> swap in live state -> notify observers

The new tree and its snapshot are built before any live field changes, so
a failed precondition or a failure while building leaves the session
exactly as it was.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from treegraph.core.config import ROOT_LABEL, SessionConfig
from treegraph.core.graph.allocator import IdentifierAllocator
from treegraph.core.graph.errors import TreeInvariantError
from treegraph.core.graph.history import HistoryManager
from treegraph.core.graph.models import GraphState, Node
from treegraph.core.graph.mutator import (
    add_child,
    attach_parents,
    detach_parents,
    find_by_id,
    find_parent,
    iter_nodes,
    remove_subtree,
    verify_tree,
)
from treegraph.utils.logging import log_calls

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class GraphSession:
    """Owns one tree and its undo/redo history."""

    def __init__(self, config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()
        self._allocator = IdentifierAllocator()
        self._observers: List[Observer] = []

        self._root: Optional[Node] = Node.create(ROOT_LABEL)
        self._active_id: Optional[str] = self._root.id
        self._allocator.reset(int(ROOT_LABEL) + 1)
        self._history = HistoryManager(self._capture(), capacity=self.config.history_capacity)
        logger.info("Session started with root %s", self._active_id)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def root(self) -> Optional[Node]:
        return self._root

    @property
    def active_node(self) -> Optional[Node]:
        if self._active_id is None:
            return None
        return find_by_id(self._root, self._active_id)

    @property
    def active_node_id(self) -> Optional[str]:
        return self._active_id

    @property
    def next_node_id(self) -> int:
        """The value the allocator will hand out next."""
        return self._allocator.next_id

    @property
    def max_depth(self) -> int:
        return self.config.max_depth

    @property
    def history(self) -> HistoryManager:
        return self._history

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def get_all_nodes(self) -> List[Node]:
        """Every node, depth-first with parents before children."""
        return list(iter_nodes(self._root))

    def get_node(self, node_id: str) -> Optional[Node]:
        return find_by_id(self._root, node_id)

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register ``observer`` to be called after every successful change.

        Returns a callable that removes the observer again.
        """
        self._observers.append(observer)

        def _unsubscribe() -> None:
            self.unsubscribe(observer)

        return _unsubscribe

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer()

    # =========================================================================
    # Commands
    # =========================================================================

    @log_calls()
    def add_child_to_active(self) -> bool:
        """
        Add a new child under the active node and make it active.

        Returns False without changing anything when there is no active
        node or the active node already sits at ``max_depth``.
        """
        active = self.active_node
        if active is None or self._root is None:
            logger.debug("Cannot add child: no active node")
            return False
        if active.depth >= self.max_depth:
            logger.debug("Cannot add child: node %s is at max depth %d", active.id, self.max_depth)
            return False

        child = Node.create(self._allocator.peek(), parent=active)
        root = add_child(self._root, active.id, child)
        self._apply(root, child.id, self._allocator.next_id + 1)
        logger.info("Added node %s under %s", child.id, active.id)
        return True

    @log_calls()
    def select_node(self, node_id: str) -> None:
        """Make ``node_id`` active; unknown ids leave the selection unchanged."""
        node = find_by_id(self._root, node_id)
        if node is None:
            logger.debug("Select ignored: node %s not found", node_id)
            return

        # Selection is not an undo step, but later undos must restore it.
        self._history.amend(self._history.current().with_active(node.id))
        self._active_id = node.id
        self._notify()

    @log_calls()
    def delete_active_node(self) -> bool:
        """
        Delete the active node together with its whole subtree.

        Deleting the root resets the graph to a single fresh root. Otherwise
        the deleted node's parent becomes active.
        """
        active = self.active_node
        if active is None or self._root is None:
            logger.debug("Cannot delete: no active node")
            return False
        return self._delete(active)

    @log_calls()
    def delete_node(self, node_id: str) -> bool:
        """
        Delete the subtree rooted at ``node_id``.

        The active node only moves, to the deleted node's parent, when it was
        inside the removed subtree. Returns False for an unknown id.
        """
        node = find_by_id(self._root, node_id)
        if node is None:
            logger.debug("Cannot delete: node %s not found", node_id)
            return False
        return self._delete(node)

    @log_calls()
    def reset_graph(self) -> None:
        """Discard the tree and start over from a single root."""
        self._apply_reset()
        logger.info("Graph reset")

    @log_calls()
    def undo(self) -> bool:
        state = self._history.peek(-1)
        if state is None:
            logger.debug("Nothing to undo")
            return False
        root, active_id = self._prepare_restore(state)
        self._history.undo()
        self._swap(root, active_id, state.next_id)
        self._notify()
        return True

    @log_calls()
    def redo(self) -> bool:
        state = self._history.peek(1)
        if state is None:
            logger.debug("Nothing to redo")
            return False
        root, active_id = self._prepare_restore(state)
        self._history.redo()
        self._swap(root, active_id, state.next_id)
        self._notify()
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _delete(self, node: Node) -> bool:
        if self._root is None:
            raise TreeInvariantError("Session has no root", node_id=node.id)

        if node.id == self._root.id:
            logger.info("Deleting root %s resets the graph", node.id)
            self._apply_reset()
            return True

        parent = find_parent(self._root, node.id)
        if parent is None:
            raise TreeInvariantError("Non-root node has no parent", node_id=node.id)

        removed = {node.id, *(d.id for d in node.iter_descendants())}
        root = remove_subtree(self._root, node.id)
        active_id = parent.id if self._active_id in removed else self._active_id
        self._apply(root, active_id, self._allocator.next_id)
        logger.info("Deleted subtree of %s (%d nodes)", node.id, len(removed))
        return True

    def _apply_reset(self) -> None:
        root = Node.create(ROOT_LABEL)
        self._apply(root, root.id, int(ROOT_LABEL) + 1)

    def _capture(self) -> GraphState:
        return GraphState(
            root=detach_parents(self._root) if self._root is not None else None,
            active_node_id=self._active_id,
            next_id=self._allocator.next_id,
        )

    def _apply(self, root: Node, active_id: Optional[str], next_id: int) -> None:
        """Verify and snapshot a new tree, then make it live and notify."""
        if self.config.verify_invariants:
            verify_tree(root)
        state = GraphState(root=detach_parents(root), active_node_id=active_id, next_id=next_id)

        self._history.commit(state)
        self._swap(root, active_id, next_id)
        self._notify()

    def _prepare_restore(self, state: GraphState) -> Tuple[Optional[Node], Optional[str]]:
        """Rebuild a live tree from a snapshot without touching the session."""
        root = attach_parents(state.root) if state.root is not None else None
        if self.config.verify_invariants:
            verify_tree(root)
        active_id = state.active_node_id
        if active_id is not None and find_by_id(root, active_id) is None:
            active_id = None
        return root, active_id

    def _swap(self, root: Optional[Node], active_id: Optional[str], next_id: int) -> None:
        self._root = root
        self._active_id = active_id
        self._allocator.reset(next_id)

    def __repr__(self) -> str:
        return (
            f"GraphSession(nodes={len(self.get_all_nodes())}, active={self._active_id!r}, "
            f"next_id={self._allocator.next_id}, history={self._history.cursor + 1}/{len(self._history)})"
        )


__all__ = ["GraphSession", "Observer"]
