"""
Pure tree operations.

Every function here takes a tree (its root ``Node``) and returns either a
lookup result or a new tree. Input trees are never modified. Rebuilt trees
share every subtree that is not on the path from the root to the changed
node.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Set, Tuple

from treegraph.core.graph.errors import TreeInvariantError
from treegraph.core.graph.models import Node

logger = logging.getLogger(__name__)


# =========================================================================
# Lookup
# =========================================================================


def iter_nodes(root: Optional[Node]) -> Iterator[Node]:
    """Yield every node depth-first, parent before children, in child order."""
    if root is None:
        return
    yield root
    yield from root.iter_descendants()


def find_by_id(root: Optional[Node], node_id: str) -> Optional[Node]:
    """Return the node with ``node_id`` or None if it is not in the tree."""
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def path_to_root(root: Optional[Node], node_id: str) -> List[Node]:
    """
    Return the nodes from the root down to ``node_id``, root first.

    Returns an empty list when the node is not in the tree.
    """
    if root is None:
        return []

    # ``path`` is the current root-to-node chain; each stack entry records
    # the level it belongs at so the chain can be cut back on backtrack.
    path: List[Node] = []
    stack: List[Tuple[Node, int]] = [(root, 0)]
    while stack:
        node, level = stack.pop()
        del path[level:]
        path.append(node)
        if node.id == node_id:
            return list(path)
        for child in reversed(node.children):
            stack.append((child, level + 1))
    return []


def find_parent(root: Optional[Node], node_id: str) -> Optional[Node]:
    """Return the parent of ``node_id``; None for the root or a missing id."""
    path = path_to_root(root, node_id)
    if len(path) < 2:
        return None
    return path[-2]


# =========================================================================
# Mutation
# =========================================================================


def _replace_along_path(path: List[Node], transform: Callable[[Node], Node]) -> Node:
    """Rebuild the ancestors in ``path`` after replacing its last node."""
    replacement = transform(path[-1])
    for index in range(len(path) - 2, -1, -1):
        ancestor = path[index]
        target_id = path[index + 1].id
        children = [replacement if child.id == target_id else child for child in ancestor.children]
        replacement = ancestor.model_copy(update={"children": children})
    return replacement


def add_child(root: Node, parent_id: str, new_node: Node) -> Node:
    """
    Append ``new_node`` to the children of ``parent_id``.

    Returns ``root`` unchanged if ``parent_id`` is not in the tree.
    """
    path = path_to_root(root, parent_id)
    if not path:
        logger.debug("add_child: parent %s not found", parent_id)
        return root

    def _append(parent: Node) -> Node:
        return parent.model_copy(update={"children": [*parent.children, new_node]})

    return _replace_along_path(path, _append)


def remove_subtree(root: Node, node_id: str) -> Node:
    """
    Remove ``node_id`` and all of its descendants from the tree.

    The root cannot be removed this way; asking for it, or for a missing id,
    returns ``root`` unchanged.
    """
    if root.id == node_id:
        logger.debug("remove_subtree: refusing to remove root %s", node_id)
        return root

    path = path_to_root(root, node_id)
    if not path:
        logger.debug("remove_subtree: node %s not found", node_id)
        return root

    def _drop(parent: Node) -> Node:
        return parent.model_copy(update={"children": [c for c in parent.children if c.id != node_id]})

    return _replace_along_path(path[:-1], _drop)


# =========================================================================
# Parent links
# =========================================================================


def _copy_tree(root: Node, parent_id: Optional[str], keep_links: bool) -> Node:
    """
    Deep copy of the tree, rebuilt bottom-up without recursion.

    Nodes are listed in pre-order, then rebuilt in reverse so every child
    copy exists before its parent's.
    """
    order: List[Tuple[Node, Optional[str]]] = []
    stack: List[Tuple[Node, Optional[str]]] = [(root, parent_id)]
    while stack:
        node, owner_id = stack.pop()
        order.append((node, owner_id))
        for child in reversed(node.children):
            stack.append((child, node.id))

    # Reverse pre-order leaves a node's first child on top of the stack.
    rebuilt: List[Node] = []
    for node, owner_id in reversed(order):
        children = [rebuilt.pop() for _ in node.children]
        rebuilt.append(
            node.model_copy(
                update={
                    "parent_id": owner_id if keep_links else None,
                    "children": children,
                }
            )
        )
    return rebuilt.pop()


def detach_parents(node: Node) -> Node:
    """Deep copy of the tree with every parent link cleared."""
    return _copy_tree(node, None, keep_links=False)


def attach_parents(node: Node, parent_id: Optional[str] = None) -> Node:
    """Deep copy of the tree with parent links rebuilt top-down."""
    return _copy_tree(node, parent_id, keep_links=True)


# =========================================================================
# Verification
# =========================================================================


def verify_tree(root: Optional[Node]) -> None:
    """
    Check the structural invariants of a live tree.

    Raises:
        TreeInvariantError: On duplicate ids, a parent link that does not
            match the owning node, a wrong depth, or a label that differs
            from its id.
    """
    if root is None:
        return
    if root.parent_id is not None:
        raise TreeInvariantError("Root has a parent link", node_id=root.id)
    if root.depth != 0:
        raise TreeInvariantError(f"Root depth is {root.depth}, expected 0", node_id=root.id)

    seen: Set[str] = set()
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        if node.id in seen:
            raise TreeInvariantError("Node reachable more than once", node_id=node.id)
        seen.add(node.id)
        if node.label != node.id:
            raise TreeInvariantError(f"Label {node.label!r} differs from id", node_id=node.id)
        for child in node.children:
            if child.parent_id != node.id:
                raise TreeInvariantError(
                    f"Parent link points to {child.parent_id!r}, owned by {node.id!r}",
                    node_id=child.id,
                )
            if child.depth != node.depth + 1:
                raise TreeInvariantError(
                    f"Depth {child.depth} does not follow parent depth {node.depth}",
                    node_id=child.id,
                )
            stack.append(child)


__all__ = [
    "iter_nodes",
    "find_by_id",
    "path_to_root",
    "find_parent",
    "add_child",
    "remove_subtree",
    "detach_parents",
    "attach_parents",
    "verify_tree",
]
