"""
Behavioral properties of a graph session.

Each test exercises one guarantee across many operations rather than a
single call: id uniqueness, depth bookkeeping, subtree deletion
completeness, the depth limit, undo/redo round trips, the history bound and
redo-branch discard, plus the end-to-end walkthrough.
"""

import random

import pytest

from treegraph.core.config import DEPTH_CEILING, SessionConfig
from treegraph.core.graph import GraphSession
from treegraph.core.graph.mutator import find_by_id, verify_tree

from .helpers import build_chain, node_ids, tree_shape


def _random_session(seed: int, steps: int = 80) -> GraphSession:
    """Session driven by a reproducible mix of adds, selects and deletes."""
    rng = random.Random(seed)
    session = GraphSession()
    for _ in range(steps):
        roll = rng.random()
        if roll < 0.55:
            session.add_child_to_active()
        elif roll < 0.85:
            session.select_node(rng.choice(node_ids(session)))
        else:
            non_root = [n for n in node_ids(session) if n != "1"]
            if non_root:
                session.select_node(rng.choice(non_root))
                session.delete_active_node()
    return session


class TestUniqueness:
    def test_chain_ids_strictly_increasing(self, session):
        build_chain(session, 30)

        ids = [int(n) for n in node_ids(session)]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    @pytest.mark.parametrize("seed", range(5))
    def test_ids_unique_under_mixed_operations(self, seed):
        session = _random_session(seed)

        ids = node_ids(session)
        assert len(set(ids)) == len(ids)
        assert all(int(n) < session.next_node_id for n in ids)

    def test_creation_order_is_increasing(self, session):
        created = []
        for _ in range(10):
            session.select_node("1")
            session.add_child_to_active()
            created.append(int(session.active_node_id))

        assert created == sorted(created)
        assert created == list(range(2, 12))


class TestDepthCorrectness:
    @pytest.mark.parametrize("seed", range(5))
    def test_depths_follow_parents(self, seed):
        session = _random_session(seed)

        for node in session.get_all_nodes():
            if node.parent_id is None:
                assert node.depth == 0
                assert node is session.root
            else:
                parent = find_by_id(session.root, node.parent_id)
                assert parent is not None
                assert node.depth == parent.depth + 1
        verify_tree(session.root)


class TestSubtreeDeletion:
    def test_exact_subtree_removed(self, branched_session):
        target = branched_session.get_node("2")
        removed = {target.id, *(d.id for d in target.descendants())}
        before = set(node_ids(branched_session))

        branched_session.select_node("2")
        branched_session.delete_active_node()

        after = set(node_ids(branched_session))
        assert before - after == removed
        assert len(before) - len(after) == target.subtree_size()
        assert all(n.parent_id not in removed for n in branched_session.get_all_nodes())

    @pytest.mark.parametrize("seed", range(5))
    def test_random_subtree_removed(self, seed):
        session = _random_session(seed)
        candidates = [n for n in session.get_all_nodes() if not n.is_root]
        if not candidates:
            pytest.skip("random walk left only the root")
        target = random.Random(seed).choice(candidates)
        expected = set(node_ids(session)) - {target.id, *(d.id for d in target.descendants())}

        session.select_node(target.id)
        session.delete_active_node()

        assert set(node_ids(session)) == expected
        assert session.active_node_id == target.parent_id


class TestRootDeletion:
    @pytest.mark.parametrize("size", [0, 1, 10, 60])
    def test_root_deletion_resets(self, session, size):
        build_chain(session, size)
        session.select_node("1")

        session.delete_active_node()

        assert node_ids(session) == ["1"]
        assert session.root.label == "1"
        assert session.next_node_id == 2


class TestDepthLimit:
    def test_max_reachable_depth_is_100(self, session):
        build_chain(session, 100)
        deepest = session.active_node
        before = tree_shape(session.root)

        assert deepest.depth == 100
        assert session.add_child_to_active() is False
        assert tree_shape(session.root) == before
        assert max(n.depth for n in session.get_all_nodes()) == 100

    def test_node_below_limit_still_accepts_children(self, session):
        build_chain(session, 100)
        session.select_node("100")  # depth 99

        assert session.add_child_to_active() is True
        assert session.active_node.depth == 100

    def test_chain_at_depth_ceiling_survives_undo(self):
        session = GraphSession(SessionConfig(max_depth=DEPTH_CEILING))
        build_chain(session, DEPTH_CEILING)
        before = tree_shape(session.root)

        assert session.active_node.depth == DEPTH_CEILING
        assert session.add_child_to_active() is False

        assert session.undo() is True
        assert session.active_node.depth == DEPTH_CEILING - 1
        verify_tree(session.root)

        assert session.redo() is True
        assert tree_shape(session.root) == before
        assert session.next_node_id == DEPTH_CEILING + 2


class TestUndoRoundTrip:
    def _ops(self):
        return {
            "add": lambda s: s.add_child_to_active(),
            "delete_leaf": lambda s: s.delete_active_node(),
            "delete_subtree": lambda s: (s.select_node("2"), s.delete_active_node()),
            "delete_root": lambda s: (s.select_node("1"), s.delete_active_node()),
            "delete_by_id": lambda s: s.delete_node("3"),
            "reset": lambda s: s.reset_graph(),
        }

    @pytest.mark.parametrize("op", ["add", "delete_leaf", "delete_subtree", "delete_root", "delete_by_id", "reset"])
    def test_op_then_undo_restores_tree(self, branched_session, op):
        before_shape = tree_shape(branched_session.root)
        before_active = branched_session.active_node_id
        before_next = branched_session.next_node_id

        self._ops()[op](branched_session)
        branched_session.undo()

        assert tree_shape(branched_session.root) == before_shape
        assert branched_session.next_node_id == before_next
        # ops that select first restore that selection, since it was active right before the change
        expected_active = {"delete_subtree": "2", "delete_root": "1"}.get(op, before_active)
        assert branched_session.active_node_id == expected_active

    @pytest.mark.parametrize("op", ["add", "delete_leaf", "delete_subtree", "delete_root", "delete_by_id", "reset"])
    def test_undo_then_redo_returns_to_post_op(self, branched_session, op):
        self._ops()[op](branched_session)
        after_shape = tree_shape(branched_session.root)
        after_active = branched_session.active_node_id

        branched_session.undo()
        branched_session.redo()

        assert tree_shape(branched_session.root) == after_shape
        assert branched_session.active_node_id == after_active


class TestHistoryBound:
    def test_undo_reaches_back_at_most_49_steps(self, session):
        for _ in range(70):
            session.select_node("1")
            session.add_child_to_active()

        undone = 0
        for _ in range(51):
            if not session.can_undo():
                break
            session.undo()
            undone += 1

        assert undone == 49
        assert not session.can_undo()
        # The oldest retained entry is the state after the 21st add.
        assert len(session.root.children) == 21


class TestBranchDiscard:
    def test_new_operation_after_undo_drops_redo(self, session):
        build_chain(session, 3)
        session.undo()
        session.undo()
        assert session.can_redo()

        session.add_child_to_active()

        assert not session.can_redo()

    def test_select_after_undo_keeps_redo(self, session):
        build_chain(session, 2)
        session.undo()

        session.select_node("1")

        assert session.can_redo()


class TestWalkthrough:
    def test_scenario(self, session):
        assert session.active_node_id == "1"

        session.add_child_to_active()
        assert session.active_node_id == "2"
        assert session.active_node.parent_id == "1"
        assert session.next_node_id == 3

        session.add_child_to_active()
        assert session.active_node_id == "3"
        assert session.active_node.parent_id == "2"

        session.delete_active_node()
        assert node_ids(session) == ["1", "2"]
        assert session.active_node_id == "2"

        session.undo()
        assert node_ids(session) == ["1", "2", "3"]
        assert session.active_node_id == "3"

        session.select_node("1")
        session.delete_active_node()
        assert node_ids(session) == ["1"]
        assert session.next_node_id == 2
