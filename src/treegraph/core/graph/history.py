"""
Bounded linear undo/redo history.

The history is a sequence of whole-graph snapshots plus a cursor naming the
entry the session currently reflects:

    commit(s3) after undo:

    [s0, s1, s2, s2']        [s0, s1, s3]
              ^cursor   -->           ^cursor
    (s2' is discarded: committing after an undo drops the redo branch)

Once the sequence holds ``capacity`` entries, committing evicts the oldest
entry and leaves the cursor where it is, so it still names the newest one.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from treegraph.core.config import HISTORY_CAPACITY
from treegraph.core.graph.models import GraphState

logger = logging.getLogger(__name__)


class HistoryManager:
    """Snapshot history with a cursor, used by the session for undo/redo."""

    def __init__(self, initial: GraphState, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"History capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._entries: List[GraphState] = [initial]
        self._cursor = 0

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> List[GraphState]:
        """Copy of the stored snapshots, oldest first."""
        return list(self._entries)

    def current(self) -> GraphState:
        """The snapshot the cursor points at."""
        return self._entries[self._cursor]

    def peek(self, offset: int) -> Optional[GraphState]:
        """The entry ``offset`` steps from the cursor, or None past either end."""
        index = self._cursor + offset
        if not 0 <= index < len(self._entries):
            return None
        return self._entries[index]

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    # =========================================================================
    # Transitions
    # =========================================================================

    def commit(self, state: GraphState) -> None:
        """Record ``state`` as the newest entry, discarding any redo branch."""
        discarded = len(self._entries) - (self._cursor + 1)
        if discarded:
            logger.debug("Discarding %d redo entries", discarded)
        del self._entries[self._cursor + 1 :]
        self._entries.append(state)

        if len(self._entries) > self.capacity:
            self._entries.pop(0)
            logger.debug("History full, evicted oldest entry")
        else:
            self._cursor += 1

    def amend(self, state: GraphState) -> None:
        """Replace the entry under the cursor without moving it."""
        self._entries[self._cursor] = state

    def undo(self) -> Optional[GraphState]:
        """Step back one entry; returns None when there is nothing to undo."""
        if not self.can_undo():
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[GraphState]:
        """Step forward one entry; returns None when there is nothing to redo."""
        if not self.can_redo():
            return None
        self._cursor += 1
        return self._entries[self._cursor]


__all__ = ["HistoryManager"]
