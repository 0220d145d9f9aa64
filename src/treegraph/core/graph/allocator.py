"""Monotonic identifier allocation for graph nodes."""

from __future__ import annotations


class IdentifierAllocator:
    """
    Produces unique, never-reused node labels within a session.

    Labels are the stringified counter value. The counter only moves
    backwards through ``reset``, which the session calls when the whole
    graph is discarded or a snapshot is restored.
    """

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError(f"Allocator start must be >= 1, got {start}")
        self._next_id = start

    @property
    def next_id(self) -> int:
        return self._next_id

    def peek(self) -> str:
        """Return the label the next call to ``next_label`` will produce."""
        return str(self._next_id)

    def next_label(self) -> str:
        label = str(self._next_id)
        self._next_id += 1
        return label

    def reset(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"Allocator start must be >= 1, got {start}")
        self._next_id = start

    def __repr__(self) -> str:
        return f"IdentifierAllocator(next_id={self._next_id})"


__all__ = ["IdentifierAllocator"]
