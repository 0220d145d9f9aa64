from __future__ import annotations

"""Errors raised by the graph core."""

from typing import Optional


class TreeInvariantError(RuntimeError):
    """Raised when a tree violates a structural invariant.

    This always indicates a bug in tree mutation or history restoration,
    never a user error.
    """

    def __init__(self, message: str, *, node_id: Optional[str] = None):
        self.message = message
        self.node_id = node_id
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.node_id is not None:
            return f"{self.message} (node {self.node_id})"
        return self.message

    def __str__(self) -> str:
        return self._build_message()


__all__ = ["TreeInvariantError"]
