"""
Shared fixtures for graph core tests.
"""

import pytest

from treegraph.core.graph import GraphSession


@pytest.fixture
def session() -> GraphSession:
    """A fresh session with the default configuration."""
    return GraphSession()


@pytest.fixture
def branched_session() -> GraphSession:
    """
    Session holding:

        1
        ├── 2
        │   ├── 3
        │   │   └── 4
        │   └── 5
        └── 6

    with node 6 active.
    """
    s = GraphSession()
    s.add_child_to_active()  # 2
    s.add_child_to_active()  # 3
    s.add_child_to_active()  # 4
    s.select_node("2")
    s.add_child_to_active()  # 5
    s.select_node("1")
    s.add_child_to_active()  # 6
    return s
