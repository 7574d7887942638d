"""
Shared pytest fixtures for lwwgraph tests.
"""

import logging

import pytest

from lwwgraph import ManualClock, ReplicatedGraph


@pytest.fixture(autouse=True)
def reset_lwwgraph_logging():
    """Reset logging state before and after each test.

    - Removes all handlers except NullHandler
    - Resets level to NOTSET (inherit from parent)
    """
    logger = logging.getLogger("lwwgraph")

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()


@pytest.fixture
def clock() -> ManualClock:
    """A manual clock starting at 1000ms."""
    return ManualClock(start_ms=1_000)


@pytest.fixture
def sample_graph() -> ReplicatedGraph[int]:
    """Four vertices, edges 0->1, 0->2, 1->2, 2->0, 2->3, 3->3, on the wall clock."""
    graph = ReplicatedGraph()
    for v in range(4):
        graph.add_vertex(v)
    for from_vertex, to_vertex in [(0, 1), (0, 2), (1, 2), (2, 0), (2, 3), (3, 3)]:
        graph.add_edge(from_vertex, to_vertex)
    return graph
