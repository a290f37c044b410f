"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def builder():
    """Fresh GraphBuilder instance."""
    from hyptrack.graph.builder import GraphBuilder

    return GraphBuilder()


@pytest.fixture
def chain_graph():
    """A -> B -> C."""
    from tests.core.graph_test_helpers import build_test_graph

    return build_test_graph(["A", "B", "C"], [("A", "B"), ("B", "C")])


@pytest.fixture
def diamond_graph():
    """A -> B, A -> C, B -> D, C -> D."""
    from tests.core.graph_test_helpers import build_test_graph

    return build_test_graph(
        ["A", "B", "C", "D"],
        [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")],
    )


@pytest.fixture
def two_cycle_graph():
    """A -> B and B -> A, no root."""
    from tests.core.graph_test_helpers import build_test_graph

    return build_test_graph(["A", "B"], [("A", "B"), ("B", "A")])


@pytest.fixture
def cycle_with_sibling_graph():
    """R -> X -> Y -> X (cycle) and R -> Z -> W (clean sibling branch)."""
    from tests.core.graph_test_helpers import build_test_graph

    return build_test_graph(
        ["R", "X", "Y", "Z", "W"],
        [("R", "X"), ("X", "Y"), ("Y", "X"), ("R", "Z"), ("Z", "W")],
    )
