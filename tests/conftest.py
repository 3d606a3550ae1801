"""Shared helpers for the enumeration tests"""

import math

import pytest

from subgraph_enum.graph_access import as_graph_access
from subgraph_enum.ordering import NodeOrder


def check_validity(subgraphs, graph, max_size=None, subgraph_filter=None, key=None, less=None):
    """
    Assert the properties every enumeration result must have: size bound,
    filter conformance, sorted node lists, connectivity and uniqueness
    """
    graph = as_graph_access(graph)
    order = NodeOrder(key=key, less=less)
    bound = math.inf if max_size is None else max_size

    for subgraph in subgraphs:
        assert 0 < len(subgraph) <= bound
        if subgraph_filter is not None:
            assert subgraph_filter(subgraph)
        assert order.is_sorted(subgraph)
        assert all(not order.equal(a, b) for a, b in zip(subgraph, subgraph[1:]))

        if len(subgraph) > 1:
            for node in subgraph:
                assert any(order.contains(subgraph, n) for n in graph.neighbors(node)), \
                    f"{node!r} has no neighbor inside {subgraph!r}"

    for i, first in enumerate(subgraphs):
        for second in subgraphs[i + 1:]:
            same = len(first) == len(second) and all(order.equal(a, b) for a, b in zip(first, second))
            assert not same, f"duplicate subgraph {first!r}"


@pytest.fixture
def assert_valid():
    return check_validity
