"""Tests for subgraph_enum/graph_access.py"""

import numpy as np
import pytest

from subgraph_enum.graph_access import (
    AdjacencyMatrixGraph, GraphAccess, MappingGraph, as_graph_access
)
from subgraph_enum.ordering import NodeOrder


class TestMappingGraph:
    def test_nodes_default_to_keys(self):
        g = MappingGraph({3: [1], 1: [3]})
        assert g.nodes() == [3, 1]
        assert g.neighbors(3) == [1]
        assert not g.adjacency_sorted()

    def test_explicit_nodes_are_isolated_when_missing(self):
        g = MappingGraph({1: [2], 2: [1]}, nodes=[1, 2, 7], sorted_adjacency=True)
        assert g.nodes() == [1, 2, 7]
        assert list(g.neighbors(7)) == []
        assert g.adjacency_sorted()


class TestAdjacencyMatrixGraph:
    def test_neighbors_sorted(self):
        matrix = np.array([[0, 1, 1, 0],
                           [1, 0, 0, 1],
                           [1, 0, 0, 1],
                           [0, 1, 1, 0]])
        g = AdjacencyMatrixGraph(matrix)
        assert g.nodes() == [0, 1, 2, 3]
        assert g.neighbors(0) == [1, 2]
        assert g.neighbors(3) == [1, 2]
        assert g.adjacency_sorted()
        assert g.degrees().tolist() == [2, 2, 2, 2]

    def test_diagonal_ignored(self):
        g = AdjacencyMatrixGraph(np.array([[1, 1], [1, 1]]))
        assert g.neighbors(0) == [1]
        assert g.neighbors(1) == [0]

    def test_from_edges(self):
        g = AdjacencyMatrixGraph.from_edges(4, [(0, 3), (2, 1)])
        assert g.neighbors(0) == [3]
        assert g.neighbors(1) == [2]
        assert g.neighbors(2) == [1]

    def test_rejects_non_square(self):
        with pytest.raises(ValueError, match="square"):
            AdjacencyMatrixGraph(np.zeros((2, 3)))

    def test_rejects_asymmetric(self):
        with pytest.raises(ValueError, match="symmetric"):
            AdjacencyMatrixGraph(np.array([[0, 1], [0, 0]]))


class TestSortedUnderOrder:
    def test_matrix_only_sorted_by_index(self):
        g = AdjacencyMatrixGraph.from_edges(3, [(0, 1), (1, 2)])
        assert g.adjacency_sorted_under(NodeOrder())
        assert not g.adjacency_sorted_under(NodeOrder(key=lambda n: -n))

    def test_mapping_flag_holds_for_any_order(self):
        g = MappingGraph({1: [2], 2: [1]}, sorted_adjacency=True)
        assert g.adjacency_sorted_under(NodeOrder(key=lambda n: -n))
        assert not MappingGraph({}).adjacency_sorted_under(NodeOrder())


class TestAsGraphAccess:
    def test_pass_through(self):
        g = MappingGraph({})
        assert as_graph_access(g) is g

    def test_mapping(self):
        g = as_graph_access({1: [2], 2: [1]})
        assert isinstance(g, MappingGraph)
        assert not g.adjacency_sorted()

    def test_ndarray(self):
        g = as_graph_access(np.eye(3, dtype=int))
        assert isinstance(g, AdjacencyMatrixGraph)
        assert g.neighbors(0) == []

    def test_rejects_other_values(self):
        with pytest.raises(TypeError, match="GraphAccess"):
            as_graph_access([[1], [0]])

    def test_custom_subclass(self):
        class Ring(GraphAccess):
            def nodes(self):
                return range(3)

            def neighbors(self, node):
                return [(node + 1) % 3, (node - 1) % 3]

        ring = Ring()
        assert as_graph_access(ring) is ring
        assert not ring.adjacency_sorted()
