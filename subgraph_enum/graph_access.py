"""
Graph access contract consumed by the enumeration engine
Any graph type is usable once it exposes its nodes, the neighbors of a node
and whether those neighbor lists are already sorted
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Iterable, List, Optional

import numpy as np


class GraphAccess(ABC):
    """Base class for graphs that can be enumerated"""

    @abstractmethod
    def nodes(self) -> Iterable:
        """All nodes of the graph, in any order"""
        pass

    @abstractmethod
    def neighbors(self, node) -> Iterable:
        """Adjacency list of node"""
        pass

    def adjacency_sorted(self) -> bool:
        """
        True if every adjacency list is sorted under the order used for
        enumeration. Selects the linear-time extension procedure, so a graph
        must only report True when it can guarantee it.
        """
        return False

    def adjacency_sorted_under(self, order) -> bool:
        """
        True if the adjacency lists are sorted under order. By default the
        adjacency_sorted() flag is taken to hold for whatever order the caller
        enumerates with; graphs sorted by node id only override this.
        """
        return bool(self.adjacency_sorted())


class MappingGraph(GraphAccess):
    """
    Graph given as a mapping from node to its adjacency list

    Nodes default to the mapping keys. Nodes listed explicitly but missing
    from the mapping are isolated.
    """

    def __init__(self, adjacency: Mapping, nodes: Optional[Iterable] = None,
                 sorted_adjacency: bool = False):
        self.adjacency = adjacency
        self._nodes = list(adjacency) if nodes is None else list(nodes)
        self.sorted_adjacency = sorted_adjacency

    def nodes(self) -> List:
        return self._nodes

    def neighbors(self, node) -> Iterable:
        return self.adjacency.get(node, ())

    def adjacency_sorted(self) -> bool:
        return self.sorted_adjacency

    def __repr__(self):
        return f"MappingGraph(V={len(self._nodes)}, sorted={self.sorted_adjacency})"


class AdjacencyMatrixGraph(GraphAccess):
    """
    Undirected graph backed by a square 0/1 numpy adjacency matrix

    Nodes are the row indices. Neighbor lists come out of np.flatnonzero in
    ascending order, so they are sorted under the natural order of ints.
    """

    def __init__(self, matrix):
        matrix = np.asarray(matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Adjacency matrix must be square, got shape {matrix.shape}")
        if not np.array_equal(matrix, matrix.T):
            raise ValueError("Adjacency matrix must be symmetric")

        self.matrix = matrix != 0
        np.fill_diagonal(self.matrix, False)
        self._adjacency = [np.flatnonzero(row).tolist() for row in self.matrix]

    @classmethod
    def from_edges(cls, num_nodes: int, edges: Iterable) -> "AdjacencyMatrixGraph":
        matrix = np.zeros((num_nodes, num_nodes), dtype=bool)
        for frm, to in edges:
            matrix[frm, to] = True
            matrix[to, frm] = True
        return cls(matrix)

    def nodes(self) -> List[int]:
        return list(range(self.matrix.shape[0]))

    def neighbors(self, node: int) -> List[int]:
        return self._adjacency[node]

    def adjacency_sorted(self) -> bool:
        return True

    def adjacency_sorted_under(self, order) -> bool:
        return order.is_natural

    def degrees(self) -> np.ndarray:
        return self.matrix.sum(axis=1)

    def __repr__(self):
        return f"AdjacencyMatrixGraph(V={self.matrix.shape[0]}, E={int(self.matrix.sum()) // 2})"


def as_graph_access(graph) -> GraphAccess:
    """
    Wrap a plain graph value in the access contract

    Mappings become MappingGraph with unsorted adjacency, 2-D arrays become
    AdjacencyMatrixGraph. GraphAccess instances pass through unchanged.
    """
    if isinstance(graph, GraphAccess):
        return graph
    if isinstance(graph, Mapping):
        return MappingGraph(graph)
    if isinstance(graph, np.ndarray):
        return AdjacencyMatrixGraph(graph)
    raise TypeError(f"Cannot enumerate subgraphs of {type(graph).__name__}; "
                    f"implement GraphAccess or pass a mapping of adjacency lists")
