"""
Connected Induced Subgraph Enumeration
Every connected node set of a graph, exactly once, optionally bounded and filtered
"""

__version__ = "1.0.0"

from .graph_access import GraphAccess, MappingGraph, AdjacencyMatrixGraph, as_graph_access
from .ordering import NodeOrder
from .exceptions import (
    EnumerationError, InvalidSizeBoundError, UnsortedAdjacencyError,
    UnknownNodeError, EnumerationCancelled
)
from .filters import (
    SubgraphFilter, AcceptAll, SizeRangeFilter, NodePredicateFilter,
    MustContainFilter, ForbiddenNodesFilter, StructuralFilter,
    MaxInducedDegreeFilter, InducedPathFilter, InducedCycleFilter,
    CliqueFilter, LabelCountFilter, FilterChain, MotifFilters
)
from .enumeration import ConnectedSubgraphEnumerator, enumerate_connected_subgraphs
from .graph_loader import Graph, Vertex, Edge, GraphFactory, DatasetLoader

__all__ = [
    'GraphAccess', 'MappingGraph', 'AdjacencyMatrixGraph', 'as_graph_access',
    'NodeOrder',
    'EnumerationError', 'InvalidSizeBoundError', 'UnsortedAdjacencyError',
    'UnknownNodeError', 'EnumerationCancelled',
    'SubgraphFilter', 'AcceptAll', 'SizeRangeFilter', 'NodePredicateFilter',
    'MustContainFilter', 'ForbiddenNodesFilter', 'StructuralFilter',
    'MaxInducedDegreeFilter', 'InducedPathFilter', 'InducedCycleFilter',
    'CliqueFilter', 'LabelCountFilter', 'FilterChain', 'MotifFilters',
    'ConnectedSubgraphEnumerator', 'enumerate_connected_subgraphs',
    'Graph', 'Vertex', 'Edge', 'GraphFactory', 'DatasetLoader'
]
