"""
Filter predicates for enumerated subgraphs
A filter restricts what is reported, never what is explored
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Sequence

from .graph_access import as_graph_access


class SubgraphFilter(ABC):
    """Base class for all subgraph filters"""

    # Relative evaluation cost, used by FilterChain to order checks
    cost = 1

    def __init__(self, name: str):
        self.name = name
        self.check_count = 0
        self.reject_count = 0

    @abstractmethod
    def check(self, subgraph: Sequence) -> bool:
        """True if subgraph (a sorted node list) should be reported"""
        pass

    def __call__(self, subgraph: Sequence) -> bool:
        self.check_count += 1
        result = self.check(subgraph)
        if not result:
            self.reject_count += 1
        return result

    def get_stats(self):
        return {
            'name': self.name,
            'checks': self.check_count,
            'rejects': self.reject_count,
            'reject_rate': self.reject_count / max(self.check_count, 1)
        }

    def __repr__(self):
        return f"{type(self).__name__}({self.name})"


class AcceptAll(SubgraphFilter):
    """Default filter: every subgraph is reported"""

    cost = 0

    def __init__(self):
        super().__init__("AcceptAll")

    def check(self, subgraph: Sequence) -> bool:
        return True


class SizeRangeFilter(SubgraphFilter):
    """Subgraph size within [min_size, max_size]"""

    def __init__(self, min_size: int = 1, max_size: float = float('inf')):
        super().__init__(f"Size({min_size},{max_size})")
        self.min_size = min_size
        self.max_size = max_size

    def check(self, subgraph: Sequence) -> bool:
        return self.min_size <= len(subgraph) <= self.max_size


class NodePredicateFilter(SubgraphFilter):
    """Every node of the subgraph satisfies predicate"""

    cost = 2

    def __init__(self, predicate: Callable, name: str = None):
        super().__init__(f"AllNodes({name or getattr(predicate, '__name__', 'predicate')})")
        self.predicate = predicate

    def check(self, subgraph: Sequence) -> bool:
        return all(self.predicate(node) for node in subgraph)


class MustContainFilter(SubgraphFilter):
    """Subgraph contains a given node"""

    cost = 2

    def __init__(self, node):
        super().__init__(f"MustContain({node!r})")
        self.node = node

    def check(self, subgraph: Sequence) -> bool:
        return self.node in subgraph


class ForbiddenNodesFilter(SubgraphFilter):
    """Subgraph avoids all given nodes"""

    cost = 2

    def __init__(self, nodes: Iterable):
        self.nodes = frozenset(nodes)
        super().__init__(f"Forbidden({sorted(self.nodes, key=repr)!r})")

    def check(self, subgraph: Sequence) -> bool:
        return self.nodes.isdisjoint(subgraph)


class StructuralFilter(SubgraphFilter):
    """
    Filter that inspects the edges induced by the subgraph
    The graph is only read; nodes must be hashable
    """

    cost = 10

    def __init__(self, name: str, graph):
        super().__init__(name)
        self.graph = as_graph_access(graph)

    def induced_degrees(self, subgraph: Sequence) -> List[int]:
        """Degree of every node counting only neighbors inside the subgraph"""
        members = set(subgraph)
        return [sum(1 for n in self.graph.neighbors(v) if n in members and n != v)
                for v in subgraph]


class MaxInducedDegreeFilter(StructuralFilter):
    """No node has more than max_degree neighbors inside the subgraph"""

    def __init__(self, graph, max_degree: int):
        super().__init__(f"MaxInducedDegree({max_degree})", graph)
        self.max_degree = max_degree

    def check(self, subgraph: Sequence) -> bool:
        return all(d <= self.max_degree for d in self.induced_degrees(subgraph))


class InducedPathFilter(StructuralFilter):
    """
    Subgraph induces a path
    Enumerated sets are connected, so induced degree <= 2 together with at
    most n - 1 induced edges leaves only paths
    """

    def __init__(self, graph):
        super().__init__("InducedPath", graph)

    def check(self, subgraph: Sequence) -> bool:
        if len(subgraph) < 3:
            return True
        degrees = self.induced_degrees(subgraph)
        if any(d > 2 for d in degrees):
            return False
        return sum(degrees) <= 2 * len(subgraph) - 2


class InducedCycleFilter(StructuralFilter):
    """Subgraph induces a cycle: at least 3 nodes, every induced degree exactly 2"""

    def __init__(self, graph):
        super().__init__("InducedCycle", graph)

    def check(self, subgraph: Sequence) -> bool:
        if len(subgraph) < 3:
            return False
        return all(d == 2 for d in self.induced_degrees(subgraph))


class CliqueFilter(StructuralFilter):
    """Every pair of nodes in the subgraph is adjacent"""

    def __init__(self, graph):
        super().__init__("Clique", graph)

    def check(self, subgraph: Sequence) -> bool:
        target = len(subgraph) - 1
        return all(d == target for d in self.induced_degrees(subgraph))


class LabelCountFilter(SubgraphFilter):
    """Number of nodes carrying label within [min_count, max_count]; graph must provide label_of()"""

    cost = 3

    def __init__(self, graph, label, min_count: int = 0,
                 max_count: float = float('inf'), label_name: str = None):
        super().__init__(f"LabelCount({label_name or label},{min_count},{max_count})")
        self.graph = graph
        self.label = label
        self.min_count = min_count
        self.max_count = max_count

    def check(self, subgraph: Sequence) -> bool:
        count = sum(1 for v in subgraph if self.graph.label_of(v) == self.label)
        return self.min_count <= count <= self.max_count


class FilterChain(SubgraphFilter):
    """Conjunction of filters, cheapest first, stopping at the first rejection"""

    def __init__(self, filters: List[Callable]):
        self.filters = sorted(filters, key=lambda f: getattr(f, 'cost', 100))
        names = ", ".join(getattr(f, 'name', None) or getattr(f, '__name__', '?') for f in self.filters)
        super().__init__(f"AllOf({names})")

    @property
    def cost(self):
        return sum(getattr(f, 'cost', 100) for f in self.filters)

    def check(self, subgraph: Sequence) -> bool:
        for f in self.filters:
            if not f(subgraph):
                return False
        return True

    def get_all_stats(self):
        """Statistics of every member filter that keeps them"""
        return [f.get_stats() for f in self.filters if isinstance(f, SubgraphFilter)]


class MotifFilters:
    """Predefined filters for common motif searches"""

    @staticmethod
    def paths(graph, min_size: int = 1) -> FilterChain:
        """Induced paths (single nodes and edges count as paths)"""
        return FilterChain([SizeRangeFilter(min_size), InducedPathFilter(graph)])

    @staticmethod
    def cycles(graph) -> FilterChain:
        """Induced (chordless) cycles"""
        return FilterChain([SizeRangeFilter(3), InducedCycleFilter(graph)])

    @staticmethod
    def cliques(graph, min_size: int = 1) -> FilterChain:
        return FilterChain([SizeRangeFilter(min_size), CliqueFilter(graph)])
