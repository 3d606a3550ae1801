"""
Connected Induced Subgraph Enumeration
Reverse search over node sets: every connected set is grown from its minimum
node, and nodes that precede the root or were already tried as siblings are
forbidden for the rest of the branch, so each set has exactly one generating path
"""

import math
import numbers
import time
from typing import Callable, List, Optional

from .exceptions import (
    EnumerationCancelled, InvalidSizeBoundError,
    UnknownNodeError, UnsortedAdjacencyError
)
from .filters import AcceptAll
from .graph_access import GraphAccess, as_graph_access
from .ordering import NodeOrder


def resolve_size_bound(max_size) -> float:
    """None (or +inf) means unbounded; anything else must be a non-negative integer"""
    if max_size is None:
        return math.inf
    if isinstance(max_size, float) and math.isinf(max_size) and max_size > 0:
        return math.inf
    if isinstance(max_size, bool) or not isinstance(max_size, numbers.Integral) or max_size < 0:
        raise InvalidSizeBoundError(max_size)
    return int(max_size)


class ConnectedSubgraphEnumerator:
    """
    Enumerates every connected, vertex-induced subgraph of a graph exactly once

    The extension procedure is chosen once per call from whether the graph's
    adjacency lists are sorted under the node order in use: merge-based set
    operations when they are, binary-search insertion when they are not. Both
    visit the search tree in the same order and produce identical result lists.
    """

    def __init__(self,
                 graph,
                 max_size: Optional[int] = None,
                 subgraph_filter: Optional[Callable] = None,
                 key: Optional[Callable] = None,
                 less: Optional[Callable] = None,
                 check_sorted: bool = False,
                 should_stop: Optional[Callable[[], bool]] = None,
                 verbose: bool = False):

        self.graph: GraphAccess = as_graph_access(graph)
        self.max_size = resolve_size_bound(max_size)
        self.subgraph_filter = subgraph_filter if subgraph_filter is not None else AcceptAll()
        self.order = NodeOrder(key=key, less=less)
        self.check_sorted = check_sorted
        self.should_stop = should_stop
        self.verbose = verbose

        self.sorted_path = bool(self.graph.adjacency_sorted_under(self.order))

        # Statistics
        self.stats = {
            'roots_processed': 0,
            'subgraphs_generated': 0,
            'subgraphs_emitted': 0,
            'filter_rejected': 0,
            'extensions': 0,
            'max_depth': 0,
            'runtime': 0
        }

    @property
    def filter_name(self) -> str:
        f = self.subgraph_filter
        return getattr(f, 'name', None) or getattr(f, '__name__', None) or type(f).__name__

    def _print_init(self, num_nodes: int):
        """Print initialization"""
        bound = "unbounded" if self.max_size == math.inf else self.max_size
        print(f"\n{'='*70}")
        print(f"{'CONNECTED SUBGRAPH ENUMERATION':^70}")
        print(f"{'='*70}")
        print(f"  Graph: {self.graph!r}")
        print(f"  Nodes: {num_nodes}")
        print(f"  Max subgraph size: {bound}")
        print(f"  Extension path: {'sorted (linear merge)' if self.sorted_path else 'unsorted (binary search)'}")
        print(f"  Filter: {self.filter_name}")
        print(f"  Order: {self.order!r}")
        print(f"{'='*70}\n")

    def run(self) -> List[List]:
        """
        Enumerate all connected induced subgraphs passing the filter
        Returns a list of node lists, each sorted under the node order
        """
        start_time = time.time()
        results: List[List] = []

        if self.max_size == 0:
            self.stats['runtime'] = time.time() - start_time
            return results

        nodes = self.order.sort(self.graph.nodes())

        if self.verbose:
            self._print_init(len(nodes))

        if self.check_sorted:
            self._validate_adjacency(nodes)

        extend = self._extend_sorted if self.sorted_path else self._extend_unsorted

        for idx, root in enumerate(nodes):
            self._check_stop()

            # Every node before the root stays forbidden, so root is the
            # minimum of everything discovered in this branch
            forbidden = nodes[:idx]
            current = [root]
            if self.sorted_path:
                candidates = self._reachable_sorted(root, current, forbidden)
            else:
                candidates = []
                self._add_reachable_unsorted(root, current, forbidden, candidates)

            self.stats['roots_processed'] += 1
            extend(current, candidates, forbidden, results)

        self.stats['runtime'] = time.time() - start_time

        if self.verbose:
            self._print_results(results)

        return results

    def _emit(self, current: List, results: List[List]):
        """Record current if it passes the filter; exploration continues either way"""
        self.stats['subgraphs_generated'] += 1
        self.stats['max_depth'] = max(self.stats['max_depth'], len(current))

        snapshot = list(current)
        if self.subgraph_filter(snapshot):
            results.append(snapshot)
            self.stats['subgraphs_emitted'] += 1
        else:
            self.stats['filter_rejected'] += 1

    def _extend_sorted(self, current: List, candidates: List, forbidden: List, results: List[List]):
        """
        Extension step for graphs whose adjacency lists are sorted
        Every set operation is a linear merge over sorted lists
        """
        self._emit(current, results)

        if len(current) >= self.max_size:
            return

        order = self.order
        for idx, candidate in enumerate(candidates):
            self._check_stop()
            order.insert(current, candidate)

            # Siblings tried before this candidate are off limits below it
            next_forbidden = order.union(forbidden, candidates[:idx])
            reachable = self._reachable_sorted(candidate, current, next_forbidden)
            next_candidates = order.union(candidates[idx + 1:], reachable)

            self.stats['extensions'] += 1
            self._extend_sorted(current, next_candidates, next_forbidden, results)

            order.remove(current, candidate)

    def _extend_unsorted(self, current: List, candidates: List, forbidden: List, results: List[List]):
        """
        Extension step for graphs with arbitrary neighbor order
        Each neighbor costs a binary search against forbidden, current and candidates
        """
        self._emit(current, results)

        if len(current) >= self.max_size:
            return

        order = self.order
        for idx, candidate in enumerate(candidates):
            self._check_stop()
            order.insert(current, candidate)

            next_forbidden = order.union(forbidden, candidates[:idx])
            next_candidates = candidates[idx + 1:]
            self._add_reachable_unsorted(candidate, current, next_forbidden, next_candidates)

            self.stats['extensions'] += 1
            self._extend_unsorted(current, next_candidates, next_forbidden, results)

            order.remove(current, candidate)

    def _reachable_sorted(self, node, current: List, forbidden: List) -> List:
        """Neighbors of node in neither current nor forbidden, by two linear differences"""
        neighbors = self._adjacency(node)
        return self.order.difference(self.order.difference(neighbors, current), forbidden)

    def _add_reachable_unsorted(self, node, current: List, forbidden: List, candidates: List):
        """Insert neighbors of node that are neither current nor forbidden into sorted candidates"""
        order = self.order
        for neighbor in self.graph.neighbors(node):
            if order.contains(forbidden, neighbor) or order.contains(current, neighbor):
                continue
            order.insert_unique(candidates, neighbor)

    def _adjacency(self, node) -> List:
        neighbors = self.graph.neighbors(node)
        return neighbors if isinstance(neighbors, (list, tuple)) else list(neighbors)

    def _check_stop(self):
        if self.should_stop is not None and self.should_stop():
            raise EnumerationCancelled(
                f"Enumeration stopped after {self.stats['roots_processed']} roots "
                f"and {self.stats['subgraphs_generated']} generated subgraphs"
            )

    def _validate_adjacency(self, nodes: List):
        """
        Opt-in check of the graph contract: every neighbor must be a node of
        the graph, and reported sorted adjacency must really be sorted
        without repeated neighbors
        """
        order = self.order
        for node in nodes:
            neighbors = self._adjacency(node)
            for neighbor in neighbors:
                if not order.contains(nodes, neighbor):
                    raise UnknownNodeError(node, neighbor)
            if self.sorted_path and not order.is_sorted(neighbors, strict=True):
                raise UnsortedAdjacencyError(node, neighbors)

    def _print_results(self, results: List[List]):
        """Print enumeration summary"""
        print(f"\n{'='*70}")
        print(f"{'ENUMERATION COMPLETE':^70}")
        print(f"{'='*70}")

        print(f"\nResults:")
        print(f"  Subgraphs emitted: {len(results):,}")
        print(f"  Runtime: {self.stats['runtime']:.3f}s")

        print(f"\nStatistics:")
        print(f"  Roots processed: {self.stats['roots_processed']:,}")
        print(f"  Subgraphs generated: {self.stats['subgraphs_generated']:,}")
        print(f"  Rejected by filter: {self.stats['filter_rejected']:,}")
        print(f"  Extensions: {self.stats['extensions']:,}")
        print(f"  Largest subgraph visited: {self.stats['max_depth']}")

        if self.stats['subgraphs_generated'] > 0:
            reject_rate = self.stats['filter_rejected'] / self.stats['subgraphs_generated'] * 100
            print(f"  Filter rejection rate: {reject_rate:.1f}%")

        print(f"\n{'='*70}\n")


def enumerate_connected_subgraphs(graph,
                                  max_size: Optional[int] = None,
                                  subgraph_filter: Optional[Callable] = None,
                                  key: Optional[Callable] = None,
                                  less: Optional[Callable] = None,
                                  check_sorted: bool = False,
                                  should_stop: Optional[Callable[[], bool]] = None) -> List[List]:
    """
    Node sets of all connected induced subgraphs of graph

    Args:
        graph: GraphAccess instance, mapping of adjacency lists or 2-D numpy array
        max_size: Largest subgraph size to report (None = unbounded, 0 = nothing)
        subgraph_filter: Predicate over a sorted node list; default accepts all
        key: Key function defining the node order (default: natural order)
        less: Strict less-than comparator, alternative to key
        check_sorted: Validate the adjacency lists against the graph contract first
        should_stop: Called between iterations; returning True cancels the call

    Returns:
        List of node lists, each sorted under the node order. The order of the
        list itself is a by-product of the traversal.
    """
    enumerator = ConnectedSubgraphEnumerator(
        graph,
        max_size=max_size,
        subgraph_filter=subgraph_filter,
        key=key,
        less=less,
        check_sorted=check_sorted,
        should_stop=should_stop
    )
    return enumerator.run()
