"""
Errors raised by the enumeration engine
"""


class EnumerationError(Exception):
    """Base class for all enumeration errors"""


class InvalidSizeBoundError(EnumerationError, ValueError):
    """Size bound is negative or not an integer"""

    def __init__(self, bound):
        super().__init__(f"Size bound must be a non-negative integer or None, got {bound!r}")
        self.bound = bound


class UnsortedAdjacencyError(EnumerationError):
    """Graph reports sorted adjacency but a neighbor list is out of order or repeats a node"""

    def __init__(self, node, neighbors):
        super().__init__(
            f"Neighbors of {node!r} are not strictly sorted although the graph "
            f"reports sorted adjacency: {list(neighbors)!r}"
        )
        self.node = node
        self.neighbors = neighbors


class UnknownNodeError(EnumerationError):
    """A neighbor list references a node the graph does not contain"""

    def __init__(self, node, neighbor):
        super().__init__(f"Node {node!r} has neighbor {neighbor!r} which is not a node of the graph")
        self.node = node
        self.neighbor = neighbor


class EnumerationCancelled(EnumerationError):
    """Stop signal observed between root or candidate iterations"""
