"""
Node ordering and set operations over sorted node sequences
Every sequence handled by the engine is kept sorted under one NodeOrder
"""

from bisect import bisect_left
from functools import cmp_to_key
from typing import Callable, Iterable, List, Optional, Sequence


def _natural(node):
    return node


class NodeOrder:
    """
    Strict total order over graph nodes

    Built either from a key function (natural order when omitted) or from a
    strict less-than comparator. Only ``<`` is ever applied to the keys, so two
    nodes are equal exactly when neither precedes the other.
    """

    def __init__(self, key: Optional[Callable] = None, less: Optional[Callable] = None):
        if key is not None and less is not None:
            raise ValueError("Pass either a key function or a less-than comparator, not both")

        if less is not None:
            def compare(a, b):
                if less(a, b):
                    return -1
                if less(b, a):
                    return 1
                return 0
            key = cmp_to_key(compare)

        self.key = key or _natural
        self.is_natural = key is None and less is None

    def __repr__(self):
        return "NodeOrder(natural)" if self.is_natural else f"NodeOrder({self.key!r})"

    def less(self, a, b) -> bool:
        return self.key(a) < self.key(b)

    def equal(self, a, b) -> bool:
        ka, kb = self.key(a), self.key(b)
        return not (ka < kb or kb < ka)

    def sort(self, nodes: Iterable) -> List:
        """Return nodes as a new sorted list"""
        return sorted(nodes, key=self.key)

    def is_sorted(self, nodes: Sequence, strict: bool = False) -> bool:
        """
        True if no element precedes its predecessor
        With strict=True equal adjacent elements fail as well
        """
        key = self.key
        if strict:
            return all(key(nodes[i]) < key(nodes[i + 1]) for i in range(len(nodes) - 1))
        return all(not key(nodes[i + 1]) < key(nodes[i]) for i in range(len(nodes) - 1))

    # ------------------------------------------------------------------
    # Binary search helpers (logarithmic)
    # ------------------------------------------------------------------

    def position(self, nodes: Sequence, node) -> int:
        """Leftmost index at which node could be inserted keeping nodes sorted"""
        return bisect_left(nodes, self.key(node), key=self.key)

    def contains(self, nodes: Sequence, node) -> bool:
        idx = self.position(nodes, node)
        # bisect_left already rules out nodes[idx] < node
        return idx < len(nodes) and not self.key(node) < self.key(nodes[idx])

    def insert(self, nodes: List, node):
        """Insert node at its sorted position"""
        nodes.insert(self.position(nodes, node), node)

    def insert_unique(self, nodes: List, node) -> bool:
        """Insert node unless an equal node is already present"""
        idx = self.position(nodes, node)
        if idx < len(nodes) and not self.key(node) < self.key(nodes[idx]):
            return False
        nodes.insert(idx, node)
        return True

    def remove(self, nodes: List, node):
        """Remove a node known to be present"""
        del nodes[self.position(nodes, node)]

    # ------------------------------------------------------------------
    # Merge-based set operations (linear)
    # ------------------------------------------------------------------

    def union(self, first: Sequence, second: Sequence) -> List:
        """
        Sorted union of two sorted sequences
        Elements present in both appear once, taken from first
        """
        key = self.key
        result = []
        i = j = 0
        while i < len(first) and j < len(second):
            ka, kb = key(first[i]), key(second[j])
            if ka < kb:
                result.append(first[i])
                i += 1
            elif kb < ka:
                result.append(second[j])
                j += 1
            else:
                result.append(first[i])
                i += 1
                j += 1
        result.extend(first[i:])
        result.extend(second[j:])
        return result

    def difference(self, first: Sequence, second: Sequence) -> List:
        """Elements of sorted first that do not occur in sorted second"""
        key = self.key
        result = []
        i = j = 0
        while i < len(first) and j < len(second):
            ka, kb = key(first[i]), key(second[j])
            if ka < kb:
                result.append(first[i])
                i += 1
            elif kb < ka:
                j += 1
            else:
                i += 1
                j += 1
        result.extend(first[i:])
        return result
