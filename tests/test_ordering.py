"""Tests for subgraph_enum/ordering.py"""

import pytest

from subgraph_enum.ordering import NodeOrder


class TestConstruction:
    def test_natural_order(self):
        order = NodeOrder()
        assert order.is_natural
        assert order.less(1, 2)
        assert not order.less(2, 2)
        assert order.equal(3, 3)

    def test_key_and_less_are_exclusive(self):
        with pytest.raises(ValueError, match="either"):
            NodeOrder(key=len, less=lambda a, b: a < b)

    def test_less_comparator(self):
        order = NodeOrder(less=lambda a, b: a > b)
        assert not order.is_natural
        assert order.less(5, 1)
        assert order.equal(4, 4)
        assert order.sort([1, 3, 2]) == [3, 2, 1]

    def test_key_defines_equality(self):
        order = NodeOrder(key=lambda s: s.lower())
        assert order.equal("A", "a")
        assert order.sort(["b", "C", "a"]) == ["a", "b", "C"]


class TestBinarySearch:
    def test_position_and_contains(self):
        order = NodeOrder()
        nodes = [1, 3, 5, 7]
        assert order.position(nodes, 0) == 0
        assert order.position(nodes, 5) == 2
        assert order.position(nodes, 8) == 4
        assert order.contains(nodes, 3)
        assert not order.contains(nodes, 4)
        assert not order.contains(nodes, 9)
        assert not order.contains([], 1)

    def test_contains_with_comparator(self):
        order = NodeOrder(less=lambda a, b: a[0] < b[0])
        nodes = [(1, "x"), (4, "y")]
        assert order.contains(nodes, (4, "other"))
        assert not order.contains(nodes, (2, "x"))

    def test_insert_and_remove(self):
        order = NodeOrder()
        nodes = [2, 6]
        order.insert(nodes, 4)
        order.insert(nodes, 1)
        order.insert(nodes, 9)
        assert nodes == [1, 2, 4, 6, 9]
        order.remove(nodes, 4)
        assert nodes == [1, 2, 6, 9]

    def test_insert_unique(self):
        order = NodeOrder()
        nodes = [1, 5]
        assert order.insert_unique(nodes, 3)
        assert not order.insert_unique(nodes, 5)
        assert nodes == [1, 3, 5]

    def test_reverse_key_insert(self):
        order = NodeOrder(key=lambda n: -n)
        nodes = [9, 5, 1]
        order.insert(nodes, 7)
        assert nodes == [9, 7, 5, 1]
        assert order.contains(nodes, 5)


class TestMergeOperations:
    def test_union(self):
        order = NodeOrder()
        assert order.union([1, 4, 6], [2, 4, 8]) == [1, 2, 4, 6, 8]
        assert order.union([], [2, 3]) == [2, 3]
        assert order.union([1], []) == [1]

    def test_union_keeps_first_on_ties(self):
        order = NodeOrder(key=lambda s: s.lower())
        assert order.union(["a", "C"], ["A", "b"]) == ["a", "b", "C"]

    def test_difference(self):
        order = NodeOrder()
        assert order.difference([1, 2, 3, 4, 5], [2, 4, 6]) == [1, 3, 5]
        assert order.difference([1, 2], []) == [1, 2]
        assert order.difference([], [1]) == []
        assert order.difference([3, 4], [1, 2, 3, 4]) == []

    def test_inputs_not_modified(self):
        order = NodeOrder()
        first, second = [1, 3], [2, 3]
        order.union(first, second)
        order.difference(first, second)
        assert first == [1, 3]
        assert second == [2, 3]

    def test_is_sorted(self):
        order = NodeOrder()
        assert order.is_sorted([])
        assert order.is_sorted([1])
        assert order.is_sorted([1, 2, 2, 5])
        assert not order.is_sorted([2, 1])
        assert NodeOrder(key=lambda n: -n).is_sorted([3, 2, 1])

    def test_is_sorted_strict(self):
        order = NodeOrder()
        assert order.is_sorted([1, 2, 5], strict=True)
        assert order.is_sorted([], strict=True)
        assert not order.is_sorted([1, 2, 2, 5], strict=True)
        assert not order.is_sorted([2, 1], strict=True)
        assert not NodeOrder(key=lambda s: s.lower()).is_sorted(["a", "A"], strict=True)
