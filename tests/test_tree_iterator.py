import sys
import os
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from avl_tree import AVLTree
from binary_search_tree import BinarySearchTree
from tree_errors import ConcurrentModificationError, IllegalStateError


def build(values, tree_class=AVLTree):
    tree = tree_class()
    for v in values:
        tree.insert(v)
    return tree


class TestTreeIteratorTraversal(unittest.TestCase):
    def test_empty_tree_has_no_next(self):
        it = AVLTree().iterator()
        self.assertFalse(it.has_next())
        with self.assertRaises(StopIteration):
            next(it)

    def test_yields_ascending_values(self):
        tree = build([6, 3, 1, 2, 5, 4, 9, 7, 8])
        self.assertEqual(list(tree.iterator()), [1, 2, 3, 4, 5, 6, 7, 8, 9])

    def test_has_next_tracks_remaining_values(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        seen = []
        while it.has_next():
            seen.append(next(it))
        self.assertEqual(seen, [1, 2, 3])
        with self.assertRaises(StopIteration):
            next(it)

    def test_explicit_next_with_removal(self):
        tree = build([6, 3, 1, 2, 5, 4, 9, 7, 8])
        it = tree.iterator()
        seen = []
        while it.has_next():
            value = it.next()
            seen.append(value)
            if value in (3, 6):
                it.remove_last()
        self.assertEqual(seen, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        self.assertEqual(list(tree), [1, 2, 4, 5, 7, 8, 9])
        with self.assertRaises(StopIteration):
            it.next()

    def test_explicit_next_on_stale_iterator_raises(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        tree.insert(0)
        with self.assertRaises(ConcurrentModificationError):
            it.next()

    def test_iterator_is_not_restartable(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        self.assertEqual(list(it), [1, 2, 3])
        self.assertEqual(list(it), [])
        self.assertEqual(list(tree.iterator()), [1, 2, 3])

    def test_iter_returns_fresh_iterator(self):
        tree = build([2, 1, 3])
        self.assertIsNot(iter(tree), iter(tree))

    def test_plain_tree_yields_ascending_values(self):
        tree = build([50, 30, 70, 20, 40, 60, 80], BinarySearchTree)
        self.assertEqual(list(tree), [20, 30, 40, 50, 60, 70, 80])


class TestTreeIteratorFailFast(unittest.TestCase):
    def test_insert_invalidates_iterator(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        tree.insert(4)
        with self.assertRaises(ConcurrentModificationError):
            next(it)

    def test_duplicate_insert_invalidates_iterator(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        tree.insert(2)
        self.assertEqual(tree.size(), 3)
        with self.assertRaises(ConcurrentModificationError):
            next(it)

    def test_delete_invalidates_iterator(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        next(it)
        tree.delete(3)
        with self.assertRaises(ConcurrentModificationError):
            next(it)

    def test_delete_of_absent_value_keeps_iterator_valid(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        self.assertIsNone(tree.delete(42))
        self.assertEqual(list(it), [1, 2, 3])

    def test_clear_invalidates_iterator(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        tree.clear()
        with self.assertRaises(ConcurrentModificationError):
            next(it)

    def test_stale_check_precedes_exhaustion(self):
        tree = build([1])
        it = tree.iterator()
        next(it)
        tree.insert(2)
        with self.assertRaises(ConcurrentModificationError):
            next(it)

    def test_concurrent_modification_is_a_runtime_error(self):
        tree = build([1])
        it = tree.iterator()
        tree.insert(2)
        with self.assertRaises(RuntimeError):
            next(it)

    def test_removal_through_one_iterator_invalidates_another(self):
        tree = build([2, 1, 3])
        first = tree.iterator()
        second = tree.iterator()
        next(first)
        first.remove_last()
        with self.assertRaises(ConcurrentModificationError):
            next(second)
        self.assertEqual(list(first), [2, 3])


class TestTreeIteratorRemoveLast(unittest.TestCase):
    def test_remove_last_before_next_raises(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        with self.assertRaises(IllegalStateError):
            it.remove_last()
        self.assertEqual(tree.size(), 3)

    def test_remove_last_twice_raises(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        next(it)
        it.remove_last()
        with self.assertRaises(IllegalStateError):
            it.remove_last()
        self.assertEqual(tree.size(), 2)

    def test_remove_last_on_stale_iterator_raises(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        next(it)
        tree.insert(4)
        with self.assertRaises(ConcurrentModificationError):
            it.remove_last()
        self.assertTrue(tree.contains(1))

    def test_remove_last_mid_iteration(self):
        tree = build([6, 3, 1, 2, 5, 4, 9, 7, 8])
        it = tree.iterator()
        produced = []
        for value in it:
            produced.append(value)
            if value == 6:
                self.assertEqual(it.remove_last(), 6)
        self.assertEqual(produced, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        self.assertFalse(tree.contains(6))
        self.assertEqual(tree.size(), 8)
        self.assertEqual(list(tree), [1, 2, 3, 4, 5, 7, 8, 9])
        self.assertTrue(tree.is_valid())

    def test_remove_every_value_while_iterating(self):
        tree = build(range(1, 51))
        it = tree.iterator()
        produced = []
        for value in it:
            produced.append(value)
            it.remove_last()
            self.assertTrue(tree.is_valid())
        self.assertEqual(produced, list(range(1, 51)))
        self.assertTrue(tree.is_empty())

    def test_remove_alternate_values_while_iterating(self):
        tree = build(range(1, 31))
        it = tree.iterator()
        produced = []
        for value in it:
            produced.append(value)
            if value % 2 == 0:
                it.remove_last()
        self.assertEqual(produced, list(range(1, 31)))
        self.assertEqual(list(tree), list(range(1, 31, 2)))
        self.assertTrue(tree.is_valid())

    def test_remove_last_two_child_node_in_plain_tree(self):
        tree = build([50, 30, 70, 20, 40, 60, 80], BinarySearchTree)
        it = tree.iterator()
        produced = []
        for value in it:
            produced.append(value)
            if value in (30, 50):
                it.remove_last()
        self.assertEqual(produced, [20, 30, 40, 50, 60, 70, 80])
        self.assertEqual(list(tree), [20, 40, 60, 70, 80])
        self.assertTrue(tree.is_valid())

    def test_insert_after_remove_last_invalidates_again(self):
        tree = build([2, 1, 3])
        it = tree.iterator()
        next(it)
        it.remove_last()
        tree.insert(10)
        with self.assertRaises(ConcurrentModificationError):
            next(it)


if __name__ == '__main__':
    unittest.main()
