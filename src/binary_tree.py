"""
Binary tree interface shared by the ordered containers.

Holds the node type, the depth measurement, lookup, the plain traversals and
the fail-fast in-order iterator. Concrete trees supply insert() and delete().

Nodes own their children through `left`/`right`. The `parent` link is a weak
reference, so it never keeps a detached subtree alive.
"""

import weakref
from abc import ABC, abstractmethod
from collections import deque
from typing import TypeVar, Generic, List, Iterator, Optional, Tuple

from tree_errors import ConcurrentModificationError, IllegalStateError, TypeMismatchError

T = TypeVar('T')


class BinaryTree(ABC, Generic[T]):
    class Node:
        def __init__(self, value: T, parent: Optional['BinaryTree.Node'] = None) -> None:
            self.value: T = value
            self.left: Optional['BinaryTree.Node'] = None
            self.right: Optional['BinaryTree.Node'] = None
            self._parent: Optional[weakref.ref] = None
            self.parent = parent

        @property
        def parent(self) -> Optional['BinaryTree.Node']:
            if self._parent is None:
                return None
            return self._parent()

        @parent.setter
        def parent(self, node: Optional['BinaryTree.Node']) -> None:
            self._parent = None if node is None else weakref.ref(node)

        def is_leaf(self) -> bool:
            return self.left is None and self.right is None

        def is_unary(self) -> bool:
            return (self.left is None) != (self.right is None)

        def __repr__(self) -> str:
            return f"Node({self.value!r})"

    def __init__(self) -> None:
        self._root: Optional[BinaryTree.Node] = None
        self._size: int = 0
        self._mod_count: int = 0

    @abstractmethod
    def insert(self, value: T) -> bool:
        """Store `value`; duplicates are ignored. Returns True."""

    @abstractmethod
    def delete(self, value: T) -> Optional[T]:
        """Remove `value` and return it, or return None if it is absent."""

    @abstractmethod
    def _remove_node(self, node: 'BinaryTree.Node') -> T:
        pass

    @staticmethod
    def _compare(a: T, b: T) -> int:
        try:
            if a < b:
                return -1
            if a > b:
                return 1
        except TypeError as exc:
            raise TypeMismatchError(
                f"cannot order {type(a).__name__} against {type(b).__name__}"
            ) from exc
        return 0

    def _depth(self, node: Optional['BinaryTree.Node']) -> int:
        """
        Number of levels below and including `node`, 0 for an empty subtree.

        Measured level by level on every call rather than cached, so the cost
        is proportional to the size of the subtree.
        """
        depth = 0
        queue = deque()
        if node is not None:
            queue.append(node)
        while queue:
            depth += 1
            for _ in range(len(queue)):
                node = queue.popleft()
                if node.left is not None:
                    queue.append(node.left)
                if node.right is not None:
                    queue.append(node.right)
        return depth

    def _lookup(self, value: T) -> Optional['BinaryTree.Node']:
        node = self._root
        while node is not None:
            result = self._compare(value, node.value)
            if result < 0:
                node = node.left
            elif result > 0:
                node = node.right
            else:
                return node
        return None

    def _find_min(self, node: 'BinaryTree.Node') -> 'BinaryTree.Node':
        while node.left is not None:
            node = node.left
        return node

    def _find_max(self, node: 'BinaryTree.Node') -> 'BinaryTree.Node':
        while node.right is not None:
            node = node.right
        return node

    def depth(self) -> int:
        return self._depth(self._root)

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def contains(self, value: T) -> bool:
        return self._lookup(value) is not None

    def clear(self) -> None:
        self._root = None
        self._size = 0
        self._mod_count += 1

    def iterator(self) -> 'TreeIterator[T]':
        return TreeIterator(self)

    def min(self) -> T:
        if self._root is None:
            raise ValueError("min from empty tree")
        return self._find_min(self._root).value

    def max(self) -> T:
        if self._root is None:
            raise ValueError("max from empty tree")
        return self._find_max(self._root).value

    def in_order(self) -> List[T]:
        return list(self.iterator())

    def _walk(self) -> Iterator[Tuple['BinaryTree.Node', bool]]:
        """
        Stackless traversal over child and parent links.

        Yields (node, True) when a node is first reached from above and
        (node, False) once both of its subtrees are done.
        """
        came_from: Optional[BinaryTree.Node] = None
        node = self._root
        while node is not None:
            if came_from is node.parent:
                yield node, True
                if node.left is not None:
                    came_from, node = node, node.left
                    continue
                came_from = None
            if came_from is node.left and node.right is not None:
                came_from, node = node, node.right
                continue
            yield node, False
            came_from, node = node, node.parent

    def pre_order(self) -> List[T]:
        return [node.value for node, entering in self._walk() if entering]

    def post_order(self) -> List[T]:
        return [node.value for node, entering in self._walk() if not entering]

    def copy(self) -> 'BinaryTree[T]':
        clone = type(self)()
        for value in self.pre_order():
            clone.insert(value)
        return clone

    def is_valid(self) -> bool:
        """Check ordering, parent links and the stored size against the nodes."""
        if self._root is None:
            return self._size == 0
        if self._root.parent is not None:
            return False
        count = 0
        stack = [(self._root, None, None)]
        while stack:
            node, low, high = stack.pop()
            count += 1
            if low is not None and not low.value < node.value:
                return False
            if high is not None and not node.value < high.value:
                return False
            for child in (node.left, node.right):
                if child is not None and child.parent is not node:
                    return False
            if node.left is not None:
                stack.append((node.left, low, node))
            if node.right is not None:
                stack.append((node.right, node, high))
        return count == self._size

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[T]:
        return self.iterator()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.in_order()})"

    def __str__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, depth={self.depth()})"


class TreeIterator(Generic[T]):
    """
    Ascending, fail-fast iterator over a tree.

    Keeps the pending left spine on an explicit stack. Any structural change
    made to the tree other than through remove_last() makes the next call
    raise ConcurrentModificationError; the iterator must then be discarded.
    """

    def __init__(self, tree: BinaryTree[T]) -> None:
        self._tree = tree
        self._expected_mod_count: int = tree._mod_count
        self._stack: List[BinaryTree.Node] = []
        self._last: Optional[BinaryTree.Node] = None
        self._push_left_spine(tree._root)

    def _push_left_spine(self, node: Optional[BinaryTree.Node]) -> None:
        while node is not None:
            self._stack.append(node)
            node = node.left

    def _check_mod_count(self) -> None:
        if self._expected_mod_count != self._tree._mod_count:
            raise ConcurrentModificationError("tree was modified during iteration")

    def has_next(self) -> bool:
        return len(self._stack) != 0

    def __iter__(self) -> 'TreeIterator[T]':
        return self

    def __next__(self) -> T:
        self._check_mod_count()
        if not self._stack:
            raise StopIteration
        node = self._stack.pop()
        self._push_left_spine(node.right)
        self._last = node
        return node.value

    def next(self) -> T:
        return self.__next__()

    def remove_last(self) -> T:
        """Delete the value most recently returned by next() from the tree."""
        if self._last is None:
            raise IllegalStateError("remove_last() requires a preceding next()")
        self._check_mod_count()
        value = self._tree._remove_node(self._last)
        self._last = None
        # Rotations and the successor copy can move pending nodes, so rebuild
        # the stack as the ancestors of the removed value's former position.
        self._stack = []
        node = self._tree._root
        while node is not None:
            if self._tree._compare(value, node.value) < 0:
                self._stack.append(node)
                node = node.left
            else:
                node = node.right
        self._expected_mod_count = self._tree._mod_count
        return value
