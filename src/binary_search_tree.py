import logging
from typing import TypeVar, Optional, Tuple

from binary_tree import BinaryTree
from tree_errors import InvalidInputError

T = TypeVar('T')

logger = logging.getLogger(__name__)


class BinarySearchTree(BinaryTree[T]):
    """
    Unbalanced binary search tree.

    Every structural change goes through insert() or _remove_node(), which
    report the affected position to _after_insert() / _after_delete() so a
    subclass can restore its shape invariant.
    """

    def _find_slot(self, value: T) -> Tuple[Optional[BinaryTree.Node], int]:
        """Return (node, 0) for an equal value, else (attachment parent, side)."""
        parent: Optional[BinaryTree.Node] = None
        side = 0
        node = self._root
        while node is not None:
            side = self._compare(value, node.value)
            if side == 0:
                return node, 0
            parent = node
            node = node.left if side < 0 else node.right
        return parent, side

    def insert(self, value: T) -> bool:
        if value is None:
            raise InvalidInputError("cannot insert None into the tree")

        parent, side = self._find_slot(value)
        # duplicates still count as a modification
        self._mod_count += 1

        if parent is None:
            node = BinaryTree.Node(value)
            self._root = node
        elif side == 0:
            return True
        else:
            node = BinaryTree.Node(value, parent)
            if side < 0:
                parent.left = node
            else:
                parent.right = node

        self._size += 1
        self._after_insert(node)
        return True

    def delete(self, value: T) -> Optional[T]:
        node = self._lookup(value)
        if node is None:
            return None
        return self._remove_node(node)

    def _remove_node(self, node: BinaryTree.Node) -> T:
        self._mod_count += 1
        self._size -= 1
        removed = node.value

        if node.left is not None and node.right is not None:
            successor = self._find_min(node.right)
            node.value = successor.value
            node = successor

        child = node.left if node.left is not None else node.right
        parent = node.parent
        if child is not None:
            child.parent = parent
        if parent is None:
            self._root = child
        elif parent.left is node:
            parent.left = child
        else:
            parent.right = child

        node.left = None
        node.right = None
        node.parent = None

        self._after_delete(parent)
        return removed

    def clear(self) -> None:
        logger.debug("clearing %s of %d values", type(self).__name__, self._size)
        super().clear()

    def _after_insert(self, node: BinaryTree.Node) -> None:
        pass

    def _after_delete(self, parent: Optional[BinaryTree.Node]) -> None:
        pass
