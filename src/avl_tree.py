"""
AVL tree -- a height-balanced binary search tree.

Keeps |depth(left) - depth(right)| <= 1 at every node by rotating after each
insertion and deletion. Subtree depths are measured on demand (see
BinaryTree._depth) instead of being cached per node, so a balance check costs
time proportional to the subtree it inspects and an insertion is O(n) in the
worst case even though the tree height stays O(log n).
"""

import logging
from typing import TypeVar, Optional

from binary_search_tree import BinarySearchTree
from binary_tree import BinaryTree

T = TypeVar('T')

logger = logging.getLogger(__name__)


class AVLTree(BinarySearchTree[T]):
    def balance_factor(self, node: BinaryTree.Node) -> int:
        return self._depth(node.left) - self._depth(node.right)

    def _replace_child(self, parent: Optional[BinaryTree.Node],
                       old: BinaryTree.Node, new: BinaryTree.Node) -> None:
        new.parent = parent
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _rotate_left(self, n: BinaryTree.Node) -> BinaryTree.Node:
        pivot = n.right
        assert pivot is not None
        logger.debug("rotate left at %r", n.value)

        self._replace_child(n.parent, n, pivot)
        n.right = pivot.left
        if n.right is not None:
            n.right.parent = n
        pivot.left = n
        n.parent = pivot

        return pivot

    def _rotate_right(self, n: BinaryTree.Node) -> BinaryTree.Node:
        pivot = n.left
        assert pivot is not None
        logger.debug("rotate right at %r", n.value)

        self._replace_child(n.parent, n, pivot)
        n.left = pivot.right
        if n.left is not None:
            n.left.parent = n
        pivot.right = n
        n.parent = pivot

        return pivot

    def _fix(self, node: BinaryTree.Node, factor: int) -> BinaryTree.Node:
        if factor > 1:
            assert node.left is not None
            if self.balance_factor(node.left) < 0:
                self._rotate_left(node.left)
            return self._rotate_right(node)

        assert node.right is not None
        if self.balance_factor(node.right) > 0:
            self._rotate_right(node.right)
        return self._rotate_left(node)

    def _rebalance_from(self, node: Optional[BinaryTree.Node], exhaustive: bool = False) -> None:
        """
        Walk from `node` up to the root and rotate at the first unbalanced node.

        One rotation restores balance after an insertion. A deletion can
        unbalance several ancestors in turn, so with `exhaustive` the walk
        continues above each corrected subtree until the root is reached.
        """
        while node is not None:
            factor = self.balance_factor(node)
            if factor > 1 or factor < -1:
                pivot = self._fix(node, factor)
                root = pivot
                while root.parent is not None:
                    root = root.parent
                self._root = root
                if not exhaustive:
                    return
                node = pivot
            node = node.parent

    def _after_insert(self, node: BinaryTree.Node) -> None:
        self._rebalance_from(node.parent)

    def _after_delete(self, parent: Optional[BinaryTree.Node]) -> None:
        self._rebalance_from(parent, exhaustive=True)

    def is_balanced(self) -> bool:
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            if abs(self.balance_factor(node)) > 1:
                return False
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return True

    def is_valid(self) -> bool:
        return super().is_valid() and self.is_balanced()
