from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .base import Tree
from .errors import KeyExistsError
from .node import TreeNode

logger = logging.getLogger(__name__)


def _is_balanced(diff_left: int, diff_right: int) -> bool:
    return (diff_left, diff_right) in ((1, 1), (1, 2), (2, 1))


class AVLTree(Tree):
    """AVL tree keyed by distinct integers, with subtree sizes, join and split.

    Mutating operations return a rebalancing cost: every promotion or demotion
    step counts 1, a single rotation case counts 2 or 3 and a double rotation
    case counts 5.
    """

    def insert(self, key: int, value: Optional[str]) -> int:
        """Insert `key` with `value` and return the rebalancing cost.

        Raises KeyExistsError (leaving the tree untouched) if `key` is
        already present.
        """
        if self.empty():
            node = TreeNode(key, value)
            self._root = node
            self._min = node
            self._max = node
            logger.debug("insert %d into empty tree", key)
            return 0

        parent = self._tree_position(key)
        if parent._key == key:
            raise KeyExistsError(key)

        node = TreeNode(key, value)
        if key < parent._key:
            parent._set_left_child(node)
        else:
            parent._set_right_child(node)
        self._update_size_upwards(parent, 1)

        if key < self._min._key:
            self._min = node
        if key > self._max._key:
            self._max = node

        ops = self._grow_leaf(parent)
        logger.debug("insert %d: %d rebalancing ops", key, ops)
        return ops

    def _grow_leaf(self, parent: TreeNode) -> int:
        # `parent` just received a new leaf child.
        if parent._rank != 0:
            # parent already had a child, so its rank still fits
            return 0

        parent._rank = 1
        return 1 + self._rebalance_insert(parent._parent, parent)

    def _rebalance_insert(self, node: Optional[TreeNode], son: TreeNode) -> int:
        """Restore rank balance walking up from `node`, whose child `son` has
        just grown by one rank.
        """
        ops = 0
        while node is not None:
            diff_left = node._left_diff()
            diff_right = node._right_diff()
            if _is_balanced(diff_left, diff_right):
                return ops

            if diff_left + diff_right == 1:
                node._rank += 1
                ops += 1
                son, node = node, node._parent
                continue

            son_diff_left = son._left_diff()
            son_diff_right = son._right_diff()

            if son_diff_left == 1 and son_diff_right == 1:
                # Only reachable from join: both of son's children are tall,
                # so after lifting son it must be promoted and the subtree
                # grows.
                self._rotate(son)
                son._rank += 1
                ops += 2
                node = son._parent
                continue

            if diff_left == 0 and son_diff_left == 1:
                self._rotate(son)
                node._rank -= 1
                return ops + 2
            elif diff_right == 0 and son_diff_right == 1:
                self._rotate(son)
                node._rank -= 1
                return ops + 2

            if diff_right == 0:
                grandson = son._left
            else:
                grandson = son._right
            self._rotate(grandson)
            self._rotate(grandson)
            node._rank -= 1
            son._rank -= 1
            grandson._rank += 1
            return ops + 5

        return ops

    def delete(self, key: int) -> int:
        """Delete `key` and return the rebalancing cost.

        Raises KeyNotFoundError if `key` is not in the tree.
        """
        node = self._find_node(key)

        if node._left.is_real and node._right.is_real:
            suc = self._successor(node)
            start = suc._parent
            if start is node:
                start = suc

            self._splice_out(suc)

            # suc takes node's place; the sizes along node's path already
            # account for the removal
            suc._rank = node._rank
            suc._size = node._size
            suc._set_left_child(node._left)
            suc._set_right_child(node._right)
            self._replace_child(node, suc)
        else:
            start = node._parent
            self._splice_out(node)

        ops = self._rebalance_delete(start)

        if self.empty():
            self._min = None
            self._max = None
        else:
            if node is self._min:
                self._min = self._min_node(self._root)
            if node is self._max:
                self._max = self._max_node(self._root)

        node._reset()
        logger.debug("delete %d: %d rebalancing ops", key, ops)
        return ops

    def _splice_out(self, node: TreeNode):
        """Unlink a node with at most one real child, lifting that child."""
        if node._left.is_real:
            child = node._left
        else:
            child = node._right

        self._replace_child(node, child)
        self._update_size_upwards(node._parent, -1)

    def _rebalance_delete(self, node: Optional[TreeNode]) -> int:
        """Restore rank balance walking up from `node`, one of whose subtrees
        has just lost one rank.
        """
        ops = 0
        while node is not None:
            diff_left = node._left_diff()
            diff_right = node._right_diff()
            if _is_balanced(diff_left, diff_right):
                return ops

            if diff_left == 2 and diff_right == 2:
                node._rank -= 1
                ops += 1
                node = node._parent
                continue

            if diff_left == 3:
                son = node._right
                son_near = son._left_diff()
                son_far = son._right_diff()
            else:
                son = node._left
                son_near = son._right_diff()
                son_far = son._left_diff()

            if son_near == 1 and son_far == 1:
                self._rotate(son)
                node._rank -= 1
                son._rank += 1
                return ops + 3
            elif son_near == 2:
                self._rotate(son)
                node._rank -= 2
                ops += 2
                node = son._parent
            else:
                if diff_left == 3:
                    grandson = son._left
                else:
                    grandson = son._right
                self._rotate(grandson)
                self._rotate(grandson)
                node._rank -= 2
                son._rank -= 1
                grandson._rank += 1
                ops += 5
                node = grandson._parent

        return ops

    def join(self, x: TreeNode, t: AVLTree) -> int:
        """Join `t` and the pivot node `x` into this tree.

        All keys of `t` must lie on one side of `x.key` and all keys of this
        tree on the other; either tree may be empty. `t` is left empty.
        Returns the cost of the join, |rank(t) - rank(self)| + 1 up to the
        rebalancing done at the splice point.
        """
        if not x.is_real:
            raise ValueError("join pivot must be a real node")

        self._check_join_order(x, t)
        ops = self._join(x, t)
        logger.debug("join %d: cost %d", x.key, ops)
        return ops

    def _check_join_order(self, x: TreeNode, t: AVLTree):
        # uses the cached extremes, so this is O(1)
        def below(tree: AVLTree) -> bool:
            return tree.empty() or tree._max._key < x._key

        def above(tree: AVLTree) -> bool:
            return tree.empty() or tree._min._key > x._key

        if not ((below(t) and above(self)) or (below(self) and above(t))):
            raise ValueError(
                "keys of both trees must lie on opposite sides of {}".format(x.key)
            )

    def _join(self, x: TreeNode, t: AVLTree) -> int:
        if self._root.is_real:
            if t._root.is_real:
                if x._key < self._root._key:
                    ops = self._join_around(t, x, self)
                else:
                    ops = self._join_around(self, x, t)
            else:
                ops = self._join_leaf(x)
        elif t._root.is_real:
            self._root = t._root
            self._min = t._min
            self._max = t._max
            ops = self._join_leaf(x)
        else:
            x._reset()
            self._root = x
            self._min = x
            self._max = x
            ops = 1

        t._clear()
        return ops

    def _join_leaf(self, x: TreeNode) -> int:
        """Hang `x` below the extreme node on its side of a non-empty tree."""
        x._reset()
        if x._key < self._root._key:
            parent = self._min_node(self._root)
            parent._set_left_child(x)
            self._min = x
        else:
            parent = self._max_node(self._root)
            parent._set_right_child(x)
            self._max = x
        self._update_size_upwards(parent, 1)

        if parent._rank != 0:
            return 1
        return self._grow_leaf(parent)

    def _join_around(self, t1: AVLTree, x: TreeNode, t2: AVLTree) -> int:
        """Join non-empty trees with keys(t1) < x < keys(t2) into self."""
        root1 = t1._root
        root2 = t2._root
        new_min = t1._min
        new_max = t2._max

        self._min = new_min
        self._max = new_max

        if abs(root1._rank - root2._rank) < 2:
            x._reset()
            x._rank = max(root1._rank, root2._rank) + 1
            x._set_left_child(root1)
            x._set_right_child(root2)
            x._update_size()
            self._root = x
            return 1

        # Walk down the taller tree's spine facing x until reaching a
        # subtree no taller than the shorter tree.
        counter = 0
        x._reset()
        if root1._rank < root2._rank:
            short = root1
            c = root2
            b = c._left
            while b._rank > short._rank:
                c = b
                b = b._left
                counter += 1
            c._set_left_child(x)
            x._set_left_child(short)
            x._set_right_child(b)
            self._root = root2
        else:
            short = root2
            c = root1
            b = c._right
            while b._rank > short._rank:
                c = b
                b = b._right
                counter += 1
            c._set_right_child(x)
            x._set_right_child(short)
            x._set_left_child(b)
            self._root = root1

        x._rank = max(b._rank, short._rank) + 1
        self._update_size_by_children(x)
        return counter + self._rebalance_insert(c, x)

    def split(self, key: int) -> Tuple[AVLTree, AVLTree]:
        """Split around `key` into (keys < key, keys > key).

        The node holding `key` is discarded and this tree is left empty.
        Raises KeyNotFoundError if `key` is not in the tree.
        """
        lower, upper, costs = self.split_with_costs(key)
        logger.debug(
            "split %d: %d joins, total cost %d", key, len(costs), sum(costs)
        )
        return lower, upper

    def split_with_costs(self, key: int) -> Tuple[AVLTree, AVLTree, List[int]]:
        """Like split(), but also return the cost of every join performed,
        in order from the split node up to the old root.
        """
        pivot = self._find_node(key)

        lower = self.__class__()
        upper = self.__class__()
        lower._adopt(pivot._left)
        upper._adopt(pivot._right)

        costs: List[int] = []
        temp = self.__class__()
        son = pivot
        node = pivot._parent
        while node is not None:
            if node._right is son:
                temp._adopt(node._left)
                target = lower
            else:
                temp._adopt(node._right)
                target = upper

            son = node
            node = node._parent
            costs.append(target._join(son, temp))

        # joins carried over subtrees without cached extremes
        lower._reset_extremes()
        upper._reset_extremes()
        self._clear()
        pivot._reset()
        return lower, upper, costs
