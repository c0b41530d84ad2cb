from __future__ import annotations

from collections.abc import MutableMapping
from typing import Iterator, List, Optional, Tuple

from .errors import KeyNotFoundError
from .iter import TreeIter
from .node import SENTINEL, Child, TreeNode


class Tree(MutableMapping):
    """Binary search tree over distinct integer keys.

    Nodes carry their rank and subtree size; the tree caches its minimum and
    maximum nodes. Structural changes (insert, delete, join, split) are left
    to subclasses, which build them from the primitives defined here.
    """

    def __init__(self):
        self._root: Child = SENTINEL
        self._min: Optional[TreeNode] = None
        self._max: Optional[TreeNode] = None

    def empty(self) -> bool:
        return not self._root.is_real

    def size(self) -> int:
        return self._root.size

    def get_root(self) -> Child:
        """The root node, or SENTINEL if the tree is empty."""
        return self._root

    def search(self, key: int) -> Optional[str]:
        """Return the value stored under `key`, or None if it is absent."""
        node = self._root
        while node.is_real:
            if key == node._key:
                return node.value
            elif key < node._key:
                node = node._left
            else:
                node = node._right
        return None

    def min(self) -> Optional[str]:
        if self._min is None:
            return None
        return self._min.value

    def max(self) -> Optional[str]:
        if self._max is None:
            return None
        return self._max.value

    def keys_to_array(self) -> List[int]:
        return list(self.keys())

    def values_to_array(self) -> List[Optional[str]]:
        return list(self.values())

    def insert(self, key: int, value: Optional[str]) -> int:
        raise NotImplementedError()

    def delete(self, key: int) -> int:
        raise NotImplementedError()

    def pop_min(self) -> Tuple[int, Optional[str]]:
        node = self._first_node()
        r = (node.key, node.value)
        self.delete(node.key)
        return r

    def pop_max(self) -> Tuple[int, Optional[str]]:
        node = self._last_node()
        r = (node.key, node.value)
        self.delete(node.key)
        return r

    def _first_node(self) -> TreeNode:
        if self._min is None:
            raise IndexError("Tree is empty")
        return self._min

    def _last_node(self) -> TreeNode:
        if self._max is None:
            raise IndexError("Tree is empty")
        return self._max

    # shared primitives:

    def _tree_position(self, key: int) -> Optional[TreeNode]:
        """Return the node holding `key`, or the node that would become its
        parent if it were inserted. Returns None for an empty tree.
        """
        node = self._root
        last = None
        while node.is_real:
            last = node
            if key == node._key:
                return node
            elif key < node._key:
                node = node._left
            else:
                node = node._right
        return last

    def _find_node(self, key: int) -> TreeNode:
        node = self._tree_position(key)
        if node is None or node._key != key:
            raise KeyNotFoundError(key)
        return node

    def _rotate(self, node: TreeNode):
        """Lift `node` above its parent.

        A left child is rotated right and a right child is rotated left.
        Ranks are left alone; sizes of the two nodes involved are recomputed.
        """
        parent: TreeNode = node._parent
        gp: Optional[TreeNode] = parent._parent
        parent_was_left = parent._is_left_child()

        if node._is_left_child():
            # Right rotation:
            parent._set_left_child(node._right)
            node._set_right_child(parent)
        else:
            # Left rotation:
            parent._set_right_child(node._left)
            node._set_left_child(parent)

        if gp is not None:
            if parent_was_left:
                gp._set_left_child(node)
            else:
                gp._set_right_child(node)
        else:
            node._parent = None
            self._root = node

        parent._update_size()
        node._update_size()

    def _replace_child(self, old: TreeNode, new: Child):
        """Put `new` where `old` hangs (or at the root)."""
        parent = old._parent
        if parent is None:
            self._root = new
            if new.is_real:
                new._parent = None
        elif parent._left is old:
            parent._set_left_child(new)
        else:
            parent._set_right_child(new)

    @staticmethod
    def _update_size_upwards(node: Optional[TreeNode], delta: int):
        while node is not None:
            node._size += delta
            node = node._parent

    @staticmethod
    def _update_size_by_children(node: Optional[TreeNode]):
        while node is not None:
            node._update_size()
            node = node._parent

    @staticmethod
    def _min_node(node: TreeNode) -> TreeNode:
        while node._left.is_real:
            node = node._left
        return node

    @staticmethod
    def _max_node(node: TreeNode) -> TreeNode:
        while node._right.is_real:
            node = node._right
        return node

    @classmethod
    def _successor(cls, node: TreeNode) -> Optional[TreeNode]:
        if node._right.is_real:
            return cls._min_node(node._right)

        parent = node._parent
        while parent is not None and parent._right is node:
            node = parent
            parent = node._parent
        return parent

    def _reset_extremes(self):
        if self._root.is_real:
            self._min = self._min_node(self._root)
            self._max = self._max_node(self._root)
        else:
            self._min = None
            self._max = None

    def _adopt(self, root: Child):
        """Make `root` (a detached subtree) the whole content of this tree.

        The cached extremes are cleared; callers restore them with
        _reset_extremes() once they are done restructuring.
        """
        self._root = root
        if root.is_real:
            root._parent = None
        self._min = None
        self._max = None

    def _clear(self):
        self._root = SENTINEL
        self._min = None
        self._max = None

    # iteration:

    def items(self, reverse: bool = False) -> Iterator[Tuple[int, Optional[str]]]:
        return TreeIter(TreeIter.ITEMS, self._root, reverse)

    def keys(self, reverse: bool = False) -> Iterator[int]:
        return TreeIter(TreeIter.KEYS, self._root, reverse)

    def values(self, reverse: bool = False) -> Iterator[Optional[str]]:
        return TreeIter(TreeIter.VALS, self._root, reverse)

    def nodes(self, reverse: bool = False) -> Iterator[TreeNode]:
        return TreeIter(TreeIter.NODES, self._root, reverse)

    def print(self) -> str:
        if not self._root.is_real:
            return "<empty tree>"

        ret = ""
        stack: List[Tuple[TreeNode, int]] = []
        node, level = self._root, 0
        while len(stack) > 0 or node.is_real:
            while node.is_real:
                stack.append((node, level))
                node, level = node._left, level + 1
            node, level = stack.pop()
            ret += ("    " * level) + node._print_node() + "\n"
            node, level = node._right, level + 1
        return ret

    # mapping protocol:

    def __getitem__(self, key: int) -> Optional[str]:
        node = self._tree_position(key)
        if node is None or node._key != key:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: int, val: Optional[str]):
        node = self._tree_position(key)
        if node is not None and node._key == key:
            node.value = val
        else:
            self.insert(key, val)

    def __delitem__(self, key: int):
        self.delete(key)

    def __contains__(self, key: int) -> bool:
        node = self._tree_position(key)
        return node is not None and node._key == key

    def __iter__(self) -> Iterator[int]:
        return self.keys()

    def __reversed__(self) -> Iterator[int]:
        return self.keys(reverse=True)

    def __len__(self) -> int:
        return self._root.size
