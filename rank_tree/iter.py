from __future__ import annotations

from typing import List, Union

from .node import SentinelNode, TreeNode


class TreeIter(object):
    KEYS = 0
    VALS = 1
    ITEMS = 2
    NODES = 3

    def __init__(
        self,
        mode: int,
        root: Union[SentinelNode, TreeNode],
        rev: bool,
    ):
        self._rev: bool = rev
        self._mode: int = mode
        self._stack: List[TreeNode] = []

        self._push_spine(root)

    def _push_spine(self, node: Union[SentinelNode, TreeNode]):
        # Descend toward the first node in iteration order, remembering the
        # path so that no recursion is needed.
        while node.is_real:
            self._stack.append(node)
            if not self._rev:
                node = node._left
            else:
                node = node._right

    def __iter__(self) -> TreeIter:
        return self

    def __next__(self):
        if len(self._stack) == 0:
            raise StopIteration()

        cur_node = self._stack.pop()

        if not self._rev:
            self._push_spine(cur_node._right)
        else:
            self._push_spine(cur_node._left)

        if self._mode == TreeIter.KEYS:
            return cur_node.key
        elif self._mode == TreeIter.VALS:
            return cur_node.value
        elif self._mode == TreeIter.ITEMS:
            return (cur_node.key, cur_node.value)
        elif self._mode == TreeIter.NODES:
            return cur_node
