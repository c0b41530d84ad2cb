from __future__ import annotations

from typing import Optional, Union


class _NodeView(object):
    """Read-only accessors shared by real nodes and the sentinel."""

    __slots__ = ()

    @property
    def key(self) -> Optional[int]:
        """The key associated with this node.

        This property is immutable.
        """
        return self._key

    @property
    def left(self) -> Union[TreeNode, SentinelNode, None]:
        return self._left

    @property
    def right(self) -> Union[TreeNode, SentinelNode, None]:
        return self._right

    @property
    def parent(self) -> Optional[TreeNode]:
        return self._parent

    @property
    def rank(self) -> int:
        """The AVL height of this node (-1 for the sentinel)."""
        return self._rank

    @property
    def size(self) -> int:
        """Number of real nodes in the subtree rooted here."""
        return self._size

    def _left_diff(self) -> int:
        return self._rank - self._left._rank

    def _right_diff(self) -> int:
        return self._rank - self._right._rank


class SentinelNode(_NodeView):
    """Stands in for every absent child.

    There is exactly one instance (SENTINEL); it has no instance storage, so
    any attempt to modify it raises AttributeError.
    """

    __slots__ = ()

    is_real = False
    value = None

    _key = None
    _left = None
    _right = None
    _parent = None
    _rank = -1
    _size = 0

    def __repr__(self) -> str:
        return "SENTINEL"


SENTINEL = SentinelNode()

Child = Union["TreeNode", SentinelNode]


class TreeNode(_NodeView):
    __slots__ = ("_key", "value", "_left", "_right", "_parent", "_rank", "_size")

    is_real = True

    def __init__(self, key: int, value: Optional[str]):
        self._key: int = key
        self.value: Optional[str] = value

        self._left: Child = SENTINEL
        self._right: Child = SENTINEL
        self._parent: Optional[TreeNode] = None
        self._rank: int = 0
        self._size: int = 1

    def __repr__(self) -> str:
        return "TreeNode({!r}, {!r})".format(self._key, self.value)

    def _reset(self):
        """Turn this node back into a detached leaf."""
        self._left = SENTINEL
        self._right = SENTINEL
        self._parent = None
        self._rank = 0
        self._size = 1

    def _set_left_child(self, child: Child):
        self._left = child
        if child.is_real:
            child._parent = self

    def _set_right_child(self, child: Child):
        self._right = child
        if child.is_real:
            child._parent = self

    def _is_left_child(self) -> bool:
        return (self._parent is not None) and (self._parent._left is self)

    def _update_size(self):
        self._size = 1 + self._left._size + self._right._size

    def _print_node(self) -> str:
        return "{}: r{} s{}".format(self._key, self._rank, self._size)
