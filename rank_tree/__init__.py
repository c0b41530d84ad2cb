from . import node
from . import base
from . import avl
from . import errors

from .node import TreeNode, SENTINEL
from .avl import AVLTree
from .errors import KeyExistsError, KeyNotFoundError

__all__ = [
    "AVLTree",
    "TreeNode",
    "SENTINEL",
    "KeyExistsError",
    "KeyNotFoundError",
]
