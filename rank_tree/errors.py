class KeyExistsError(KeyError):
    """Raised when inserting a key that is already in the tree."""


class KeyNotFoundError(KeyError):
    """Raised when deleting (or splitting at) a key that is not in the tree."""
