class TreeError(Exception):
    """Base class for errors raised by the tree containers."""


class InvalidInputError(TreeError, ValueError):
    """Raised when a value cannot be stored in a tree (e.g. None)."""


class TypeMismatchError(TreeError, TypeError):
    """Raised when a value cannot be ordered against the stored values."""


class ConcurrentModificationError(TreeError, RuntimeError):
    """Raised by an iterator whose tree was structurally modified behind it."""


class IllegalStateError(TreeError, RuntimeError):
    """Raised when an iterator operation is called out of sequence."""
