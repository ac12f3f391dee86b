"""
Exceptions raised by the tree edit distance computation.
"""


class TreeEditError(Exception):
    """Base class for every error raised by treedit."""

    pass


class MissingArgumentError(TreeEditError, ValueError):
    """Raised when a tree, a root or a cost function is absent."""

    pass


class InvalidTreeError(TreeEditError, ValueError):
    """Raised when an input is not a tree reachable from its root."""

    pass


class NegativeCostError(TreeEditError, ValueError):
    """Raised when a cost function returns a negative value."""

    pass


class KeyrootOrderError(TreeEditError, RuntimeError):
    """Raised when a tree distance is read before it was written, or written twice."""

    pass


class CostOverflowError(TreeEditError, OverflowError):
    """Raised when costs are too large for the int64 distance tables."""

    pass
