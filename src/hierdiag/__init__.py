"""hierdiag package root."""

from hierdiag.exceptions import AmbiguousJoin, HierarchyError

__all__ = ["__version__", "AmbiguousJoin", "HierarchyError"]

__version__ = "0.1.0"
