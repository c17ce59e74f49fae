"""
Frame package: thin storage stand-ins and the type objects exposed by the module.
"""

from .storage import Column, DataTable, RowIndex, RowIndexKind
from .pytypes import BaseExpr, Frame, Ftrl, RowIndexObject, by, join, sort

__all__ = [
    "Column",
    "DataTable",
    "RowIndex",
    "RowIndexKind",
    "BaseExpr",
    "Frame",
    "Ftrl",
    "RowIndexObject",
    "by",
    "join",
    "sort",
]
