# hostbind/frame/storage.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Minimal columnar storage used by the exported introspection functions.

Columns keep their main data in a ctypes array so that the buffer has a
stable address that can be handed to foreign code.
"""
import ctypes
from enum import Enum, auto
from typing import Any, List, Optional, Sequence

from hostbind.core.types import SType


class RowIndexKind(Enum):
    SLICE = auto()
    ARRAY = auto()


class RowIndex:
    """
    Maps the rows of a column onto the rows of its underlying data: either a
    slice (start, count, step) or an explicit array of indices.
    """

    def __init__(self, kind: RowIndexKind, start: int = 0, count: int = 0, step: int = 1, indices=None):
        self.kind = kind
        self._start = start
        self._count = count
        self._step = step
        self._indices = indices

    @classmethod
    def from_slice(cls, start: int, count: int, step: int = 1) -> "RowIndex":
        if start < 0 or count < 0:
            raise ValueError("RowIndex slice start and count must be non-negative")
        if count > 1 and start + (count - 1) * step < 0:
            raise ValueError("RowIndex slice refers to negative rows")
        return cls(RowIndexKind.SLICE, start=start, count=count, step=step)

    @classmethod
    def from_array(cls, indices: Sequence[int]) -> "RowIndex":
        if any(i < 0 for i in indices):
            raise ValueError("RowIndex array cannot contain negative indices")
        ctype = ctypes.c_int32 if max(indices, default=0) <= 2**31 - 1 else ctypes.c_int64
        return cls(RowIndexKind.ARRAY, count=len(indices), indices=(ctype * len(indices))(*indices))

    @property
    def length(self) -> int:
        return self._count

    @property
    def min(self) -> Optional[int]:
        rows = self.to_list()
        return min(rows) if rows else None

    @property
    def max(self) -> Optional[int]:
        rows = self.to_list()
        return max(rows) if rows else None

    def to_list(self) -> List[int]:
        if self.kind is RowIndexKind.SLICE:
            return [self._start + i * self._step for i in range(self._count)]
        return list(self._indices)

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        if self.kind is RowIndexKind.SLICE:
            return f"RowIndex(slice={self._start}/{self._count}/{self._step})"
        return f"RowIndex(array[{self._count}])"


class Column:
    """
    A single typed column.

    Attributes:
        stype: Storage type.
        nrows: Number of rows visible through the column (after the rowindex).
        rowindex: Optional RowIndex applied on top of the data buffer.
    """

    def __init__(self, stype: SType, buffer: Any, nrows: int, strbuf: Optional[bytes] = None,
                 rowindex: Optional[RowIndex] = None) -> None:
        self.stype = stype
        self._buffer = buffer
        self._strbuf = strbuf
        self.rowindex = rowindex
        self.nrows = len(rowindex) if rowindex is not None else nrows

    @classmethod
    def from_list(cls, values: Sequence[Any], stype: SType) -> "Column":
        n = len(values)
        if stype is SType.VOID:
            return cls(stype, None, n)
        if stype in (SType.STR32, SType.STR64):
            encoded = [v.encode("utf-8") for v in values]
            offsets, end = [], 0
            for item in encoded:
                end += len(item)
                offsets.append(end)
            buffer = (stype.ctype * n)(*offsets)
            return cls(stype, buffer, n, strbuf=b"".join(encoded))
        return cls(stype, (stype.ctype * n)(*values), n)

    def with_rowindex(self, rowindex: Optional[RowIndex]) -> "Column":
        return Column(self.stype, self._buffer, self.nrows, self._strbuf, rowindex)

    def data(self) -> int:
        """Address of the main data buffer, 0 when the column has none."""
        if self._buffer is None or len(self._buffer) == 0:
            return 0
        return ctypes.addressof(self._buffer)

    def to_list(self) -> List[Any]:
        rows = self.rowindex.to_list() if self.rowindex is not None else range(self.nrows)
        if self._buffer is None:
            return [None] * self.nrows
        if self.stype in (SType.STR32, SType.STR64):
            out = []
            for i in rows:
                start = self._buffer[i - 1] if i > 0 else 0
                out.append(self._strbuf[start : self._buffer[i]].decode("utf-8"))
            return out
        return [self._buffer[i] for i in rows]


class DataTable:
    """
    An ordered collection of equally long named columns.
    """

    def __init__(self, columns: Sequence[Column], names: Optional[Sequence[str]] = None) -> None:
        columns = list(columns)
        if names is None:
            names = [f"C{i}" for i in range(len(columns))]
        names = list(names)
        if len(names) != len(columns):
            raise ValueError(f"Got {len(names)} names for {len(columns)} columns")
        nrows = {col.nrows for col in columns}
        if len(nrows) > 1:
            raise ValueError("All columns must have the same number of rows")
        self.columns = columns
        self.names = names
        self.nrows = nrows.pop() if nrows else 0

    @property
    def ncols(self) -> int:
        return len(self.columns)
