# hostbind/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import ctypes
import logging
from enum import Enum
from typing import Any, Dict, Generic, Iterable, Optional, Set, Type, TypeVar

logger = logging.getLogger(__name__)


class LType(Enum):
    """
    Logical column types. Several storage types share one logical type.
    """

    MU = 0
    BOOL = 1
    INT = 2
    REAL = 3
    STRING = 5
    OBJECT = 7


class SType(Enum):
    """
    Storage types of a column. The integer codes are shared with the host-side
    ``stype`` enum so that members can be matched across the boundary.
    """

    VOID = 0
    BOOL = 1
    INT8 = 2
    INT16 = 3
    INT32 = 4
    INT64 = 5
    FLOAT32 = 6
    FLOAT64 = 7
    STR32 = 11
    STR64 = 12
    OBJ = 21

    @property
    def ltype(self) -> LType:
        return _STYPE_LTYPES[self]

    @property
    def ctype(self) -> Optional[Type[Any]]:
        """Element type of the column's main data buffer, None for VOID."""
        return _STYPE_CTYPES[self]

    @property
    def elemsize(self) -> int:
        ctype = self.ctype
        return ctypes.sizeof(ctype) if ctype is not None else 0


_STYPE_LTYPES = {
    SType.VOID: LType.MU,
    SType.BOOL: LType.BOOL,
    SType.INT8: LType.INT,
    SType.INT16: LType.INT,
    SType.INT32: LType.INT,
    SType.INT64: LType.INT,
    SType.FLOAT32: LType.REAL,
    SType.FLOAT64: LType.REAL,
    SType.STR32: LType.STRING,
    SType.STR64: LType.STRING,
    SType.OBJ: LType.OBJECT,
}

# String columns keep their offsets in the main buffer.
_STYPE_CTYPES = {
    SType.VOID: None,
    SType.BOOL: ctypes.c_int8,
    SType.INT8: ctypes.c_int8,
    SType.INT16: ctypes.c_int16,
    SType.INT32: ctypes.c_int32,
    SType.INT64: ctypes.c_int64,
    SType.FLOAT32: ctypes.c_float,
    SType.FLOAT64: ctypes.c_double,
    SType.STR32: ctypes.c_uint32,
    SType.STR64: ctypes.c_uint64,
    SType.OBJ: ctypes.py_object,
}


E = TypeVar("E", bound=Enum)


class TypeTable(Generic[E]):
    """
    Two-way lookup between native enum members and the host-side objects that
    represent them.

    The table is empty until the host registers its enum class; after that
    ``to_native`` and ``to_host`` resolve members by their shared integer code.
    """

    def __init__(self, native: Type[E]) -> None:
        self._native = native
        self._to_native: Dict[Any, E] = {}
        self._to_host: Dict[E, Any] = {}
        self._host_types: Set[type] = set()

    @property
    def installed(self) -> bool:
        return bool(self._to_native)

    def install(self, host_members: Iterable[Any]) -> None:
        """
        Populate the table from the host's enum (or any iterable of members
        carrying a ``value`` attribute). A code unknown to the native enum
        raises ValueError.
        """
        to_native: Dict[Any, E] = {}
        to_host: Dict[E, Any] = {}
        for member in host_members:
            native = self._native(member.value)
            to_native[member] = native
            to_host[native] = member
        self._to_native = to_native
        self._to_host = to_host
        self._host_types = {type(member) for member in to_native}
        logger.debug("Installed %d %s objects", len(to_native), self._native.__name__)

    def contains(self, obj: Any) -> bool:
        # members of an IntEnum compare equal to plain ints; match on type first
        if type(obj) not in self._host_types:
            return False
        return obj in self._to_native

    def to_native(self, obj: Any) -> Optional[E]:
        if not self.contains(obj):
            return None
        return self._to_native[obj]

    def to_host(self, member: E) -> Any:
        return self._to_host.get(member)

    def clear(self) -> None:
        self._to_native.clear()
        self._to_host.clear()
        self._host_types.clear()
