# hostbind/core/conversions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Predicates and strict conversions over host values.

Predicates never raise. Conversions accept exactly the representations listed
in their docstring and report every other value through the ErrorManager they
are given; nothing is coerced across domains (a float is never truncated into
an integer, an integer is never read as a boolean).
"""
import sys
from typing import Any, Dict, List, Optional, Tuple

from hostbind.core.error_manager import ErrorManager
from hostbind.core.types import SType, TypeTable

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
SIZE_T_MAX = 2**64 - 1

# Integers beyond this magnitude cannot be represented as a double.
_DOUBLE_INT_LIMIT = int(sys.float_info.max)


def is_bool(value: Any) -> bool:
    return value is True or value is False


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_float(value: Any) -> bool:
    return isinstance(value, float)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bytes(value: Any) -> bool:
    return isinstance(value, bytes)


def is_list(value: Any) -> bool:
    return isinstance(value, list)


def is_tuple(value: Any) -> bool:
    return isinstance(value, tuple)


def is_list_or_tuple(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_dict(value: Any) -> bool:
    return isinstance(value, dict)


def is_none(value: Any) -> bool:
    return value is None


def is_range(value: Any) -> bool:
    return isinstance(value, range)


def is_ellipsis(value: Any) -> bool:
    return value is Ellipsis


def _type_fullname(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def is_numpy_array(value: Any) -> bool:
    return _type_fullname(value) in ("numpy.ndarray", "numpy.ma.core.MaskedArray")


def is_pandas_frame(value: Any) -> bool:
    name = _type_fullname(value)
    return name.startswith("pandas.") and name.endswith(".DataFrame")


def is_pandas_series(value: Any) -> bool:
    name = _type_fullname(value)
    return name.startswith("pandas.") and name.endswith(".Series")


def is_frame(value: Any, frame_type: Optional[type]) -> bool:
    return isinstance(frame_type, type) and isinstance(value, frame_type)


def is_stype(value: Any, stypes: Optional[TypeTable]) -> bool:
    return stypes is not None and stypes.contains(value)


# -----------------------------------------------------------------------------
# STRICT CONVERSIONS
# -----------------------------------------------------------------------------


def to_bool_strict(value: Any, errors: ErrorManager) -> bool:
    """Accepts ``True`` and ``False`` only."""
    if not is_bool(value):
        raise errors.error_not_boolean(value)
    return value


def _to_int_in_range(value: Any, errors: ErrorManager, lo: int, hi: int, target: str) -> int:
    if not is_int(value):
        raise errors.error_not_integer(value)
    result = int(value)
    if lo == 0 and result < 0:
        raise errors.error_int_negative(value)
    if result < lo or result > hi:
        raise errors.error_int_overflow(value, target)
    return result


def to_int32_strict(value: Any, errors: ErrorManager) -> int:
    """Accepts an ``int`` in the inclusive range [-2**31, 2**31 - 1]."""
    return _to_int_in_range(value, errors, INT32_MIN, INT32_MAX, "int32")


def to_int64_strict(value: Any, errors: ErrorManager) -> int:
    """Accepts an ``int`` in the inclusive range [-2**63, 2**63 - 1]."""
    return _to_int_in_range(value, errors, INT64_MIN, INT64_MAX, "int64")


def to_size_t(value: Any, errors: ErrorManager) -> int:
    """Accepts an ``int`` in the inclusive range [0, 2**64 - 1]."""
    return _to_int_in_range(value, errors, 0, SIZE_T_MAX, "size_t")


def to_double(value: Any, errors: ErrorManager) -> float:
    """Accepts a ``float``, or an ``int`` small enough to be represented as one."""
    if is_float(value):
        return float(value)
    if is_int(value):
        if abs(value) > _DOUBLE_INT_LIMIT:
            raise errors.error_int_overflow(value, "double")
        return float(value)
    raise errors.error_not_double(value)


def to_string(value: Any, errors: ErrorManager) -> str:
    if not is_string(value):
        raise errors.error_not_string(value)
    return str(value)


def to_stringlist(value: Any, errors: ErrorManager) -> List[str]:
    """Accepts a list or tuple whose every element is a string."""
    if not is_list_or_tuple(value):
        raise errors.error_not_list(value)
    result = []
    for item in value:
        if not is_string(item):
            raise errors.error_not_string(item)
        result.append(item)
    return result


def to_pylist(value: Any, errors: ErrorManager) -> List[Any]:
    """Accepts a list or tuple; always returns a new list."""
    if not is_list_or_tuple(value):
        raise errors.error_not_list(value)
    return list(value)


def to_otuple(value: Any, errors: ErrorManager) -> Tuple[Any, ...]:
    if not is_tuple(value):
        raise errors.error_not_tuple(value)
    return value


def to_pydict(value: Any, errors: ErrorManager) -> Dict[Any, Any]:
    if not is_dict(value):
        raise errors.error_not_dict(value)
    return value


def to_stype(value: Any, errors: ErrorManager, stypes: Optional[TypeTable]) -> SType:
    """Accepts a member of the host ``stype`` enum registered in ``stypes``."""
    stype = stypes.to_native(value) if stypes is not None else None
    if stype is None:
        raise errors.error_not_stype(value)
    return stype


def to_frame(value: Any, errors: ErrorManager, frame_type: Optional[type]) -> Any:
    """
    Accepts an instance of ``frame_type`` and returns its underlying DataTable.
    """
    get_datatable = getattr(value, "get_datatable", None)
    if not is_frame(value, frame_type) or not callable(get_datatable):
        raise errors.error_not_frame(value)
    return get_datatable()
