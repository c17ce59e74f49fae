# hostbind/frame/pytypes.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Type objects exposed by the module: the composite table (Frame), the
online-learning model (Ftrl), the expression base, the row-index wrapper, and
the by/join/sort helpers.

Only their calling contract lives here; grouping, joining, sorting and model
fitting are implemented by other subsystems.
"""
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from hostbind.core import conversions
from hostbind.core.bundle import ArgSchema
from hostbind.core.error_manager import ErrorManager
from hostbind.core.errors import ValueOutOfRangeError
from hostbind.core.types import SType
from hostbind.frame.storage import Column, DataTable, RowIndex


def _detect_stype(values: Sequence[Any]) -> SType:
    present = [v for v in values if v is not None]
    if not present:
        return SType.VOID
    if len(present) != len(values):
        return SType.OBJ
    if all(conversions.is_bool(v) for v in present):
        return SType.BOOL
    if all(conversions.is_int(v) for v in present):
        lo, hi = min(present), max(present)
        if conversions.INT32_MIN <= lo and hi <= conversions.INT32_MAX:
            return SType.INT32
        if conversions.INT64_MIN <= lo and hi <= conversions.INT64_MAX:
            return SType.INT64
        return SType.OBJ
    if all(conversions.is_float(v) or conversions.is_int(v) for v in present):
        return SType.FLOAT64
    if all(conversions.is_string(v) for v in present):
        return SType.STR32
    return SType.OBJ


class Frame:
    """
    Two-dimensional table of named columns.

    The host subclasses this type and registers the subclass, after which the
    exposed functions accept instances of it as ``frame`` arguments.
    """

    def __init__(self, data: Optional[Mapping[str, Sequence[Any]]] = None, stypes: Optional[Mapping[str, SType]] = None):
        data = data or {}
        stypes = stypes or {}
        columns = []
        for name, values in data.items():
            stype = stypes.get(name) or _detect_stype(values)
            columns.append(Column.from_list(list(values), stype))
        self._dt = DataTable(columns, list(data.keys()))

    @classmethod
    def from_datatable(cls, dt: DataTable) -> "Frame":
        frame = cls.__new__(cls)
        frame._dt = dt
        return frame

    def get_datatable(self) -> DataTable:
        return self._dt

    @property
    def ncols(self) -> int:
        return self._dt.ncols

    @property
    def nrows(self) -> int:
        return self._dt.nrows

    @property
    def shape(self):
        return (self._dt.nrows, self._dt.ncols)

    @property
    def names(self):
        return tuple(self._dt.names)

    @property
    def stypes(self):
        return tuple(col.stype for col in self._dt.columns)

    def to_dict(self) -> Dict[str, List[Any]]:
        return {name: col.to_list() for name, col in zip(self._dt.names, self._dt.columns)}

    def __repr__(self) -> str:
        return f"<Frame [{self.nrows} rows x {self.ncols} cols]>"


class RowIndexObject:
    """
    Host-visible wrapper around a column's RowIndex.
    """

    def __init__(self, rowindex: RowIndex) -> None:
        self._ri = rowindex

    @property
    def type(self) -> str:
        return self._ri.kind.name.lower()

    @property
    def nrows(self) -> int:
        return self._ri.length

    @property
    def min(self) -> Optional[int]:
        return self._ri.min

    @property
    def max(self) -> Optional[int]:
        return self._ri.max

    def to_list(self) -> List[int]:
        return self._ri.to_list()

    def __repr__(self) -> str:
        return f"RowIndex({self.type}, nrows={self.nrows})"


class BaseExpr:
    """
    Base of the expression tree. Expression evaluation belongs to the expression
    subsystem; this type only records the operation and its operands.
    """

    def __init__(self, op: int, *params: Any) -> None:
        self._op = conversions.to_int32_strict(op, ErrorManager.for_argument("Argument `op` in BaseExpr()"))
        self._params = params

    @property
    def op(self) -> int:
        return self._op

    @property
    def params(self):
        return self._params

    def __repr__(self) -> str:
        return f"BaseExpr({self._op}, {len(self._params)} params)"


def _flatten_columns(values) -> tuple:
    cols = []
    for value in values:
        if conversions.is_list_or_tuple(value):
            cols.extend(value)
        else:
            cols.append(value)
    return tuple(cols)


class by:
    """Grouping clause: ``by(col1, col2, ...)`` or ``by([col1, col2])``."""

    def __init__(self, *cols: Any) -> None:
        self.cols = _flatten_columns(cols)

    def __repr__(self) -> str:
        return f"by{self.cols!r}"


_join_schema = ArgSchema("join", ("frame",), n_required=1, description="Join clause with another Frame.")


class join:
    """Join clause: ``join(frame)``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        bundle = _join_schema.bind(args, kwargs)
        arg = bundle[0]
        self.frame = arg.to_pyobj()
        conversions.to_frame(self.frame, arg.errors, Frame)

    @property
    def joinframe(self):
        return self.frame

    def __repr__(self) -> str:
        return f"join({self.frame!r})"


_sort_schema = ArgSchema(
    "sort", ("reverse",), n_kwdonly=1, has_varargs=True, description="Sort clause over one or more columns."
)


class sort:
    """Sort clause: ``sort(col1, col2, ..., reverse=False)``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        bundle = _sort_schema.bind(args, kwargs)
        self.cols = _flatten_columns(bundle.varargs)
        reverse = bundle["reverse"]
        self.reverse = reverse.to_bool_strict() if reverse else False

    def __repr__(self) -> str:
        return f"sort{self.cols!r}"


# -----------------------------------------------------------------------------
# ONLINE LEARNING MODEL
# -----------------------------------------------------------------------------


class _HyperParam:
    """
    A validated hyper-parameter. The same conversion is used by the
    constructor (argument diagnostics) and by attribute assignment
    (attribute diagnostics).
    """

    def __init__(self, convert: Callable[[Any, ErrorManager], Any], default: Any,
                 check: Optional[Callable[[Any], bool]] = None, requirement: str = "") -> None:
        self.convert = convert
        self.default = default
        self.check = check
        self.requirement = requirement
        self.name = ""

    def __set_name__(self, owner, name: str) -> None:
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj._params[self.name]

    def __set__(self, obj, value: Any) -> None:
        label = f"`.{self.name}`"
        self.assign(obj, value, ErrorManager.for_attribute(label, attribute=self.name), label)

    def assign(self, obj, value: Any, errors: ErrorManager, label: str) -> None:
        converted = self.convert(value, errors)
        if self.check is not None and not self.check(converted):
            raise ValueOutOfRangeError(f"{label} {self.requirement}", {"attribute": self.name, "value": converted})
        obj._params[self.name] = converted


def _positive(x) -> bool:
    return x > 0


def _nonnegative(x) -> bool:
    return x >= 0


class Ftrl:
    """
    Follow-the-Regularized-Leader online learning model.

    Only the hyper-parameters are managed here; fitting and prediction are
    provided by the modelling subsystem.
    """

    alpha = _HyperParam(conversions.to_double, 0.005, _positive, "must be positive")
    beta = _HyperParam(conversions.to_double, 1.0, _nonnegative, "must be non-negative")
    lambda1 = _HyperParam(conversions.to_double, 0.0, _nonnegative, "must be non-negative")
    lambda2 = _HyperParam(conversions.to_double, 0.0, _nonnegative, "must be non-negative")
    nbins = _HyperParam(conversions.to_size_t, 10**6, _positive, "must be positive")
    nepochs = _HyperParam(conversions.to_size_t, 1)
    double_precision = _HyperParam(conversions.to_bool_strict, False)

    _PARAM_NAMES = ("alpha", "beta", "lambda1", "lambda2", "nbins", "nepochs", "double_precision")
    _schema = ArgSchema(
        "Ftrl",
        _PARAM_NAMES,
        n_kwdonly=len(_PARAM_NAMES),
        description="Create a new Ftrl model with the given hyper-parameters.",
    )

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._params: Dict[str, Any] = {}
        bundle = self._schema.bind(args, kwargs)
        for arg in bundle:
            param: _HyperParam = getattr(type(self), arg.param)
            if arg.is_undefined():
                self._params[arg.param] = param.default
            else:
                param.assign(self, arg.to_pyobj(), arg.errors, arg.name)

    @property
    def params(self) -> Dict[str, Any]:
        return dict(self._params)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._params.items())
        return f"Ftrl({inner})"
