# hostbind/core/args.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from hostbind.core import conversions
from hostbind.core.error_manager import ErrorManager
from hostbind.core.types import SType, TypeTable

if TYPE_CHECKING:
    from hostbind.core.bundle import ArgBundle


class _Undefined:
    """Marker for an argument that received no value in the current call."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<undefined>"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


class Arg:
    """
    A single parameter of a bound call: the host value (or UNDEFINED) plus
    enough context to name the parameter in diagnostics.

    Predicates (``is_*``) never raise. Conversions (``to_*``) raise
    MissingArgumentError when the argument is undefined, and otherwise apply
    the strict rules of :mod:`hostbind.core.conversions`.

    Runtime Invariants:
    - ``pos`` is smaller than the arity of the parent bundle's schema.
    - The host value is only valid for the duration of the call that
      produced the bundle; an Arg must not be retained past that call.
    """

    __slots__ = ("pos", "_parent", "_value", "_cached_name", "_errors")

    def __init__(self, pos: int, parent: "ArgBundle", value: Any = UNDEFINED) -> None:
        self.pos = pos
        self._parent = parent
        self._value = value
        self._cached_name: Optional[str] = None
        self._errors: Optional[ErrorManager] = None

    @property
    def param(self) -> str:
        """The declared parameter name."""
        return self._parent.schema.arg_names[self.pos]

    @property
    def name(self) -> str:
        """Display name used in error messages."""
        if self._cached_name is None:
            self._cached_name = f"Argument `{self.param}` in {self._parent.name}()"
        return self._cached_name

    @property
    def is_required(self) -> bool:
        return self.pos < self._parent.schema.n_required

    @property
    def errors(self) -> ErrorManager:
        if self._errors is None:
            self._errors = ErrorManager.for_argument(self.name, param=self.param, function=self._parent.name)
        return self._errors

    def __bool__(self) -> bool:
        return self._value is not UNDEFINED

    def __index__(self) -> int:
        return self.to_int64_strict()

    def __int__(self) -> int:
        return self.to_int64_strict()

    def __repr__(self) -> str:
        return f"Arg({self.param}={self._value!r})"

    # -------------------------------------------------------------------------
    # Type checks
    # -------------------------------------------------------------------------

    def is_undefined(self) -> bool:
        return self._value is UNDEFINED

    def is_none(self) -> bool:
        return self._value is None

    def is_none_or_undefined(self) -> bool:
        return self._value is None or self._value is UNDEFINED

    def is_bool(self) -> bool:
        return conversions.is_bool(self._value)

    def is_int(self) -> bool:
        return conversions.is_int(self._value)

    def is_float(self) -> bool:
        return conversions.is_float(self._value)

    def is_string(self) -> bool:
        return conversions.is_string(self._value)

    def is_bytes(self) -> bool:
        return conversions.is_bytes(self._value)

    def is_list(self) -> bool:
        return conversions.is_list(self._value)

    def is_tuple(self) -> bool:
        return conversions.is_tuple(self._value)

    def is_list_or_tuple(self) -> bool:
        return conversions.is_list_or_tuple(self._value)

    def is_dict(self) -> bool:
        return conversions.is_dict(self._value)

    def is_range(self) -> bool:
        return conversions.is_range(self._value)

    def is_ellipsis(self) -> bool:
        return conversions.is_ellipsis(self._value)

    def is_numpy_array(self) -> bool:
        return conversions.is_numpy_array(self._value)

    def is_pandas_frame(self) -> bool:
        return conversions.is_pandas_frame(self._value)

    def is_pandas_series(self) -> bool:
        return conversions.is_pandas_series(self._value)

    def is_frame(self) -> bool:
        return conversions.is_frame(self._value, self._frame_type)

    def is_stype(self) -> bool:
        return conversions.is_stype(self._value, self._stypes)

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def to_bool_strict(self) -> bool:
        self._check_missing()
        return conversions.to_bool_strict(self._value, self.errors)

    def to_int32_strict(self) -> int:
        self._check_missing()
        return conversions.to_int32_strict(self._value, self.errors)

    def to_int64_strict(self) -> int:
        self._check_missing()
        return conversions.to_int64_strict(self._value, self.errors)

    def to_size_t(self) -> int:
        self._check_missing()
        return conversions.to_size_t(self._value, self.errors)

    def to_double(self) -> float:
        self._check_missing()
        return conversions.to_double(self._value, self.errors)

    def to_string(self) -> str:
        self._check_missing()
        return conversions.to_string(self._value, self.errors)

    def to_stringlist(self) -> List[str]:
        self._check_missing()
        return conversions.to_stringlist(self._value, self.errors)

    def to_pylist(self) -> List[Any]:
        self._check_missing()
        return conversions.to_pylist(self._value, self.errors)

    def to_otuple(self) -> Tuple[Any, ...]:
        self._check_missing()
        return conversions.to_otuple(self._value, self.errors)

    def to_pydict(self) -> Dict[Any, Any]:
        self._check_missing()
        return conversions.to_pydict(self._value, self.errors)

    def to_stype(self, errors: Optional[ErrorManager] = None) -> SType:
        """
        :param errors: Alternative error manager, e.g. when the stype is one
            element of a larger argument and the message should say so.
        """
        self._check_missing()
        return conversions.to_stype(self._value, errors or self.errors, self._stypes)

    def to_frame(self) -> Any:
        self._check_missing()
        return conversions.to_frame(self._value, self.errors, self._frame_type)

    def to_pyobj(self) -> Any:
        """The raw host value, without any checks beyond presence."""
        self._check_missing()
        return self._value

    # -------------------------------------------------------------------------

    @property
    def _registry(self):
        # bundles bound without a module context have no registrations
        context = self._parent.context
        return context.registry if context is not None else None

    @property
    def _frame_type(self) -> Optional[type]:
        registry = self._registry
        return registry.frame_type if registry is not None else None

    @property
    def _stypes(self) -> Optional[TypeTable]:
        registry = self._registry
        return registry.stypes if registry is not None else None

    def _check_missing(self) -> None:
        if self._value is UNDEFINED:
            raise self.errors.error_missing()
