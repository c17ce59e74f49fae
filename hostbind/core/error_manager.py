# hostbind/core/error_manager.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from enum import Enum, auto
from typing import Any, Dict, Mapping, Optional, Type

from hostbind.core.errors import BindingError, MissingArgumentError, TypeMismatchError, ValueOutOfRangeError


class ErrorKind(Enum):
    """
    Failure kinds that a strict conversion can report.
    """

    MISSING = auto()
    NOT_LIST = auto()
    NOT_TUPLE = auto()
    NOT_DICT = auto()
    NOT_STYPE = auto()
    NOT_BOOLEAN = auto()
    NOT_INTEGER = auto()
    INT_NEGATIVE = auto()
    INT_OVERFLOW = auto()
    NOT_DOUBLE = auto()
    NOT_STRING = auto()
    NOT_FRAME = auto()


ERROR_CLASSES: Dict[ErrorKind, Type[BindingError]] = {
    ErrorKind.MISSING: MissingArgumentError,
    ErrorKind.NOT_LIST: TypeMismatchError,
    ErrorKind.NOT_TUPLE: TypeMismatchError,
    ErrorKind.NOT_DICT: TypeMismatchError,
    ErrorKind.NOT_STYPE: TypeMismatchError,
    ErrorKind.NOT_BOOLEAN: TypeMismatchError,
    ErrorKind.NOT_INTEGER: TypeMismatchError,
    ErrorKind.INT_NEGATIVE: ValueOutOfRangeError,
    ErrorKind.INT_OVERFLOW: ValueOutOfRangeError,
    ErrorKind.NOT_DOUBLE: TypeMismatchError,
    ErrorKind.NOT_STRING: TypeMismatchError,
    ErrorKind.NOT_FRAME: TypeMismatchError,
}


DEFAULT_TEMPLATES: Dict[ErrorKind, str] = {
    ErrorKind.MISSING: "{name} is missing",
    ErrorKind.NOT_LIST: "{name} should be a list or tuple, instead got {type}",
    ErrorKind.NOT_TUPLE: "{name} should be a tuple, instead got {type}",
    ErrorKind.NOT_DICT: "{name} should be a dictionary, instead got {type}",
    ErrorKind.NOT_STYPE: "{name} should be an stype, instead got {type}",
    ErrorKind.NOT_BOOLEAN: "{name} should be a boolean, instead got {type}",
    ErrorKind.NOT_INTEGER: "{name} should be an integer, instead got {type}",
    ErrorKind.INT_NEGATIVE: "{name} cannot be negative",
    ErrorKind.INT_OVERFLOW: "{name} is too large for {target}",
    ErrorKind.NOT_DOUBLE: "{name} should be a float, instead got {type}",
    ErrorKind.NOT_STRING: "{name} should be a string, instead got {type}",
    ErrorKind.NOT_FRAME: "{name} should be a Frame, instead got {type}",
}


ATTRIBUTE_TEMPLATES: Dict[ErrorKind, str] = {
    ErrorKind.NOT_BOOLEAN: "{name} must be a boolean, got {type}",
    ErrorKind.NOT_INTEGER: "{name} must be an integer, got {type}",
    ErrorKind.INT_NEGATIVE: "{name} must be non-negative",
    ErrorKind.NOT_DOUBLE: "{name} must be a float, got {type}",
    ErrorKind.NOT_LIST: "{name} must be a list or tuple, got {type}",
    ErrorKind.NOT_STRING: "{name} must be a string, got {type}",
}


class ErrorManager:
    """
    Strategy producing typed diagnostic objects for each failure kind.

    The conversion routines receive an ErrorManager instead of formatting
    messages themselves, so that different binding contexts (a function
    argument, an attribute setter, ...) can phrase their diagnostics
    differently while sharing the same checks.

    The manager never raises: each ``error_*`` method returns the error object
    and the caller decides when to raise it.

    Example:
        errors = ErrorManager.for_attribute("`.alpha`")
        raise errors.error_not_double(value)
    """

    def __init__(self, label: str, templates: Optional[Mapping[ErrorKind, str]] = None, **context: Any) -> None:
        """
        :param label: How the offending value is named in messages.
        :param templates: Per-kind overrides; kinds not listed use the defaults.
        :param context: Extra entries copied into every error's ``details``.
        """
        self.label = label
        self._templates = dict(DEFAULT_TEMPLATES)
        if templates:
            self._templates.update(templates)
        self._context = context

    @classmethod
    def for_argument(cls, label: str, **context: Any) -> "ErrorManager":
        return cls(label, **context)

    @classmethod
    def for_attribute(cls, label: str, **context: Any) -> "ErrorManager":
        return cls(label, ATTRIBUTE_TEMPLATES, **context)

    def make_error(self, kind: ErrorKind, value: Any = None, **extra: Any) -> BindingError:
        """
        Build the error object for ``kind``.

        :param kind: The failure kind.
        :param value: The offending host value, if there is one.
        :param extra: Additional template fields (e.g. ``target`` for overflow).
        """
        observed = type(value)
        fields = {"name": self.label, "type": observed}
        fields.update(extra)
        message = self._templates[kind].format(**fields)
        details = dict(self._context)
        details.update(extra)
        details["kind"] = kind.name
        if kind is not ErrorKind.MISSING:
            details["observed_type"] = observed.__name__
        return ERROR_CLASSES[kind](message, details)

    def error_missing(self) -> BindingError:
        return self.make_error(ErrorKind.MISSING)

    def error_not_list(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_LIST, value)

    def error_not_tuple(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_TUPLE, value)

    def error_not_dict(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_DICT, value)

    def error_not_stype(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_STYPE, value)

    def error_not_boolean(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_BOOLEAN, value)

    def error_not_integer(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_INTEGER, value)

    def error_int_negative(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.INT_NEGATIVE, value)

    def error_int_overflow(self, value: Any, target: str) -> BindingError:
        return self.make_error(ErrorKind.INT_OVERFLOW, value, target=target)

    def error_not_double(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_DOUBLE, value)

    def error_not_string(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_STRING, value)

    def error_not_frame(self, value: Any) -> BindingError:
        return self.make_error(ErrorKind.NOT_FRAME, value)
