# hostbind/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Dict, Optional


class BindingError(Exception):
    """
    Base exception class for errors raised while binding or converting host values.

    Every error carries a ``details`` mapping with the contextual information
    (parameter name, function name, observed type, ...) that was known at the
    point of failure.
    """

    def __init__(self, message: str = "", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details: Dict[str, Any] = details or {}


class MissingArgumentError(BindingError, TypeError):
    """
    Raised when a conversion is attempted on an argument that was not supplied.
    """


class TypeMismatchError(BindingError, TypeError):
    """
    Raised when a host value's runtime type is not accepted by a strict conversion.
    """


class ValueOutOfRangeError(BindingError, ValueError):
    """
    Raised when a value has the right type but does not fit the target range:
    negative where non-negative is required, too wide for a fixed-width integer,
    or an index past the end of a container.
    """


class UnknownRegistrationSlotError(BindingError, ValueError):
    """
    Raised when the host registers an object under a slot id that does not exist.
    """


class UnregisteredSlotError(BindingError, ValueError):
    """
    Raised when an operation needs a host object from a slot that the host has
    not registered yet.
    """


class TooManyPositionalArgumentsError(BindingError, TypeError):
    """
    Raised when a call supplies more positional values than the schema accepts.
    """


class UnknownKeywordArgumentError(BindingError, TypeError):
    """
    Raised when a call supplies a keyword that the schema does not declare.
    """


class DuplicateBindingError(BindingError, TypeError):
    """
    Raised when a parameter receives both a positional and a keyword value.
    """


class SubsystemInitializationError(BindingError, RuntimeError):
    """
    Raised when one of the module's subsystem initializers fails during import.
    """
