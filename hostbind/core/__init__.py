"""
Core package: turning loosely typed host values into strictly typed parameters.

Architecture:
- Error kinds and the exception hierarchy
- ErrorManager strategy that phrases diagnostics per binding context
- Non-throwing predicates and strict conversions
- Arg (one parameter of a call) and ArgSchema/ArgBundle (a whole call)

Cross-cutting:
- Conversions never coerce across domains
- Errors are raised at first detection and carry parameter and function names
"""

# Import order matters to avoid circular dependencies
from .errors import (
    BindingError,
    DuplicateBindingError,
    MissingArgumentError,
    SubsystemInitializationError,
    TooManyPositionalArgumentsError,
    TypeMismatchError,
    UnknownKeywordArgumentError,
    UnknownRegistrationSlotError,
    UnregisteredSlotError,
    ValueOutOfRangeError,
)
from .error_manager import ErrorKind, ErrorManager
from .types import LType, SType, TypeTable
from .args import UNDEFINED, Arg
from .bundle import ArgBundle, ArgSchema

__all__ = [
    "BindingError",
    "DuplicateBindingError",
    "MissingArgumentError",
    "SubsystemInitializationError",
    "TooManyPositionalArgumentsError",
    "TypeMismatchError",
    "UnknownKeywordArgumentError",
    "UnknownRegistrationSlotError",
    "UnregisteredSlotError",
    "ValueOutOfRangeError",
    "ErrorKind",
    "ErrorManager",
    "LType",
    "SType",
    "TypeTable",
    "UNDEFINED",
    "Arg",
    "ArgBundle",
    "ArgSchema",
]
