"""hostbind: boundary layer between a dynamic host and a native frame engine

This package converts loosely typed call-time values into strictly typed
parameters, and lets the host inject its own types and callables into the
native module after the module has been imported.

Responsibilities:
    - Binding host calls (positional, keyword, missing, extra) against a schema
    - Strict, fail-fast conversion of host values
    - Precise diagnostics naming the parameter and the function
    - Slot-based registration of host-defined objects
    - Sequenced, all-or-nothing module initialization

Interactions:
    - Host code calls the functions exposed on the module object
    - Host code registers its enums, exception classes, Frame class and
      ingestion function through ``_register_function``
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - All binding and registration happens on the host's calling thread
        - No locks are taken by this package

    Error Handling:
        - Structured error hierarchy rooted at BindingError
        - Errors raised at first detection, never defaulted or retried

    Logging:
        - Module-level loggers, no handlers configured by the library
"""

from hostbind.runtime.sequencer import init_module

__version__ = "0.1.0"

__all__ = ["init_module", "__version__"]
