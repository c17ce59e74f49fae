# hostbind/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Subsystem(Protocol):
    """
    A subsystem whose process-wide static state is set up during import.

    Methods:
        static_init(module): Install the subsystem's objects into the module.
            Returns False (or raises) when initialization fails.

    Runtime Invariants:
    - static_init is called exactly once per module, in sequencer order.
    - Subsystems do not depend on one another's static state.
    """

    name: str

    def static_init(self, module: Any) -> bool:
        """Initialize the subsystem's static state."""
        ...


@runtime_checkable
class NativeCallable(Protocol):
    """
    The body of an exposed function. Receives the bound ArgBundle of the call
    and returns the value handed back to the host.
    """

    def __call__(self, args: Any) -> Any:
        ...
