# hostbind/runtime/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import logging
from enum import IntEnum
from typing import Any, Callable, Dict, Optional

from hostbind.core.errors import UnknownRegistrationSlotError
from hostbind.core.types import LType, SType, TypeTable
from hostbind.runtime.exceptions import ExceptionTable

logger = logging.getLogger(__name__)


class Slot(IntEnum):
    """
    Numbered injection points through which the host hands objects to the
    native layer after import.
    """

    STYPE = 2  # host `stype` enum
    LTYPE = 3  # host `ltype` enum
    TYPE_ERROR = 4  # host replacement for TypeError
    VALUE_ERROR = 5  # host replacement for ValueError
    WARNING = 6  # host warning class
    FRAME_TYPE = 7  # host Frame class
    FREAD = 8  # host ingestion entry point


class Registry:
    """
    Fixed slot table populated by the host once the module has been imported.

    The native layer needs host-defined objects (enums, exception classes, the
    Frame class, the ingestion function) that cannot exist before the module
    itself is importable. The host therefore calls back with
    ``register(slot, obj)`` for each of them.

    Lifecycle:
        Written during the host's import phase, read-only afterwards.
        Re-registering a slot overwrites it (host-side reload).
        Reading a slot that was never written returns None; consumers must not
        rely on a slot before the host has registered it.
    """

    def __init__(self, exceptions: Optional[ExceptionTable] = None) -> None:
        self.exceptions = exceptions if exceptions is not None else ExceptionTable()
        self.stypes: TypeTable[SType] = TypeTable(SType)
        self.ltypes: TypeTable[LType] = TypeTable(LType)
        self._slots: Dict[Slot, Any] = {}
        self._installers: Dict[Slot, Callable[[Any], None]] = {
            Slot.STYPE: self.stypes.install,
            Slot.LTYPE: self.ltypes.install,
            Slot.TYPE_ERROR: lambda obj: self.exceptions.replace(TypeError, obj),
            Slot.VALUE_ERROR: lambda obj: self.exceptions.replace(ValueError, obj),
            Slot.WARNING: self.exceptions.replace_warning,
        }

    @staticmethod
    def resolve(n: int) -> Slot:
        """
        :raises UnknownRegistrationSlotError: If ``n`` is not a known slot id.
        """
        try:
            return Slot(n)
        except ValueError:
            raise UnknownRegistrationSlotError(f"Unknown index: {n}", {"slot": n}) from None

    def register(self, n: int, obj: Any) -> None:
        """
        Store ``obj`` in slot ``n`` and run the slot's install hook, if any.

        :param n: Slot id.
        :param obj: The host object.
        :raises UnknownRegistrationSlotError: If ``n`` is not a known slot id.
        """
        slot = self.resolve(n)
        installer = self._installers.get(slot)
        if installer is not None:
            installer(obj)
        if slot in self._slots:
            logger.debug("Slot %s re-registered", slot.name)
        self._slots[slot] = obj
        logger.debug("Registered %r in slot %s", obj, slot.name)

    def get(self, slot: int) -> Any:
        return self._slots.get(self.resolve(slot))

    def is_registered(self, slot: int) -> bool:
        return self.resolve(slot) in self._slots

    @property
    def frame_type(self) -> Optional[type]:
        return self._slots.get(Slot.FRAME_TYPE)

    @property
    def fread_fn(self) -> Optional[Callable[..., Any]]:
        return self._slots.get(Slot.FREAD)
