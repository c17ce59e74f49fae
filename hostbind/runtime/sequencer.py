# hostbind/runtime/sequencer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import logging
from enum import Enum, auto
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from hostbind.core import errors as error_classes
from hostbind.core.errors import BindingError, SubsystemInitializationError
from hostbind.frame.pytypes import BaseExpr, Frame, Ftrl, RowIndexObject, by, join, sort
from hostbind.interfaces.protocols import Subsystem
from hostbind.internal import init_methods as default_init_methods
from hostbind.runtime.config import BuildConfig
from hostbind.runtime.module import ExtensionModule, ModuleContext
from hostbind.runtime.subsystems import default_subsystems, writer_constants

logger = logging.getLogger(__name__)

MODULE_NAME = "hostbind._native"

EXPOSED_TYPES: Tuple[Tuple[str, type], ...] = (
    ("Frame", Frame),
    ("Ftrl", Ftrl),
    ("base_expr", BaseExpr),
    ("RowIndex", RowIndexObject),
    ("by", by),
    ("join", join),
    ("sort", sort),
)

EXPOSED_ERRORS = (
    "BindingError",
    "MissingArgumentError",
    "TypeMismatchError",
    "ValueOutOfRangeError",
    "UnknownRegistrationSlotError",
    "UnregisteredSlotError",
    "TooManyPositionalArgumentsError",
    "UnknownKeywordArgumentError",
    "DuplicateBindingError",
    "SubsystemInitializationError",
)


class InitStatus(Enum):
    """Progress of module initialization.

    Transitions are strictly sequential; any failure leads to FAILED.
    """

    UNSTARTED = auto()  # Nothing done yet
    CONSTANTS_INSTALLED = auto()  # Shared constant tables in place
    EXCEPTIONS_INSTALLED = auto()  # Error classes and translation table in place
    SUBSYSTEMS_INITIALIZING = auto()  # Running subsystem static initializers
    TYPES_INSTALLED = auto()  # Type objects exposed
    READY = auto()  # Module handed to the host
    FAILED = auto()  # Module discarded


class ModuleInitializer:
    """
    Builds the module object exposed to the host.

    Steps, in order:
    1. install the shared writer constants
    2. install the exception classes and reset the translation table
    3. reset process-wide overrides, add the exported functions, and run every
       subsystem's static initializer
    4. install the exposed type objects

    The initializer runs once. If any step fails, the partially built module is
    dropped and no module is returned; the host never sees a half-built module.
    """

    def __init__(
        self,
        name: str = MODULE_NAME,
        config: Optional[BuildConfig] = None,
        subsystems: Optional[Sequence[Subsystem]] = None,
        exposed_types: Iterable[Tuple[str, type]] = EXPOSED_TYPES,
        init_methods: Optional[Callable[[ExtensionModule], None]] = None,
    ) -> None:
        self._name = name
        self._config = config
        self._subsystems: List[Subsystem] = list(subsystems) if subsystems is not None else default_subsystems()
        self._exposed_types = tuple(exposed_types)
        self._init_methods = init_methods
        self._status = InitStatus.UNSTARTED

    @property
    def status(self) -> InitStatus:
        return self._status

    def initialize(self) -> ExtensionModule:
        """
        Run every step and return the finished module.

        :raises ValueError: If the initializer has already run.
        :raises ImportError: If any step fails; the original error is chained.
        """
        if self._status != InitStatus.UNSTARTED:
            raise ValueError(f"Module initializer already ran (status {self._status.name})")

        try:
            module = self._build()
        except Exception as e:
            failed_at = self._status
            self._status = InitStatus.FAILED
            logger.exception("Initialization of %s failed after %s", self._name, failed_at.name)
            raise ImportError(f"Failed to initialize {self._name}: {e}", name=self._name) from e

        self._status = InitStatus.READY
        logger.debug("Module %s is ready", self._name)
        return module

    def run(self) -> Optional[ExtensionModule]:
        """Like :meth:`initialize`, but returns None instead of raising ImportError."""
        try:
            return self.initialize()
        except ImportError:
            return None

    def _build(self) -> ExtensionModule:
        context = ModuleContext(self._config)
        module = ExtensionModule(self._name, context)

        module.add_constant("WRITER_CONSTANTS", writer_constants())
        self._advance(InitStatus.CONSTANTS_INSTALLED)

        context.exceptions.reset()
        for error_name in EXPOSED_ERRORS:
            module.add_type(getattr(error_classes, error_name))
        self._advance(InitStatus.EXCEPTIONS_INSTALLED)

        context.options.reset()
        self._advance(InitStatus.SUBSYSTEMS_INITIALIZING)
        (self._init_methods or default_init_methods)(module)
        for subsystem in self._subsystems:
            self._init_subsystem(subsystem, module)

        for type_name, cls in self._exposed_types:
            module.add_type(cls, type_name)
        self._advance(InitStatus.TYPES_INSTALLED)
        return module

    def _init_subsystem(self, subsystem: Subsystem, module: ExtensionModule) -> None:
        name = getattr(subsystem, "name", type(subsystem).__name__)
        try:
            ok = subsystem.static_init(module)
        except BindingError:
            raise
        except Exception as e:
            raise SubsystemInitializationError(
                f"Subsystem {name} failed to initialize: {e}", {"subsystem": name}
            ) from e
        if not ok:
            raise SubsystemInitializationError(f"Subsystem {name} failed to initialize", {"subsystem": name})
        logger.debug("Subsystem %s initialized", name)

    def _advance(self, status: InitStatus) -> None:
        self._status = status
        logger.debug("%s: %s", self._name, status.name)


def init_module(config: Optional[BuildConfig] = None, **kwargs: Any) -> Optional[ExtensionModule]:
    """
    Build a fresh module object, or return None if any initialization step
    fails. See :class:`ModuleInitializer`.
    """
    return ModuleInitializer(config=config, **kwargs).run()
