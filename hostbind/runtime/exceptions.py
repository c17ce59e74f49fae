# hostbind/runtime/exceptions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import logging
import warnings
from typing import Dict, Optional, Type

logger = logging.getLogger(__name__)

# Builtin families whose translation target the host may replace.
TRANSLATED_FAMILIES = (TypeError, ValueError)


class ExceptionTable:
    """
    Translation table applied to errors leaving an exposed function.

    By default errors pass through unchanged. Once the host registers its own
    exception class for a builtin family, every error of that family is
    re-raised as the host class with the same message, chained from the
    original. Warnings are issued with the host's warning class once one is
    registered.
    """

    def __init__(self) -> None:
        self._targets: Dict[Type[BaseException], Optional[Type[BaseException]]] = {
            family: None for family in TRANSLATED_FAMILIES
        }
        self._warning: Type[Warning] = UserWarning

    @property
    def warning_class(self) -> Type[Warning]:
        return self._warning

    def target_for(self, family: Type[BaseException]) -> Optional[Type[BaseException]]:
        return self._targets.get(family)

    def replace(self, family: Type[BaseException], target: Type[BaseException]) -> None:
        """
        Replace the host-visible class for ``family``.

        :raises KeyError: If ``family`` is not one of TRANSLATED_FAMILIES.
        :raises TypeError: If ``target`` is not an exception class.
        """
        if family not in self._targets:
            raise KeyError(f"{family.__name__} cannot be translated")
        if not (isinstance(target, type) and issubclass(target, Exception)):
            raise TypeError(f"Expected an exception class, got {target!r}")
        self._targets[family] = target
        logger.debug("%s errors will be raised as %s", family.__name__, target.__qualname__)

    def replace_warning(self, target: Type[Warning]) -> None:
        if not (isinstance(target, type) and issubclass(target, Warning)):
            raise TypeError(f"Expected a warning class, got {target!r}")
        self._warning = target

    def translate(self, error: BaseException) -> BaseException:
        """
        Return the exception the host should see for ``error``.
        """
        for family in TRANSLATED_FAMILIES:
            target = self._targets[family]
            if target is not None and isinstance(error, family) and not isinstance(error, target):
                translated = target(str(error))
                translated.__cause__ = error
                return translated
        return error

    def warn(self, message: str, stacklevel: int = 2) -> None:
        warnings.warn(message, self._warning, stacklevel=stacklevel + 1)

    def reset(self) -> None:
        for family in TRANSLATED_FAMILIES:
            self._targets[family] = None
        self._warning = UserWarning
