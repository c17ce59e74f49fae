"""
Runtime package: the module object, its registration table and its initialization.

Architecture:
- ModuleContext owns the registry, the exception translation table, the
  process-wide options and the build flags
- NativeFunction wraps an exposed function body with its ArgSchema
- ModuleInitializer builds the module object step by step at import time
"""

from .config import BuildConfig
from .exceptions import ExceptionTable
from .options import ProcessOptions
from .registry import Registry, Slot
from .module import ExtensionModule, ModuleContext, NativeFunction
from .sequencer import InitStatus, ModuleInitializer, init_module

__all__ = [
    "BuildConfig",
    "ExceptionTable",
    "ProcessOptions",
    "Registry",
    "Slot",
    "ExtensionModule",
    "ModuleContext",
    "NativeFunction",
    "InitStatus",
    "ModuleInitializer",
    "init_module",
]
