# hostbind/runtime/module.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import logging
import types
from typing import Any, Dict, Optional

from hostbind.core.bundle import ArgBundle, ArgSchema
from hostbind.core.errors import BindingError
from hostbind.interfaces.protocols import NativeCallable
from hostbind.runtime.config import BuildConfig
from hostbind.runtime.exceptions import ExceptionTable
from hostbind.runtime.options import ProcessOptions
from hostbind.runtime.registry import Registry

logger = logging.getLogger(__name__)


class ModuleContext:
    """
    Process-scoped state owned by one module object: the registration table,
    the exception translation table, override options and build flags.

    Consumers receive the context by reference (exposed functions through their
    ArgBundle) instead of reaching for module-level globals.
    """

    def __init__(self, config: Optional[BuildConfig] = None) -> None:
        self.config = config or BuildConfig()
        self.exceptions = ExceptionTable()
        self.registry = Registry(self.exceptions)
        self.options = ProcessOptions()


class NativeFunction:
    """
    An exposed entry point: binds the host call against its schema, runs the
    body, and translates binding errors for the host.
    """

    def __init__(self, body: NativeCallable, schema: ArgSchema, context: ModuleContext) -> None:
        self._body = body
        self.schema = schema
        self._context = context
        self.__name__ = schema.name
        self.__qualname__ = schema.name
        self.__doc__ = schema.doc

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            bundle: ArgBundle = self.schema.bind(args, kwargs, self._context)
            return self._body(bundle)
        except BindingError as e:
            translated = self._context.exceptions.translate(e)
            if translated is e:
                raise
            raise translated from e

    def __repr__(self) -> str:
        return f"<native function {self.schema.name}>"


class ExtensionModule(types.ModuleType):
    """
    The module object handed to the host loader.

    Functions, types and constants are added during initialization; nothing is
    added after the sequencer reaches READY.
    """

    def __init__(self, name: str, context: ModuleContext, doc: Optional[str] = None) -> None:
        super().__init__(name, doc)
        self._context = context
        self._methods: Dict[str, NativeFunction] = {}
        self._types: Dict[str, type] = {}

    @property
    def context(self) -> ModuleContext:
        return self._context

    @property
    def methods(self) -> Dict[str, NativeFunction]:
        return dict(self._methods)

    @property
    def exposed_types(self) -> Dict[str, type]:
        return dict(self._types)

    def add_function(self, body: NativeCallable, schema: ArgSchema) -> NativeFunction:
        if schema.name in self._methods:
            raise ValueError(f"Function {schema.name}() is already defined in {self.__name__}")
        fn = NativeFunction(body, schema, self._context)
        self._methods[schema.name] = fn
        setattr(self, schema.name, fn)
        return fn

    def add_type(self, cls: type, name: Optional[str] = None) -> None:
        name = name or cls.__name__
        if name in self._types:
            raise ValueError(f"Type {name} is already defined in {self.__name__}")
        self._types[name] = cls
        setattr(self, name, cls)

    def add_constant(self, name: str, value: Any) -> None:
        setattr(self, name, value)
