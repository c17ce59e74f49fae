# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from enum import Enum

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "integration: mark test as an end-to-end bootstrap test")


class HostSType(Enum):
    """Host-side counterpart of the native SType enum."""

    void = 0
    bool8 = 1
    int8 = 2
    int16 = 3
    int32 = 4
    int64 = 5
    float32 = 6
    float64 = 7
    str32 = 11
    str64 = 12
    obj64 = 21


class HostLType(Enum):
    """Host-side counterpart of the native LType enum."""

    mu = 0
    bool = 1
    int = 2
    real = 3
    str = 5
    obj = 7


class HostTypeError(TypeError):
    """Host replacement for TypeError."""


class HostValueError(ValueError):
    """Host replacement for ValueError."""


class HostWarning(UserWarning):
    """Host warning class."""


@pytest.fixture
def host_stype():
    return HostSType


@pytest.fixture
def host_ltype():
    return HostLType


@pytest.fixture
def host_errors():
    """Host exception classes as (TypeError, ValueError, Warning) replacements."""
    return HostTypeError, HostValueError, HostWarning


@pytest.fixture
def context():
    """A fresh module context with nothing registered."""
    from hostbind.runtime.module import ModuleContext

    return ModuleContext()


@pytest.fixture
def frame_type():
    """A host-side Frame subclass, as the host package would define it."""
    from hostbind.frame.pytypes import Frame

    class HostFrame(Frame):
        pass

    return HostFrame


@pytest.fixture
def registered_context(context, frame_type):
    """A module context after the host has registered its enums and Frame class."""
    from hostbind.runtime.registry import Slot

    context.registry.register(Slot.STYPE, HostSType)
    context.registry.register(Slot.LTYPE, HostLType)
    context.registry.register(Slot.FRAME_TYPE, frame_type)
    return context


@pytest.fixture
def sample_frame(frame_type):
    """A three-column frame of the registered host Frame type."""
    return frame_type({"A": [1, 2, 3], "B": [0.5, 1.5, 2.5], "C": ["x", "yy", "zzz"]})


@pytest.fixture
def make_schema():
    """Factory for ArgSchema objects with test-friendly defaults."""
    from hostbind.core.bundle import ArgSchema

    def _factory(*names, name="fn", **kwargs):
        return ArgSchema(name, names, **kwargs)

    return _factory


@pytest.fixture
def bind(context):
    """Bind a call payload against a schema within the shared context."""

    def _bind(schema, *args, **kwargs):
        return schema.bind(args, kwargs, context)

    return _bind


@pytest.fixture
def module():
    """A freshly initialized module object."""
    from hostbind.runtime.config import BuildConfig
    from hostbind.runtime.sequencer import init_module

    return init_module(BuildConfig(debug=False, parallel=True))
