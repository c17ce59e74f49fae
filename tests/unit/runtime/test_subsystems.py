# tests/unit/runtime/test_subsystems.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import pytest

from hostbind.interfaces.protocols import Subsystem
from hostbind.runtime.module import ExtensionModule
from hostbind.runtime.subsystems import EncodingSubsystem, default_subsystems, writer_constants


@pytest.fixture
def bare_module(context):
    return ExtensionModule("bare", context)


def test_writer_constants():
    constants = writer_constants()
    assert constants["DIGIT_PAIRS"][7] == "07"
    assert constants["POWERS_OF_TEN"][-1] == 10**18
    with pytest.raises(TypeError):
        constants["HEX_DIGITS"] = "x"


def test_default_subsystems_follow_protocol(bare_module):
    subsystems = default_subsystems()
    assert [s.name for s in subsystems] == ["column", "rowindex", "encodings", "jay"]
    for subsystem in subsystems:
        assert isinstance(subsystem, Subsystem)
        assert subsystem.static_init(bare_module) is True


def test_published_objects(bare_module):
    for subsystem in default_subsystems():
        subsystem.static_init(bare_module)
    assert bare_module.STYPE_ELEMSIZES["INT32"] == 4
    assert len(bare_module.EMPTY_ROWINDEX) == 0
    assert bare_module.ENCODINGS["latin-1"] == "iso8859-1"
    assert bare_module.JAY_MAGIC == b"JAY1"
    assert "Column" in bare_module.exposed_types


def test_unknown_encoding_fails(bare_module):
    subsystem = EncodingSubsystem()
    subsystem.ENCODINGS = ("utf-8", "no-such-codec")
    assert subsystem.static_init(bare_module) is False
