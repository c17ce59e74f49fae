# hostbind/runtime/subsystems.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Static initializers run by the module sequencer.

Each subsystem is independent of the others: it installs its own objects into
the module and reports success. The storage, encoding and binary-format
engines themselves live outside this package; only the objects they publish
at import time are set up here.
"""
import codecs
import logging
import struct
from types import MappingProxyType
from typing import Any, List

from hostbind.core.types import SType
from hostbind.frame.storage import Column, DataTable, RowIndex, RowIndexKind

logger = logging.getLogger(__name__)


def writer_constants() -> MappingProxyType:
    """
    Lookup tables shared by the text writers: two-digit pairs for fast integer
    formatting, powers of ten up to the int64 range and hex digits.
    """
    return MappingProxyType(
        {
            "DIGIT_PAIRS": tuple(f"{i:02d}" for i in range(100)),
            "POWERS_OF_TEN": tuple(10**i for i in range(19)),
            "HEX_DIGITS": "0123456789ABCDEF",
            "QUOTING_STYLES": ("minimal", "all", "nonnumeric", "none"),
        }
    )


class ColumnSubsystem:
    """Publishes the column storage types and the stype element sizes."""

    name = "column"

    def static_init(self, module: Any) -> bool:
        module.add_type(Column)
        module.add_type(DataTable)
        module.add_constant("STYPE_ELEMSIZES", MappingProxyType({st.name: st.elemsize for st in SType}))
        return True


class RowIndexSubsystem:
    """Publishes the row-index kinds."""

    name = "rowindex"

    def static_init(self, module: Any) -> bool:
        module.add_constant("RowIndexKind", RowIndexKind)
        module.add_constant("EMPTY_ROWINDEX", RowIndex.from_slice(0, 0))
        return True


class EncodingSubsystem:
    """Resolves the text encodings accepted by readers and writers."""

    name = "encodings"
    ENCODINGS = ("utf-8", "latin-1", "cp1252", "utf-16")

    def static_init(self, module: Any) -> bool:
        table = {}
        for name in self.ENCODINGS:
            try:
                table[name] = codecs.lookup(name).name
            except LookupError:
                logger.error("Encoding %s is not available", name)
                return False
        module.add_constant("ENCODINGS", MappingProxyType(table))
        return True


class JayReaderSubsystem:
    """Sets up the header layout of the binary frame format."""

    name = "jay"
    MAGIC = b"JAY1"
    # magic, padding, flatbuffer offset
    HEADER = struct.Struct("<4s4sQ")

    def static_init(self, module: Any) -> bool:
        if self.HEADER.size != 16:
            logger.error("Unexpected jay header size %d", self.HEADER.size)
            return False
        module.add_constant("JAY_MAGIC", self.MAGIC)
        module.add_constant("JAY_HEADER", self.HEADER)
        return True


def default_subsystems() -> List[Any]:
    return [ColumnSubsystem(), RowIndexSubsystem(), EncodingSubsystem(), JayReaderSubsystem()]
