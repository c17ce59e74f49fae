# hostbind/internal.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Functions exported by the module for use by the host package itself.
"""
import ctypes
from typing import Any, Optional, Tuple

from hostbind.core.bundle import ArgBundle, ArgSchema
from hostbind.core.errors import UnregisteredSlotError, ValueOutOfRangeError
from hostbind.core.types import SType
from hostbind.frame.pytypes import RowIndexObject
from hostbind.frame.storage import DataTable
from hostbind.runtime.registry import Slot


def _unpack_args(args: ArgBundle) -> Tuple[DataTable, int]:
    dt = args[0].to_frame()
    col = args[1].to_size_t()
    if col >= dt.ncols:
        raise ValueOutOfRangeError(
            f"Index out of bounds: column {col} does not exist in a frame with {dt.ncols} columns",
            {"function": args.name, "param": args[1].param, "index": col, "ncols": dt.ncols},
        )
    return dt, col


args_frame_column_rowindex = ArgSchema(
    "frame_column_rowindex",
    ("frame", "i"),
    n_required=2,
    description="""
    Return the RowIndex of the `i`th column of the `frame`, or None if that column
    has no row index.
    """,
)


def frame_column_rowindex(args: ArgBundle) -> Optional[RowIndexObject]:
    dt, col = _unpack_args(args)
    ri = dt.columns[col].rowindex
    return RowIndexObject(ri) if ri is not None else None


args_frame_column_data_r = ArgSchema(
    "frame_column_data_r",
    ("frame", "i"),
    n_required=2,
    description="""
    Return C pointer to the main data array of the column `frame[i]`. The pointer
    is returned as a `ctypes.c_void_p` object.
    """,
)


def frame_column_data_r(args: ArgBundle) -> ctypes.c_void_p:
    dt, col = _unpack_args(args)
    return ctypes.c_void_p(dt.columns[col].data())


args_in_debug_mode = ArgSchema(
    "in_debug_mode",
    description="Return True if the module was built in debug mode.",
)


def in_debug_mode(args: ArgBundle) -> bool:
    return args.context.config.debug


args_has_omp_support = ArgSchema(
    "has_omp_support",
    description="""
    Return True if the module was built with support for parallel execution, and
    False otherwise. Without it all operations run in single-threaded mode.
    """,
)


def has_omp_support(args: ArgBundle) -> bool:
    return args.context.config.parallel


args__register_function = ArgSchema(
    "_register_function",
    ("n", "fn"),
    n_required=2,
    description="""
    Register host object `fn` in slot `n`. Called by the host package once the
    module has been imported.
    """,
)


def _register_function(args: ArgBundle) -> None:
    n = args[0].to_size_t()
    fn = args[1].to_pyobj()
    args.context.registry.register(n, fn)


args_ingest = ArgSchema(
    "ingest",
    ("source",),
    n_required=1,
    has_varkwds=True,
    description="""
    Read `source` into a Frame using the registered ingestion function. Extra
    keyword arguments are forwarded unchanged.
    """,
)


def ingest(args: ArgBundle) -> Any:
    context = args.context
    fread = context.registry.fread_fn
    if fread is None:
        raise UnregisteredSlotError(
            "No ingestion function has been registered",
            {"function": args.name, "slot": int(Slot.FREAD)},
        )
    kwargs = args.varkwds
    force = context.options.force_stype
    if force is not SType.VOID:
        if "stype" in kwargs:
            context.exceptions.warn(
                f"Explicit stype={kwargs['stype']!r} overrides the forced stype {force.name}", stacklevel=3
            )
        else:
            kwargs["stype"] = context.registry.stypes.to_host(force)
    return fread(args[0].to_pyobj(), **kwargs)


args__force_stype = ArgSchema(
    "_force_stype",
    ("stype",),
    description="""
    Force every subsequently ingested column to `stype`. Call without arguments
    (or with None) to restore automatic type detection.
    """,
)


def _force_stype(args: ArgBundle) -> None:
    arg = args[0]
    options = args.context.options
    options.force_stype = SType.VOID if arg.is_none_or_undefined() else arg.to_stype()


def init_methods(module) -> None:
    module.add_function(_register_function, args__register_function)
    module.add_function(has_omp_support, args_has_omp_support)
    module.add_function(in_debug_mode, args_in_debug_mode)
    module.add_function(frame_column_rowindex, args_frame_column_rowindex)
    module.add_function(frame_column_data_r, args_frame_column_data_r)
    module.add_function(ingest, args_ingest)
    module.add_function(_force_stype, args__force_stype)
