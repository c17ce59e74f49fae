# tests/unit/core/test_args.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Unit tests for hostbind.core.args module."""
import operator

import pytest

from hostbind.core.args import UNDEFINED
from hostbind.core.errors import MissingArgumentError, TypeMismatchError, ValueOutOfRangeError
from hostbind.core.types import SType


@pytest.fixture
def schema(make_schema):
    return make_schema("frame", "i", "flag", name="frame_column_rowindex", n_required=2)


class TestUndefined:
    def test_singleton_and_falsy(self):
        assert type(UNDEFINED)() is UNDEFINED
        assert not UNDEFINED
        assert repr(UNDEFINED) == "<undefined>"

    def test_undefined_predicates(self, schema, bind):
        arg = bind(schema)[2]
        assert arg.is_undefined()
        assert arg.is_none_or_undefined()
        assert not arg.is_none()
        assert not arg
        for predicate in (arg.is_int, arg.is_bool, arg.is_string, arg.is_frame, arg.is_stype):
            assert predicate() is False

    @pytest.mark.parametrize(
        "method", ["to_bool_strict", "to_int32_strict", "to_int64_strict", "to_size_t", "to_double",
                   "to_string", "to_stringlist", "to_pylist", "to_pydict", "to_otuple", "to_frame",
                   "to_stype", "to_pyobj"]
    )
    def test_conversion_of_undefined_is_missing(self, schema, bind, method):
        arg = bind(schema, None)[1]
        with pytest.raises(MissingArgumentError) as exc_info:
            getattr(arg, method)()
        assert str(exc_info.value) == "Argument `i` in frame_column_rowindex() is missing"
        assert exc_info.value.details == {"param": "i", "function": "frame_column_rowindex", "kind": "MISSING"}


class TestNaming:
    def test_name_is_cached(self, schema, bind):
        arg = bind(schema, 1, 2)[1]
        assert arg.name == "Argument `i` in frame_column_rowindex()"
        assert arg.name is arg.name

    def test_required_flag(self, schema, bind):
        bundle = bind(schema)
        assert bundle[0].is_required
        assert bundle[1].is_required
        assert not bundle[2].is_required

    def test_repr(self, schema, bind):
        assert repr(bind(schema, 1)[0]) == "Arg(frame=1)"


class TestConversions:
    def test_int_conversion_reports_observed_type(self, schema, bind):
        arg = bind(schema, None, 2.0)[1]
        assert arg.is_float()
        with pytest.raises(TypeMismatchError) as exc_info:
            arg.to_int64_strict()
        assert str(exc_info.value) == (
            "Argument `i` in frame_column_rowindex() should be an integer, instead got <class 'float'>"
        )

    def test_size_t_negative(self, schema, bind):
        with pytest.raises(ValueOutOfRangeError):
            bind(schema, None, -3)[1].to_size_t()

    def test_int32_overflow(self, schema, bind):
        with pytest.raises(ValueOutOfRangeError, match="too large for int32"):
            bind(schema, None, 2**31)[1].to_int32_strict()

    def test_index_protocol(self, schema, bind):
        arg = bind(schema, None, 5)[1]
        assert operator.index(arg) == 5
        assert int(arg) == 5
        assert [10, 20, 30, 40, 50, 60][arg] == 60

    def test_none_is_not_undefined(self, schema, bind):
        arg = bind(schema, None)[0]
        assert arg
        assert arg.is_none()
        assert arg.to_pyobj() is None
        with pytest.raises(TypeMismatchError):
            arg.to_string()

    def test_to_frame(self, registered_context, schema, sample_frame):
        arg = schema.bind((sample_frame, 0), {}, registered_context)[0]
        assert arg.is_frame()
        assert arg.to_frame() is sample_frame.get_datatable()

    def test_to_frame_rejects_other_types(self, registered_context, schema):
        arg = schema.bind(([1, 2, 3], 0), {}, registered_context)[0]
        assert not arg.is_frame()
        with pytest.raises(TypeMismatchError, match="should be a Frame, instead got <class 'list'>"):
            arg.to_frame()

    def test_to_stype(self, registered_context, schema, host_stype):
        bundle = schema.bind((host_stype.float64, "float64"), {}, registered_context)
        assert bundle[0].is_stype()
        assert bundle[0].to_stype() is SType.FLOAT64
        assert not bundle[1].is_stype()
        with pytest.raises(TypeMismatchError):
            bundle[1].to_stype()

    def test_to_stype_with_custom_error_manager(self, registered_context, schema):
        from hostbind.core.error_manager import ErrorManager

        arg = schema.bind((None, "x"), {}, registered_context)[1]
        errors = ErrorManager.for_argument("Element 0 of `stypes`")
        with pytest.raises(TypeMismatchError, match="^Element 0 of `stypes` should be an stype"):
            arg.to_stype(errors)


class TestRegistryDependentPredicates:
    """Predicates stay total whatever the host has (or has not) registered."""

    def test_bundle_without_context(self, schema, sample_frame, host_stype):
        bundle = schema.bind((sample_frame, host_stype.int32))
        assert not bundle[0].is_frame()
        assert not bundle[1].is_stype()
        with pytest.raises(TypeMismatchError, match="should be a Frame"):
            bundle[0].to_frame()
        with pytest.raises(TypeMismatchError, match="should be an stype"):
            bundle[1].to_stype()

    def test_non_class_in_frame_slot(self, context, schema, sample_frame):
        from hostbind.runtime.registry import Slot

        context.registry.register(Slot.FRAME_TYPE, object())
        arg = schema.bind((sample_frame, 0), {}, context)[0]
        assert not arg.is_frame()
        with pytest.raises(TypeMismatchError):
            arg.to_frame()

    def test_frame_slot_class_without_datatable(self, context, schema):
        from hostbind.runtime.registry import Slot

        class NotAFrame:
            pass

        context.registry.register(Slot.FRAME_TYPE, NotAFrame)
        arg = schema.bind((NotAFrame(), 0), {}, context)[0]
        assert arg.is_frame()
        with pytest.raises(TypeMismatchError, match="should be a Frame"):
            arg.to_frame()

    def test_int_enum_stypes_reject_plain_values(self, context, schema):
        from enum import IntEnum

        from hostbind.runtime.registry import Slot

        class HostCodes(IntEnum):
            int32 = 4
            bool8 = 1

        context.registry.register(Slot.STYPE, HostCodes)
        bundle = schema.bind((4, True, HostCodes.int32), {}, context)
        assert not bundle[1].is_stype()
        with pytest.raises(TypeMismatchError):
            bundle[0].to_stype()
        assert bundle[2].to_stype() is SType.INT32
