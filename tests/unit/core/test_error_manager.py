# tests/unit/core/test_error_manager.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Unit tests for hostbind.core.error_manager module."""
import pytest

from hostbind.core.error_manager import DEFAULT_TEMPLATES, ERROR_CLASSES, ErrorKind, ErrorManager
from hostbind.core.errors import MissingArgumentError, TypeMismatchError, ValueOutOfRangeError


class TestErrorKinds:
    def test_every_kind_has_class_and_template(self):
        for kind in ErrorKind:
            assert kind in ERROR_CLASSES
            assert kind in DEFAULT_TEMPLATES


class TestArgumentContext:
    @pytest.fixture
    def errors(self):
        return ErrorManager.for_argument("Argument `i` in frame_column_rowindex()", param="i")

    def test_not_integer(self, errors):
        error = errors.error_not_integer(1.5)
        assert isinstance(error, TypeMismatchError)
        assert str(error) == "Argument `i` in frame_column_rowindex() should be an integer, instead got <class 'float'>"
        assert error.details["param"] == "i"
        assert error.details["observed_type"] == "float"
        assert error.details["kind"] == "NOT_INTEGER"

    def test_missing(self, errors):
        error = errors.error_missing()
        assert isinstance(error, MissingArgumentError)
        assert str(error) == "Argument `i` in frame_column_rowindex() is missing"
        assert "observed_type" not in error.details

    def test_negative(self, errors):
        error = errors.error_int_negative(-1)
        assert isinstance(error, ValueOutOfRangeError)
        assert "cannot be negative" in str(error)

    def test_overflow_names_target(self, errors):
        error = errors.error_int_overflow(2**40, "int32")
        assert isinstance(error, ValueOutOfRangeError)
        assert str(error).endswith("is too large for int32")
        assert error.details["target"] == "int32"

    def test_errors_are_returned_not_raised(self, errors):
        # Building an error has no side effects; the caller raises it.
        for method in (errors.error_not_list, errors.error_not_boolean, errors.error_not_double):
            assert isinstance(method(object()), TypeMismatchError)


class TestAttributeContext:
    def test_attribute_templates(self):
        errors = ErrorManager.for_attribute("`.alpha`", attribute="alpha")
        error = errors.error_not_double("x")
        assert str(error) == "`.alpha` must be a float, got <class 'str'>"
        assert error.details["attribute"] == "alpha"

    def test_attribute_falls_back_to_defaults(self):
        errors = ErrorManager.for_attribute("`.frame`")
        assert str(errors.error_not_frame(1)) == "`.frame` should be a Frame, instead got <class 'int'>"

    def test_custom_templates(self):
        errors = ErrorManager("value", {ErrorKind.NOT_STRING: "{name}: expected str"})
        assert str(errors.error_not_string(3)) == "value: expected str"
