"""Unit tests for custom exceptions."""

import pytest

from src.core.exceptions import (
    CiteError,
    FeatureDisabledError,
    InvalidContinuationError,
    ReferenceStoreError,
)


class TestCiteError:
    """Tests for the base exception."""

    def test_default_code(self) -> None:
        error = CiteError("failed")

        assert error.code == "citeerror"
        assert error.message == "failed"
        assert str(error) == "failed"

    def test_code_override_is_per_instance(self) -> None:
        error = CiteError("failed", code="custom")

        assert error.code == "custom"
        assert CiteError.code == "citeerror"

    @pytest.mark.parametrize(
        "error",
        [
            FeatureDisabledError(),
            InvalidContinuationError("x"),
            ReferenceStoreError("down"),
        ],
    )
    def test_subclasses_are_cite_errors(self, error: CiteError) -> None:
        assert isinstance(error, CiteError)


class TestFeatureDisabledError:
    """Tests for FeatureDisabledError."""

    def test_code_and_flag(self) -> None:
        error = FeatureDisabledError()

        assert error.code == "citestoragedisabled"
        assert error.flag == "reference_storage_enabled"


class TestInvalidContinuationError:
    """Tests for InvalidContinuationError."""

    def test_message_names_parameter_and_value(self) -> None:
        error = InvalidContinuationError("abc")

        assert error.code == "badcontinue"
        assert error.value == "abc"
        assert "rfcontinue='abc'" in str(error)


class TestReferenceStoreError:
    """Tests for ReferenceStoreError."""

    def test_attributes(self) -> None:
        cause = ConnectionRefusedError("refused")
        error = ReferenceStoreError("down", page_id=7, status_code=503, cause=cause)

        assert error.page_id == 7
        assert error.status_code == 503
        assert error.__cause__ is cause
