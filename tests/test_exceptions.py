"""Tests for the exception hierarchy and error handling helpers."""

import logging

import pytest
from pydantic import BaseModel, Field, ValidationError

from launchgrid.exceptions import (
    ConfigFileInvalidError,
    ConfigValidationError,
    DeviceError,
    DeviceNotConnectedError,
    ErrorContext,
    InvalidCoordinateError,
    LaunchGridError,
    LengthMismatchError,
    OutOfRangeError,
    RequestError,
    TransportFailureError,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_transport_error,
)


@pytest.mark.unit
class TestHierarchy:
    """Test exception types and messages."""

    def test_request_errors_are_value_errors(self):
        for error in (
            InvalidCoordinateError("grid", (9, 9)),
            LengthMismatchError(2, 3),
            OutOfRangeError("bpm", 300, 40, 240),
        ):
            assert isinstance(error, RequestError)
            assert isinstance(error, ValueError)
            assert isinstance(error, LaunchGridError)

    def test_out_of_range_messages(self):
        high = OutOfRangeError("bpm", 241, 40, 240)
        low = OutOfRangeError("bpm", 39, 40, 240)

        assert str(high) == "bpm cannot be more than 240 (got 241)"
        assert str(low) == "bpm cannot be less than 40 (got 39)"
        assert high.recovery_hint == "Use a bpm between 40 and 240"
        assert high.recoverable

    def test_length_mismatch(self):
        error = LengthMismatchError(3, 2)
        assert error.xs_count == 3
        assert "(3)" in error.user_message and "(2)" in error.user_message

    def test_not_connected(self):
        error = DeviceNotConnectedError("set mode")

        assert isinstance(error, DeviceError)
        assert error.operation == "set mode"
        assert "Suggestion:" in error.get_full_message()

    def test_transport_failure(self):
        error = TransportFailureError("send", port_name="out", original_error="unplugged")

        assert str(error) == "MIDI send failed on 'out'"
        assert "unplugged" in error.technical_message
        assert error.port_name == "out"


@pytest.mark.unit
class TestWrapping:
    """Test conversion of third-party errors."""

    def test_wrap_transport_error(self):
        wrapped = wrap_transport_error(OSError("gone"), "open output", "out")

        assert isinstance(wrapped, TransportFailureError)
        assert wrapped.operation == "open output"
        assert wrapped.original_error == "gone"

    def test_wrap_transport_error_passthrough(self):
        original = TransportFailureError("send")
        assert wrap_transport_error(original, "other") is original

    def test_wrap_pydantic_validation(self):
        class Model(BaseModel):
            speed: int = Field(ge=0, le=127)

        with pytest.raises(ValidationError) as exc_info:
            Model(speed=200)

        wrapped = wrap_pydantic_error(exc_info.value, "config.json")
        assert isinstance(wrapped, ConfigValidationError)
        assert wrapped.field == "speed"
        assert wrapped.file_path == "config.json"

    def test_wrap_pydantic_json(self):
        class Model(BaseModel):
            speed: int = 0

        with pytest.raises(ValidationError) as exc_info:
            Model.model_validate_json("{bad")

        assert isinstance(wrap_pydantic_error(exc_info.value, "c.json"), ConfigFileInvalidError)

    def test_format_error_for_display(self):
        assert format_error_for_display(LengthMismatchError(1, 2))[1] is not None
        assert format_error_for_display(KeyError("x")) == ("KeyError: 'x'", None)


@pytest.mark.unit
class TestHandleErrors:
    """Test the handle_errors decorator."""

    def test_fallback_for_caught_type(self, caplog):
        @handle_errors(
            operation_name="set LED",
            catch=(TransportFailureError,),
            re_raise=False,
            fallback_value=False,
        )
        def failing():
            raise TransportFailureError("send", port_name="out")

        with caplog.at_level(logging.ERROR):
            assert failing() is False
        assert "Failed to set LED" in caplog.text

    def test_other_types_propagate(self):
        @handle_errors(operation_name="set LED", catch=(TransportFailureError,), re_raise=False)
        def failing():
            raise OutOfRangeError("velocity", 200, 0, 127)

        with pytest.raises(OutOfRangeError):
            failing()

    def test_re_raise(self, caplog):
        @handle_errors(operation_name="connect")
        def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            failing()
        assert "Unexpected error during connect: boom" in caplog.text

    def test_success_passes_through(self):
        @handle_errors(operation_name="noop")
        def ok(value):
            return value * 2

        assert ok(4) == 8


@pytest.mark.unit
class TestErrorContext:
    """Test ErrorContext."""

    def test_suppresses_when_not_re_raising(self):
        with ErrorContext("open ports", re_raise=False) as ctx:
            raise TransportFailureError("open")

        assert isinstance(ctx.error, TransportFailureError)

    def test_re_raises_by_default(self):
        with pytest.raises(ValueError):
            with ErrorContext("parse"):
                raise ValueError("bad")

    def test_no_error(self):
        with ErrorContext("nothing") as ctx:
            pass
        assert ctx.error is None

    def test_catch_limits_handled_types(self):
        """Exceptions outside ``catch`` propagate even when not re-raising."""
        with pytest.raises(OutOfRangeError):
            with ErrorContext("open ports", re_raise=False, catch=(TransportFailureError,)) as ctx:
                raise OutOfRangeError("velocity", 200, 0, 127)

        assert ctx.error is None

    def test_catch_suppresses_listed_types(self, caplog):
        with ErrorContext("open ports", re_raise=False, catch=(TransportFailureError,)) as ctx:
            raise TransportFailureError("open", port_name="out", original_error="busy")

        assert ctx.error.port_name == "out"
        assert "Failed to open ports" in caplog.text
