"""Tests for exception hierarchy."""

from __future__ import annotations

import pytest

from tars.exceptions import (
    MessageError,
    Operation,
    SchemaDerivationError,
    TarsError,
    TemplateError,
    TransportError,
    UnsupportedProviderError,
    ValidationError,
    is_message_error,
    is_template_error,
    is_validation_error,
)


@pytest.mark.unit
class TestExceptions:
    def test_hierarchy(self) -> None:
        for cls in (
            ValidationError,
            TemplateError,
            MessageError,
            UnsupportedProviderError,
            SchemaDerivationError,
            TransportError,
        ):
            assert issubclass(cls, TarsError)

    def test_validation_error(self) -> None:
        exc = ValidationError("content", "cannot be empty", "")
        assert exc.field == "content"
        assert exc.reason == "cannot be empty"
        assert exc.value == ""
        assert "content" in str(exc)

    def test_template_error_carries_cause(self) -> None:
        cause = ValidationError("role", "invalid role type", "bot")
        exc = TemplateError("message[2]", "validation failed", cause)
        assert exc.position == "message[2]"
        assert exc.cause is cause
        assert "message[2]" in str(exc)
        assert "invalid role type" in str(exc)

    def test_message_error(self) -> None:
        original = RuntimeError("connection refused")
        exc = MessageError(Operation.HTTP_REQUEST, "failed to create request", original)
        assert exc.operation is Operation.HTTP_REQUEST
        assert exc.cause is original
        assert exc.is_operation("http_request")
        assert not exc.is_operation(Operation.NO_CHOICES)
        assert str(exc) == "[http_request] failed to create request: connection refused"

    def test_message_error_accepts_plain_operation_string(self) -> None:
        exc = MessageError("no_choices", "no choices in response")  # type: ignore[arg-type]
        assert exc.operation is Operation.NO_CHOICES
        assert exc.cause is None

    def test_message_error_rejects_unknown_operation(self) -> None:
        with pytest.raises(ValueError):
            MessageError("exploded", "nope")  # type: ignore[arg-type]

    def test_unsupported_provider_message(self) -> None:
        exc = UnsupportedProviderError("foobar")
        assert exc.provider == "foobar"
        assert str(exc) == "unsupported provider type: foobar"

    def test_predicates(self) -> None:
        validation = ValidationError("f", "bad")
        template = TemplateError("message[0]", "validation failed", validation)
        message = MessageError(Operation.TEMPLATE_VALIDATION, "invalid", template)

        assert is_validation_error(validation)
        assert is_template_error(template)
        assert is_message_error(message)
        assert not is_message_error(validation)
        assert not is_validation_error(None)


@pytest.mark.unit
class TestTransportError:
    @pytest.mark.parametrize(
        ("status", "retriable"),
        [(None, True), (500, True), (503, True), (429, True), (408, True), (400, False), (401, False), (404, False)],
    )
    def test_retriable(self, status: int | None, retriable: bool) -> None:
        assert TransportError("x", status_code=status).retriable is retriable

    def test_status_in_message(self) -> None:
        assert str(TransportError("bad gateway", status_code=502)) == "HTTP 502: bad gateway"
