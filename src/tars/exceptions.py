"""Exception hierarchy for tars."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class TarsError(Exception):
    """Base exception for all tars errors."""


class ValidationError(TarsError):
    """Raised when a message, template or provider setting is invalid."""

    def __init__(self, field: str, reason: str, value: Any = None) -> None:
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(f"[Validation] field '{field}': {reason} (value: {value!r})")


class TemplateError(TarsError):
    """Raised when a message inside a template fails validation."""

    def __init__(self, position: str, reason: str, cause: BaseException | None = None) -> None:
        self.position = position
        self.reason = reason
        self.cause = cause
        text = f"[Template] {position}: {reason}"
        if cause is not None:
            text = f"{text}: {cause}"
        super().__init__(text)


class Operation(StrEnum):
    """Stage of the invoke pipeline a ``MessageError`` originates from."""

    TEMPLATE_VALIDATION = "template_validation"
    HTTP_REQUEST = "http_request"
    RESPONSE_DECODE = "response_decode"
    NO_CHOICES = "no_choices"
    JSON_UNMARSHAL = "json_unmarshal"


class MessageError(TarsError):
    """Raised when a provider fails to turn a template into a message."""

    def __init__(
        self,
        operation: Operation,
        reason: str,
        cause: BaseException | None = None,
    ) -> None:
        self.operation = Operation(operation)
        self.reason = reason
        self.cause = cause
        text = f"[{self.operation}] {reason}"
        if cause is not None:
            text = f"{text}: {cause}"
        super().__init__(text)

    def is_operation(self, operation: Operation | str) -> bool:
        """Return True if this error was raised by the given pipeline stage."""
        return self.operation == operation


class UnsupportedProviderError(TarsError):
    """Raised when the requested provider type is not registered."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"unsupported provider type: {provider}")


class SchemaDerivationError(TarsError):
    """Raised when a JSON schema cannot be derived for a structured-output target."""

    def __init__(self, target: Any, reason: str) -> None:
        self.target = target
        super().__init__(f"Cannot derive JSON schema for {target!r}: {reason}")


class TransportError(TarsError):
    """Raised when an HTTP exchange fails or returns a non-success status."""

    # Statuses worth another attempt; other 4xx responses will not change on retry.
    RETRIABLE_STATUSES = frozenset({408, 409, 425, 429})

    def __init__(self, reason: str, status_code: int | None = None, body: bytes = b"") -> None:
        self.reason = reason
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(reason)
        else:
            super().__init__(f"HTTP {status_code}: {reason}")

    @property
    def retriable(self) -> bool:
        if self.status_code is None:
            return True
        return self.status_code >= 500 or self.status_code in self.RETRIABLE_STATUSES


def is_validation_error(exc: BaseException | None) -> bool:
    return isinstance(exc, ValidationError)


def is_template_error(exc: BaseException | None) -> bool:
    return isinstance(exc, TemplateError)


def is_message_error(exc: BaseException | None) -> bool:
    return isinstance(exc, MessageError)
