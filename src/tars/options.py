"""Provider and per-call configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tars.exceptions import ValidationError
from tars.schema import derive_json_schema

if TYPE_CHECKING:
    from tars.providers.dialects import Dialect

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000


@dataclass(frozen=True)
class ProviderOptions:
    """Settings fixed for the lifetime of a provider.

    ``base_url=None`` means the dialect's default URL. ``max_attempts=1``
    disables retries; ``max_delay`` is the fixed pause between attempts.
    """

    base_url: str | None = None
    api_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_attempts: int = 1
    max_delay: float = 0.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValidationError("max_attempts", "must be at least 1", self.max_attempts)
        if self.max_delay < 0:
            raise ValidationError("max_delay", "cannot be negative", self.max_delay)
        if self.timeout <= 0:
            raise ValidationError("timeout", "must be positive", self.timeout)


@dataclass(frozen=True)
class InvokeOptions:
    """Settings for a single ``invoke`` call.

    ``None`` fields fall back to the provider's defaults. Setting
    ``structured_output`` derives ``json_schema`` immediately, so a type that
    cannot be reflected fails here rather than at request time.
    """

    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    structured_output: Any = None
    json_schema: dict[str, Any] | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.temperature is not None and not 0.0 <= self.temperature <= 2.0:
            raise ValidationError("temperature", "must be between 0 and 2", self.temperature)
        if self.max_tokens is not None and self.max_tokens < 1:
            raise ValidationError("max_tokens", "must be at least 1", self.max_tokens)
        if self.structured_output is not None:
            object.__setattr__(self, "json_schema", derive_json_schema(self.structured_output))

    def resolve(self, dialect: Dialect) -> ResolvedInvokeOptions:
        """Merge with the defaults of *dialect*."""
        return ResolvedInvokeOptions(
            model=self.model or dialect.default_model,
            temperature=DEFAULT_TEMPERATURE if self.temperature is None else self.temperature,
            max_tokens=DEFAULT_MAX_TOKENS if self.max_tokens is None else self.max_tokens,
            structured_output=self.structured_output,
            json_schema=self.json_schema,
        )


@dataclass(frozen=True)
class ResolvedInvokeOptions:
    model: str
    temperature: float
    max_tokens: int
    structured_output: Any = None
    json_schema: dict[str, Any] | None = None
