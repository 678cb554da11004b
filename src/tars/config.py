"""Provider configuration via environment variables."""

from __future__ import annotations

import os

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

from tars.options import InvokeOptions, ProviderOptions


class TarsSettings(BaseSettings):
    """Settings for building a provider from the environment.

    All fields are read from environment variables with the ``LLM_`` prefix.
    Example: ``LLM_PROVIDER=ollama`` sets ``provider="ollama"``.
    """

    model_config = {"env_prefix": "LLM_", "env_file": ".env", "extra": "ignore"}

    # ── Provider ────────────────────────────────────────────────
    provider: str = Field(
        default="openai",
        description="Provider type: 'openai', 'anthropic', 'openrouter', 'ollama'.",
    )
    model: str | None = Field(
        default=None,
        description="Model identifier. None means the provider's default model.",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="API key. Falls back to provider-specific env vars if unset.",
    )
    base_url: str | None = Field(
        default=None,
        description="Optional base URL override for the provider API.",
    )

    # ── Transport and retries ───────────────────────────────────
    timeout_seconds: float = Field(default=10.0, gt=0)
    max_attempts: int = Field(default=1, ge=1)
    max_delay_seconds: float = Field(default=0.0, ge=0.0)

    # ── Request defaults ────────────────────────────────────────
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, ge=1)

    # ── Observability ───────────────────────────────────────────
    trace_enabled: bool = Field(default=False)
    trace_exporter: str = Field(
        default="none",
        description="Trace exporter: 'none', 'console', 'otlp'.",
    )
    trace_endpoint: str = Field(default="http://localhost:4317")
    trace_service_name: str = Field(default="tars")

    log_level: str = Field(default="INFO")
    log_format: str = Field(
        default="json",
        description="Log format: 'json' or 'console'.",
    )

    @model_validator(mode="after")
    def _resolve_api_key(self) -> TarsSettings:
        """Fall back to provider-specific env vars if LLM_API_KEY is unset."""
        if self.api_key is not None:
            return self

        fallback_map: dict[str, str] = {
            "openai": "OPENAI_API_KEY",
            "anthropic": "ANTHROPIC_API_KEY",
            "openrouter": "OPENROUTER_API_KEY",
        }
        env_var = fallback_map.get(self.provider)
        if env_var:
            value = os.environ.get(env_var)
            if value:
                self.api_key = SecretStr(value)

        return self

    def provider_options(self) -> ProviderOptions:
        """Options for the provider constructor."""
        return ProviderOptions(
            base_url=self.base_url,
            api_key=self.api_key.get_secret_value() if self.api_key else None,
            timeout=self.timeout_seconds,
            max_attempts=self.max_attempts,
            max_delay=self.max_delay_seconds,
        )

    def invoke_options(self) -> InvokeOptions:
        """Per-call defaults taken from the environment."""
        return InvokeOptions(
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
