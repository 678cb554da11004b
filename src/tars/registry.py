"""Provider registry: maps provider types to dialects."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from tars.exceptions import UnsupportedProviderError
from tars.observability.logging import configure_logging
from tars.observability.tracing import configure_tracing
from tars.providers.chat import ChatProvider
from tars.providers.dialects import BUILTIN_DIALECTS, Dialect

if TYPE_CHECKING:
    from tars.config import TarsSettings
    from tars.options import ProviderOptions
    from tars.transport import Transport

logger = logging.getLogger(__name__)


class ProviderType(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OPENROUTER = "openrouter"
    OLLAMA = "ollama"


# name → dialect
_DIALECTS: dict[str, Dialect] = {dialect.name: dialect for dialect in BUILTIN_DIALECTS}


def register_dialect(dialect: Dialect) -> None:
    """Register a dialect so ``new_provider`` can build it by name.

    The registry is process-wide: a registration is visible to every caller
    of ``new_provider`` and ``get_dialect`` in the interpreter. Registering an
    existing name replaces it. Providers already built keep their dialect.
    """
    _DIALECTS[dialect.name] = dialect
    logger.debug("Registered LLM dialect: %s", dialect.name)


def get_dialect(provider_type: ProviderType | str) -> Dialect:
    """Return the dialect registered under *provider_type*.

    Raises:
        UnsupportedProviderError: If nothing is registered under that name.
    """
    dialect = _DIALECTS.get(str(provider_type))
    if dialect is None:
        raise UnsupportedProviderError(str(provider_type))
    return dialect


def supported_providers() -> list[str]:
    """Return the names of all registered dialects."""
    return list(_DIALECTS.keys())


def new_provider(
    provider_type: ProviderType | str,
    options: ProviderOptions | None = None,
    *,
    transport: Transport | None = None,
) -> ChatProvider:
    """Build a provider for *provider_type*.

    Args:
        provider_type: A ``ProviderType`` or the name of a registered dialect.
        options: Base URL, API key, timeout and retry settings.
        transport: Caller-owned HTTP transport; defaults to ``HttpxTransport``.

    Raises:
        UnsupportedProviderError: If the provider type is not registered.
    """
    return ChatProvider(get_dialect(provider_type), options, transport)


def build_provider(
    settings: TarsSettings,
    *,
    transport: Transport | None = None,
) -> ChatProvider:
    """Build a provider from settings and set up logging and tracing."""
    configure_logging(level=settings.log_level, fmt=settings.log_format)
    if settings.trace_enabled:
        configure_tracing(
            exporter=settings.trace_exporter,
            endpoint=settings.trace_endpoint,
            service_name=settings.trace_service_name,
        )
    return new_provider(settings.provider, settings.provider_options(), transport=transport)
