"""Provider protocol, dialects and the shared chat-completions provider."""

from tars.providers.base import Provider
from tars.providers.chat import ChatProvider
from tars.providers.dialects import (
    ANTHROPIC,
    BUILTIN_DIALECTS,
    OLLAMA,
    OPENAI,
    OPENROUTER,
    AuthScheme,
    Dialect,
)

__all__ = [
    "ANTHROPIC",
    "BUILTIN_DIALECTS",
    "OLLAMA",
    "OPENAI",
    "OPENROUTER",
    "AuthScheme",
    "ChatProvider",
    "Dialect",
    "Provider",
]
