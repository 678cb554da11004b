"""tars: one interface for OpenAI, Anthropic, OpenRouter and Ollama chat APIs.

Usage:
    from tars import InvokeOptions, ProviderOptions, from_messages, from_system, from_user, new_provider

    provider = new_provider("openai", ProviderOptions(api_key="sk-..."))
    prompt = from_messages(
        from_system("You are a helpful assistant."),
        from_user("What is the capital of {{country}}?"),
    ).invoke({"country": "France"})
    reply = await provider.invoke(prompt, InvokeOptions(model="gpt-4o-mini"))
"""

from __future__ import annotations

from tars.config import TarsSettings
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
from tars.message import Message, from_assistant, from_system, from_user
from tars.options import InvokeOptions, ProviderOptions
from tars.providers import ChatProvider, Dialect, Provider
from tars.registry import (
    ProviderType,
    build_provider,
    get_dialect,
    new_provider,
    register_dialect,
    supported_providers,
)
from tars.schema import derive_json_schema
from tars.template import Template, from_messages
from tars.transport import HttpxTransport, Transport, TransportResponse
from tars.types import Role, Usage

__all__ = [
    # Conversation
    "Message",
    "Role",
    "Template",
    "Usage",
    "from_assistant",
    "from_messages",
    "from_system",
    "from_user",
    # Providers
    "ChatProvider",
    "Dialect",
    "InvokeOptions",
    "Provider",
    "ProviderOptions",
    "ProviderType",
    "TarsSettings",
    "build_provider",
    "get_dialect",
    "new_provider",
    "register_dialect",
    "supported_providers",
    "derive_json_schema",
    # Transport
    "HttpxTransport",
    "Transport",
    "TransportResponse",
    # Exceptions
    "TarsError",
    "ValidationError",
    "TemplateError",
    "MessageError",
    "Operation",
    "UnsupportedProviderError",
    "SchemaDerivationError",
    "TransportError",
    "is_message_error",
    "is_template_error",
    "is_validation_error",
]
