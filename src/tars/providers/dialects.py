"""Per-backend variations of the shared chat-completions pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AuthScheme(StrEnum):
    BEARER = "bearer"
    NONE = "none"


@dataclass(frozen=True)
class Dialect:
    """Everything that distinguishes one backend from another.

    Anthropic and Ollama are spoken to with the OpenAI chat-completions
    shape as well; only the URL, path, auth and default model differ.
    """

    name: str
    base_url: str
    path: str
    default_model: str
    auth: AuthScheme = AuthScheme.BEARER
    requires_api_key: bool = True

    def headers(self, api_key: str | None) -> dict[str, str]:
        """Auth headers for a request."""
        if self.auth is AuthScheme.BEARER and api_key:
            return {"Authorization": f"Bearer {api_key}"}
        return {}

    def url(self, base_url: str | None = None) -> str:
        return (base_url or self.base_url).rstrip("/") + self.path


OPENAI = Dialect(
    name="openai",
    base_url="https://api.openai.com/v1",
    path="/chat/completions",
    default_model="gpt-4o-mini",
)

ANTHROPIC = Dialect(
    name="anthropic",
    base_url="https://api.anthropic.com",
    path="/chat/completions",
    default_model="claude-3-5-sonnet-20240620",
)

OPENROUTER = Dialect(
    name="openrouter",
    base_url="https://openrouter.ai/api/v1",
    path="/chat/completions",
    default_model="gpt-4o-mini",
)

OLLAMA = Dialect(
    name="ollama",
    base_url="http://localhost:11434",
    path="/chat",
    default_model="llama3.1:8b",
    auth=AuthScheme.NONE,
    requires_api_key=False,
)

BUILTIN_DIALECTS: tuple[Dialect, ...] = (OPENAI, ANTHROPIC, OPENROUTER, OLLAMA)
