"""Core data types for tars."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    """Author of a conversation message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


VALID_ROLES: frozenset[str] = frozenset(role.value for role in Role)


@dataclass(frozen=True)
class Usage:
    """Token counts reported by a provider for a single call."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @property
    def is_zero(self) -> bool:
        """True when the provider reported no usage at all."""
        return not (self.prompt_tokens or self.completion_tokens or self.total_tokens)

    def to_dict(self) -> dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }
