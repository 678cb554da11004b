"""Conversation messages and ``{{name}}`` placeholder substitution."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from tars.exceptions import ValidationError
from tars.types import VALID_ROLES, Role, Usage

logger = logging.getLogger(__name__)


def substitute(content: str, variables: Mapping[str, Any] | None) -> str:
    """Replace every ``{{key}}`` in *content* with ``str(variables[key])``.

    Placeholders without a matching key are left as-is; keys that do not
    appear in *content* are ignored. Substitution is a single pass, so
    inserted values are never scanned for further placeholders.
    """
    if not variables:
        return content
    values = {"{{" + str(key) + "}}": str(value) for key, value in variables.items()}
    pattern = re.compile("|".join(re.escape(p) for p in sorted(values, key=len, reverse=True)))
    return pattern.sub(lambda m: values[m.group(0)], content)


@dataclass(frozen=True)
class Message:
    """A single conversation message.

    Any role/content pair can be constructed; ``validate()`` decides whether
    the message may be sent to a provider.
    """

    role: Role | str
    content: str
    usage: Usage = field(default_factory=Usage)
    # Structured output decoded from an assistant reply, if one was requested.
    parsed: Any = field(default=None, compare=False, repr=False)

    def validate(self) -> None:
        """Check the role and content.

        Raises:
            ValidationError: Naming ``role`` or ``content`` and the observed value.
        """
        if not self.role:
            raise ValidationError("role", "cannot be empty", self.role)
        if not self.content:
            raise ValidationError("content", "cannot be empty", self.content)
        if self.role not in VALID_ROLES:
            raise ValidationError("role", "invalid role type", self.role)

    def invoke(self, variables: Mapping[str, Any] | None = None) -> Message:
        """Return a copy with placeholders substituted. The original is untouched."""
        if not variables:
            return self
        return replace(self, content=substitute(self.content, variables))

    def to_dict(self) -> dict[str, Any]:
        """Wire representation: role and content, plus usage when reported."""
        data: dict[str, Any] = {"role": str(self.role), "content": self.content}
        if not self.usage.is_zero:
            data["usage"] = self.usage.to_dict()
        return data

    def to_json(self) -> str:
        """Compact JSON of ``to_dict()``; an empty string if it cannot be encoded."""
        try:
            return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.debug("message_to_json_failed | %s", exc)
            return ""


def from_system(content: str) -> Message:
    """System message setting the assistant's behaviour."""
    return Message(role=Role.SYSTEM, content=content)


def from_user(content: str) -> Message:
    """User message the assistant should respond to."""
    return Message(role=Role.USER, content=content)


def from_assistant(content: str, usage: Usage | None = None) -> Message:
    """Assistant message, optionally carrying the provider's token usage."""
    return Message(role=Role.ASSISTANT, content=content, usage=usage or Usage())
