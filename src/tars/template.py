"""Templates: ordered, immutable sequences of conversation messages."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from tars.exceptions import TemplateError, ValidationError
from tars.message import Message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Template:
    """Conversation context sent to a provider in a single request.

    Message order is the wire order.

    Usage::

        prompt = from_messages(
            from_system("You are a helpful assistant."),
            from_user("What is the capital of {{country}}?"),
        ).invoke({"country": "France"})
    """

    messages: tuple[Message, ...] = ()

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def invoke(self, variables: Mapping[str, Any] | None = None) -> Template:
        """Substitute the same variables into every message.

        Returns a new template; an empty or ``None`` mapping returns this one.
        """
        if not variables:
            return self
        return Template(tuple(m.invoke(variables) for m in self.messages))

    def append(self, message: Message) -> Template:
        """Return a new template with *message* added at the end."""
        return Template((*self.messages, message))

    def validate(self) -> None:
        """Check the template is non-empty and every message is valid.

        Raises:
            ValidationError: If the template holds no messages.
            TemplateError: For the first invalid message, naming its position.
        """
        if not self.messages:
            raise ValidationError("messages", "template cannot be empty", [])

        for i, msg in enumerate(self.messages):
            try:
                msg.validate()
            except ValidationError as exc:
                raise TemplateError(f"message[{i}]", "validation failed", exc) from exc

    def to_json(self) -> str:
        """Compact JSON array of messages; an empty string if it cannot be encoded."""
        try:
            return json.dumps(
                [m.to_dict() for m in self.messages],
                separators=(",", ":"),
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as exc:
            logger.debug("template_to_json_failed | %s", exc)
            return ""


def from_messages(*messages: Message) -> Template:
    """Build a template from messages in conversation order."""
    return Template(tuple(messages))
