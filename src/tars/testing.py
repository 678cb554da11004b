"""Testing utilities shipped with tars.

Provides ``FakeProvider`` for consumers to use in their test suites without
reimplementing the ``Provider`` protocol or talking HTTP.

Usage::

    from tars import from_messages, from_user
    from tars.testing import FakeProvider

    fake = FakeProvider()
    fake.queue_reply("Paris")

    reply = await fake.invoke(from_messages(from_user("Capital of France?")))
    assert reply.content == "Paris"
    assert fake.call_count == 1
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from tars.exceptions import MessageError, Operation, TemplateError, ValidationError
from tars.message import Message, from_assistant
from tars.options import InvokeOptions
from tars.schema import apply_structured_output
from tars.template import Template
from tars.types import Usage


@dataclass
class FakeCall:
    """Record of a single ``FakeProvider.invoke()`` call."""

    template: Template
    options: InvokeOptions
    reply: Message


class FakeProvider:
    """Fake provider for testing. Implements the ``Provider`` protocol.

    Resolution order in ``invoke()``:

    1. The next reply queued with ``queue_reply()``
    2. ``reply_factory(template, options)`` (if provided)
    3. Raise ``MessageError`` with operation ``no_choices``

    Templates are validated like the real pipeline, and structured output
    is decoded into ``options.structured_output`` when set.
    """

    def __init__(
        self,
        reply_factory: Callable[[Template, InvokeOptions], str] | None = None,
        name: str = "fake",
        usage: Usage | None = None,
    ) -> None:
        self._name = name
        self._replies: deque[str] = deque()
        self._reply_factory = reply_factory
        self._usage = usage or Usage(prompt_tokens=100, completion_tokens=50, total_tokens=150)
        self.calls: list[FakeCall] = []

    @property
    def name(self) -> str:
        return self._name

    def queue_reply(self, content: str) -> None:
        """Queue assistant content for a future ``invoke()``."""
        self._replies.append(content)

    async def invoke(
        self,
        template: Template,
        options: InvokeOptions | None = None,
    ) -> Message:
        """Return the next scripted reply."""
        options = options or InvokeOptions()
        try:
            template.validate()
        except (ValidationError, TemplateError) as exc:
            raise MessageError(
                Operation.TEMPLATE_VALIDATION, "invalid template provided", exc
            ) from exc

        if self._replies:
            content = self._replies.popleft()
        elif self._reply_factory is not None:
            content = self._reply_factory(template, options)
        else:
            raise MessageError(
                Operation.NO_CHOICES,
                "No fake reply configured. Use queue_reply() or pass a reply_factory.",
            )

        parsed = None
        if options.structured_output is not None:
            try:
                parsed = apply_structured_output(options.structured_output, content)
            except (ValueError, TypeError, AttributeError) as exc:
                raise MessageError(
                    Operation.JSON_UNMARSHAL, "failed to unmarshal structured output", exc
                ) from exc

        reply = from_assistant(content, self._usage)
        if parsed is not None:
            reply = Message(role=reply.role, content=reply.content, usage=reply.usage, parsed=parsed)

        self.calls.append(FakeCall(template=template, options=options, reply=reply))
        return reply

    @property
    def call_count(self) -> int:
        """Number of successful ``invoke()`` calls recorded."""
        return len(self.calls)
