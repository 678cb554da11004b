"""Provider protocol: the contract every provider must satisfy."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tars.message import Message
from tars.options import InvokeOptions
from tars.template import Template


@runtime_checkable
class Provider(Protocol):
    """Protocol that all LLM providers must implement.

    Providers turn a template into one assistant message against a specific
    backend. They hold no per-call state, so one instance may serve any
    number of concurrent ``invoke`` calls.
    """

    @property
    def name(self) -> str:
        """Provider name for identification and logging."""
        ...

    async def invoke(
        self,
        template: Template,
        options: InvokeOptions | None = None,
    ) -> Message:
        """Send the template to the LLM and return its reply.

        Cancel the calling task, or wrap the call in ``asyncio.timeout()``,
        to abort it; in-flight and pending attempts are abandoned.

        Args:
            template: Full conversation context, in order.
            options: Model, sampling and structured-output settings.

        Returns:
            An assistant message carrying the provider's token usage.
        """
        ...
