"""Chat-completions provider: the invoke pipeline shared by every dialect."""

from __future__ import annotations

import logging
import time

from pydantic import ValidationError as PydanticValidationError

from tars.exceptions import (
    MessageError,
    Operation,
    TemplateError,
    TransportError,
    ValidationError,
)
from tars.message import Message, from_assistant
from tars.observability.tracing import traced_llm_call
from tars.options import InvokeOptions, ProviderOptions, ResolvedInvokeOptions
from tars.providers.dialects import Dialect
from tars.providers.wire import (
    ChatCompletionsRequest,
    ChatCompletionsResponse,
    ChatMessage,
    ResponseFormat,
)
from tars.retry import RetryPolicy
from tars.schema import DEFAULT_SCHEMA_NAME, apply_structured_output, response_format
from tars.template import Template
from tars.transport import HttpxTransport, Transport, TransportResponse
from tars.types import Usage

logger = logging.getLogger(__name__)


class ChatProvider:
    """LLM provider speaking the chat-completions protocol of one dialect.

    Usage::

        provider = ChatProvider(OPENAI, ProviderOptions(api_key="sk-..."))
        reply = await provider.invoke(prompt, InvokeOptions(model="gpt-4o"))

    The transport is caller-owned; when omitted an ``HttpxTransport`` that
    opens a client per request is used.
    """

    def __init__(
        self,
        dialect: Dialect,
        options: ProviderOptions | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._dialect = dialect
        self._options = options or ProviderOptions()
        self._transport = transport or HttpxTransport()
        self._retry = RetryPolicy(
            max_attempts=self._options.max_attempts,
            delay=self._options.max_delay,
        )
        self._url = dialect.url(self._options.base_url)
        self._headers = dialect.headers(self._options.api_key)

    @property
    def name(self) -> str:
        return self._dialect.name

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def options(self) -> ProviderOptions:
        return self._options

    async def invoke(
        self,
        template: Template,
        options: InvokeOptions | None = None,
    ) -> Message:
        """Validate, send and decode one chat-completions exchange.

        Raises:
            MessageError: Classified by ``operation`` for template, transport,
                decode, empty-choice and structured-output failures.
            ValidationError: If the dialect needs an API key and none is set.
        """
        try:
            template.validate()
        except (ValidationError, TemplateError) as exc:
            raise MessageError(
                Operation.TEMPLATE_VALIDATION, "invalid template provided", exc
            ) from exc

        if self._dialect.requires_api_key and not self._options.api_key:
            raise ValidationError("api_key", f"{self.name} API key is required", "")

        resolved = (options or InvokeOptions()).resolve(self._dialect)
        request = self._build_request(template, resolved)
        start = time.monotonic()

        async with traced_llm_call(
            model=resolved.model,
            provider=self.name,
            attributes={
                "llm.request.temperature": resolved.temperature,
                "llm.request.max_tokens": resolved.max_tokens,
                "url.full": self._url,
            },
        ) as span_data:
            try:
                raw = await self._retry.run(self._send, request)
            except Exception as exc:
                raise MessageError(Operation.HTTP_REQUEST, "failed to create request", exc) from exc

            result = self._decode(raw)
            reply = self._to_message(result, resolved)
            span_data["message"] = reply

        logger.info(
            "LLM call completed",
            extra={
                "provider": self.name,
                "model": resolved.model,
                "prompt_tokens": reply.usage.prompt_tokens,
                "completion_tokens": reply.usage.completion_tokens,
                "total_tokens": reply.usage.total_tokens,
                "latency_ms": round((time.monotonic() - start) * 1000, 1),
            },
        )
        return reply

    def _build_request(
        self, template: Template, options: ResolvedInvokeOptions
    ) -> ChatCompletionsRequest:
        fmt: ResponseFormat | None = None
        if options.json_schema is not None:
            fmt = ResponseFormat.model_validate(
                response_format(options.json_schema, DEFAULT_SCHEMA_NAME)
            )
        return ChatCompletionsRequest(
            model=options.model,
            messages=[ChatMessage(role=str(m.role), content=m.content) for m in template],
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            response_format=fmt,
        )

    async def _send(self, request: ChatCompletionsRequest) -> TransportResponse:
        response = await self._transport.request(
            "POST",
            self._url,
            headers=self._headers,
            json=request.to_body(),
            timeout=self._options.timeout,
        )
        if not response.ok:
            raise TransportError(
                response.body[:200].decode("utf-8", errors="replace"),
                status_code=response.status_code,
                body=response.body,
            )
        return response

    @staticmethod
    def _decode(raw: TransportResponse) -> ChatCompletionsResponse:
        try:
            result = ChatCompletionsResponse.model_validate_json(raw.body)
        except PydanticValidationError as exc:
            raise MessageError(
                Operation.RESPONSE_DECODE, "failed to decode response", exc
            ) from exc

        if not result.choices:
            raise MessageError(Operation.NO_CHOICES, "no choices in response")
        return result

    @staticmethod
    def _to_message(
        result: ChatCompletionsResponse, options: ResolvedInvokeOptions
    ) -> Message:
        content = result.choices[0].message.content
        usage = Usage(
            prompt_tokens=result.usage.prompt_tokens,
            completion_tokens=result.usage.completion_tokens,
            total_tokens=result.usage.total_tokens,
        )
        reply = from_assistant(content, usage)

        if options.structured_output is None:
            return reply

        try:
            parsed = apply_structured_output(options.structured_output, content)
        except (PydanticValidationError, TypeError, AttributeError) as exc:
            raise MessageError(
                Operation.JSON_UNMARSHAL, "failed to unmarshal structured output", exc
            ) from exc
        return Message(role=reply.role, content=reply.content, usage=reply.usage, parsed=parsed)
