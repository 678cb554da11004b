"""OpenTelemetry spans around provider invocations.

Tracing is optional: without the ``tracing`` extra installed, or before
``configure_tracing`` selects an exporter, ``traced_llm_call`` is a no-op that
still yields its scratch dict.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from tars.exceptions import MessageError, TransportError
from tars.message import Message

logger = logging.getLogger(__name__)

try:
    from opentelemetry import trace
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

    HAS_OTEL = True
except ImportError:
    HAS_OTEL = False

try:
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

    HAS_OTLP = True
except ImportError:
    HAS_OTLP = False

_tracer: Any = None


def _span_processor(exporter: str, endpoint: str) -> Any:
    if exporter == "console":
        return SimpleSpanProcessor(ConsoleSpanExporter())
    if exporter == "otlp":
        if not HAS_OTLP:
            logger.warning("OTLP exporter requested but opentelemetry-exporter-otlp not installed")
            return None
        return SimpleSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    logger.warning("Unknown trace exporter %r, tracing disabled", exporter)
    return None


def configure_tracing(
    exporter: str = "none",
    endpoint: str = "http://localhost:4317",
    service_name: str = "tars",
) -> None:
    """Select where provider spans are exported.

    Args:
        exporter: One of "none", "console", "otlp".
        endpoint: OTLP collector endpoint (only used when exporter="otlp").
        service_name: ``service.name`` resource attribute.
    """
    global _tracer
    _tracer = None

    if exporter == "none" or not HAS_OTEL:
        return

    processor = _span_processor(exporter, endpoint)
    if processor is None:
        return

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer("tars")
    logger.info("OTEL tracing configured: exporter=%s, service=%s", exporter, service_name)


def get_tracer() -> Any:
    return _tracer


def disable_tracing() -> None:
    global _tracer
    _tracer = None


def _record_failure(span: Any, exc: Exception) -> None:
    span.set_status(trace.StatusCode.ERROR, str(exc))
    span.record_exception(exc)
    if isinstance(exc, MessageError):
        span.set_attribute("llm.error.operation", str(exc.operation))
        cause = exc.cause
        if isinstance(cause, TransportError) and cause.status_code is not None:
            span.set_attribute("http.response.status_code", cause.status_code)


def _record_reply(span: Any, message: Message) -> None:
    span.set_attribute("llm.prompt_tokens", message.usage.prompt_tokens)
    span.set_attribute("llm.completion_tokens", message.usage.completion_tokens)
    span.set_attribute("llm.total_tokens", message.usage.total_tokens)
    span.set_attribute("llm.structured_output", message.parsed is not None)


@asynccontextmanager
async def traced_llm_call(
    model: str | None,
    provider: str,
    operation: str = "llm.invoke",
    attributes: Mapping[str, Any] | None = None,
) -> AsyncGenerator[dict[str, Any], None]:
    """Wrap one provider invocation in a span.

    Usage:
        async with traced_llm_call("gpt-4o-mini", "openai") as span_data:
            reply = ...
            span_data["message"] = reply

    Token counts are taken from ``span_data["message"]`` on success. When a
    ``MessageError`` escapes, its operation (and the HTTP status of a
    transport cause) is recorded with the error status.
    """
    span_data: dict[str, Any] = {}

    if _tracer is None:
        yield span_data
        return

    with _tracer.start_as_current_span(operation) as span:
        span.set_attribute("llm.model", model or "provider-default")
        span.set_attribute("llm.provider", provider)
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)

        try:
            yield span_data
        except Exception as exc:
            _record_failure(span, exc)
            raise

        message = span_data.get("message")
        if isinstance(message, Message):
            _record_reply(span, message)
