"""Shared test fixtures for tars."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

import tars.observability.logging as log_mod
from tars.message import from_system, from_user
from tars.template import Template, from_messages
from tars.transport import TransportResponse


def chat_body(
    content: str | None = "Paris",
    usage: Mapping[str, int] | None = None,
    choices: int = 1,
) -> bytes:
    """Encode a chat-completions response body."""
    payload: dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "test-model",
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
            for i in range(choices)
        ],
        "usage": dict(
            usage or {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15}
        ),
    }
    return json.dumps(payload).encode()


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    json: Any
    timeout: float | None


@dataclass
class FakeTransport:
    """In-memory transport. Plays back ``outcomes`` in order, repeating the last.

    Each outcome is a ``TransportResponse`` to return or an exception to raise.
    """

    outcomes: list[TransportResponse | BaseException] = field(default_factory=list)
    delay: float = 0.0
    requests: list[RecordedRequest] = field(default_factory=list)

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        self.requests.append(
            RecordedRequest(method, url, dict(headers or {}), json, timeout)
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index] if self.outcomes else TransportResponse(200, chat_body())
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Return a transport that answers every request with a one-choice reply."""
    return FakeTransport()


@pytest.fixture
def make_body() -> Any:
    """Return the ``chat_body`` helper for building response bodies."""
    return chat_body


@pytest.fixture
def capital_template() -> Template:
    """System + user template with a ``{{country}}`` placeholder."""
    return from_messages(
        from_system("You are a helpful assistant."),
        from_user("What is the capital of {{country}}?"),
    )


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """Undo ``configure_logging`` side effects between tests."""
    package_logger = logging.getLogger(log_mod.LOGGER_NAME)
    handlers = list(package_logger.handlers)
    level, propagate = package_logger.level, package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
    log_mod._CONFIGURED = False


@pytest.fixture(autouse=True)
def _isolated_env(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and LLM_* settings out of unit tests."""
    if request.node.get_closest_marker("integration"):
        return
    for var in (
        "LLM_PROVIDER",
        "LLM_MODEL",
        "LLM_API_KEY",
        "LLM_BASE_URL",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "OPENROUTER_API_KEY",
    ):
        monkeypatch.delenv(var, raising=False)
