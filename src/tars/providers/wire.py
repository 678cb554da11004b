"""Chat-completions wire format shared by every dialect."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        # Refusals and tool calls come back with ``"content": null``.
        return "" if value is None else value


class JsonSchemaFormat(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    strict: bool = True
    schema_: dict[str, Any] = Field(alias="schema")


class ResponseFormat(BaseModel):
    type: str = "json_schema"
    json_schema: JsonSchemaFormat


class ChatCompletionsRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    temperature: float | None = None
    max_tokens: int | None = None
    response_format: ResponseFormat | None = None

    def to_body(self) -> dict[str, Any]:
        """JSON body with unset optional fields left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class WireUsage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: ChatMessage
    finish_reason: str | None = None
    index: int = 0


class ChatCompletionsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    model: str = ""
    provider: str = ""
    object: str = ""
    created: int = 0
    system_fingerprint: str | None = None
    choices: list[Choice] = Field(default_factory=list)
    usage: WireUsage = Field(default_factory=WireUsage)

    @field_validator("usage", mode="before")
    @classmethod
    def _null_usage(cls, value: Any) -> Any:
        return WireUsage() if value is None else value
