"""Tests for templates."""

from __future__ import annotations

import json

import pytest

from tars.exceptions import TemplateError, ValidationError
from tars.message import Message, from_assistant, from_system, from_user
from tars.template import Template, from_messages


@pytest.mark.unit
class TestTemplate:
    def test_order_preserved(self) -> None:
        tpl = from_messages(from_system("S"), from_user("U"), from_assistant("A"))
        assert [m.content for m in tpl] == ["S", "U", "A"]
        assert len(tpl) == 3

    def test_invoke_substitutes_every_message(self, capital_template: Template) -> None:
        result = capital_template.invoke({"country": "France"})
        assert result.messages[1].content == "What is the capital of France?"
        assert result.messages[0].content == "You are a helpful assistant."

    def test_invoke_leaves_original_unchanged(self, capital_template: Template) -> None:
        capital_template.invoke({"country": "Japan"})
        assert capital_template.messages[1].content == "What is the capital of {{country}}?"

    @pytest.mark.parametrize("variables", [None, {}])
    def test_invoke_with_no_variables_is_identity(
        self, capital_template: Template, variables: dict[str, str] | None
    ) -> None:
        result = capital_template.invoke(variables)
        assert result is capital_template
        assert result.to_json() == capital_template.to_json()

    def test_round_trip_json(self) -> None:
        out = from_messages(from_system("S"), from_user("U")).invoke({}).to_json()
        assert out == '[{"role":"system","content":"S"},{"role":"user","content":"U"}]'

    def test_to_json_keeps_unicode(self) -> None:
        out = from_messages(from_user("Ça va?")).to_json()
        assert json.loads(out) == [{"role": "user", "content": "Ça va?"}]
        assert "Ça" in out

    def test_append_returns_new_template(self) -> None:
        tpl = from_messages(from_user("hi"))
        longer = tpl.append(from_assistant("hello"))
        assert len(tpl) == 1
        assert len(longer) == 2
        assert longer.messages[-1].content == "hello"


@pytest.mark.unit
class TestTemplateValidate:
    def test_valid(self, capital_template: Template) -> None:
        capital_template.validate()

    def test_empty_template(self) -> None:
        with pytest.raises(ValidationError, match="template cannot be empty"):
            from_messages().validate()

    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_invalid_message_position(self, position: int) -> None:
        messages = [from_system("S"), from_user("U"), from_assistant("A")]
        messages[position] = from_user("")
        with pytest.raises(TemplateError) as exc_info:
            from_messages(*messages).validate()

        err = exc_info.value
        assert err.position == f"message[{position}]"
        assert isinstance(err.cause, ValidationError)
        assert err.cause.field == "content"
        assert err.__cause__ is err.cause

    def test_first_failure_reported(self) -> None:
        tpl = from_messages(from_user("ok"), Message(role="bot", content="x"), from_user(""))
        with pytest.raises(TemplateError) as exc_info:
            tpl.validate()
        assert exc_info.value.position == "message[1]"
        assert exc_info.value.cause.field == "role"  # type: ignore[union-attr]
