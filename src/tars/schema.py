"""JSON-schema derivation and decoding for structured output.

A structured-output target is either a type (pydantic model, dataclass,
TypedDict, ``list[...]`` ...) or an instance of one. Instances are populated
in place once the provider's reply has been decoded.
"""

from __future__ import annotations

import dataclasses
import functools
from typing import Any

from pydantic import BaseModel, PydanticUserError, TypeAdapter

from tars.exceptions import SchemaDerivationError

DEFAULT_SCHEMA_NAME = "schema"


def target_type(target: Any) -> Any:
    """Return the annotation describing *target*'s shape."""
    if isinstance(target, type) or _is_generic_alias(target):
        return target
    return type(target)


def _is_generic_alias(target: Any) -> bool:
    return hasattr(target, "__origin__")


@functools.lru_cache(maxsize=128)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def derive_json_schema(target: Any) -> dict[str, Any]:
    """Derive the JSON schema for a structured-output target.

    Object schemas are closed (``additionalProperties: false``) and list every
    property as required, including defaulted ones, so the result can be sent
    with ``strict: true``.

    Raises:
        SchemaDerivationError: If pydantic cannot reflect the target's type.
    """
    tp = target_type(target)
    try:
        schema = _adapter(tp).json_schema()
    except (PydanticUserError, TypeError) as exc:
        raise SchemaDerivationError(tp, str(exc)) from exc
    return _close_objects(schema)


def _close_objects(node: Any) -> Any:
    if isinstance(node, dict):
        closed = {key: _close_objects(value) for key, value in node.items()}
        if closed.get("type") == "object" and "properties" in closed:
            closed.setdefault("additionalProperties", False)
            closed["required"] = list(closed["properties"])
        return closed
    if isinstance(node, list):
        return [_close_objects(item) for item in node]
    return node


def response_format(schema: dict[str, Any], name: str = DEFAULT_SCHEMA_NAME) -> dict[str, Any]:
    """Build the ``response_format`` constraint for a chat-completions request."""
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "strict": True, "schema": schema},
    }


def apply_structured_output(target: Any, content: str | bytes) -> Any:
    """Decode *content* as the target's type and write it back into *target*.

    Returns the decoded value. When *target* is a type there is nothing to
    write back and only the value is returned.

    Raises:
        pydantic.ValidationError: If *content* is not valid JSON of that shape.
        TypeError: If *target* is an instance that cannot be updated.
    """
    value = _adapter(target_type(target)).validate_json(content)
    if isinstance(target, type) or _is_generic_alias(target):
        return value

    if isinstance(target, BaseModel):
        for name in type(target).model_fields:
            setattr(target, name, getattr(value, name))
    elif dataclasses.is_dataclass(target):
        for f in dataclasses.fields(target):
            setattr(target, f.name, getattr(value, f.name))
    elif isinstance(target, dict):
        target.clear()
        target.update(value)
    elif isinstance(target, list):
        target[:] = value
    else:
        msg = f"cannot write structured output into {type(target).__name__} instance"
        raise TypeError(msg)
    return value
