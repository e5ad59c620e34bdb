"""
Turns the text of a tool result into typed Walter records.

Parsing is strict: bad JSON, a missing or mistyped required field, or an
unknown ``status`` tag raise ``DecodeError`` naming the record and the field
path (``chats[2].status``). Optional fields of the wrong type are dropped by
the models themselves.
"""

import json
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from walter_ai.errors import DecodeError
from walter_ai.models.response import ResponseStatus

M = TypeVar("M", bound=BaseModel)

PREVIEW_CHARS = 200

_response_status = TypeAdapter(ResponseStatus)


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text if len(text) <= limit else text[:limit] + "…"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise DecodeError(f"Expected JSON from Walter, got: {preview(text)}") from e


def _join_path(prefix: str, loc: tuple[Any, ...]) -> str:
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _to_decode_error(error: ValidationError, record: str, prefix: str = "", tagged: bool = False) -> DecodeError:
    first = error.errors()[0]
    loc = tuple(first["loc"])
    if tagged:
        if first["type"] == "union_tag_invalid":
            tag = first.get("ctx", {}).get("tag")
            return DecodeError(f"{record}: unknown status '{tag}'", record, _join_path(prefix, ("status",)))
        if first["type"] == "union_tag_not_found":
            loc = ("status",)
            first = {**first, "type": "missing"}
        else:
            # drop the variant tag pydantic puts in front of the field name
            loc = loc[1:]
    field = _join_path(prefix, loc)
    if first["type"] == "missing":
        return DecodeError(f"{record}: missing required field '{field}'", record, field)
    return DecodeError(f"{record}: invalid '{field}': {first['msg']}", record, field)


def require_object(raw: Any, record: str, path: str = "") -> dict[str, Any]:
    if not isinstance(raw, dict):
        where = f" at '{path}'" if path else ""
        raise DecodeError(f"{record}: expected object{where}, got {type(raw).__name__}", record, path or None)
    return raw


def require_list(obj: dict[str, Any], field: str, record: str) -> list[Any]:
    value = obj.get(field)
    if not isinstance(value, list):
        raise DecodeError(f"{record}: expected array for '{field}', got {type(value).__name__}", record, field)
    return value


def decode(model: type[M], raw: Any, record: Optional[str] = None, path: str = "") -> M:
    """Validate one record. ``path`` prefixes field names in diagnostics."""
    record = record or model.__name__
    require_object(raw, record, path)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise _to_decode_error(e, record, path) from e


def decode_list(model: type[M], obj: dict[str, Any], field: str, record: str) -> list[M]:
    items = require_list(obj, field, record)
    return [decode(model, item, model.__name__, f"{field}[{i}]") for i, item in enumerate(items)]


def decode_response_status(raw: Any) -> ResponseStatus:
    require_object(raw, "ResponseStatus")
    try:
        return _response_status.validate_python(raw)
    except ValidationError as e:
        raise _to_decode_error(e, "ResponseStatus", tagged=True) from e
