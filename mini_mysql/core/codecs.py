"""Model field codec helpers for DB serialization."""

from __future__ import annotations

import json
import types
from dataclasses import Field
from enum import Enum
from functools import lru_cache
from typing import Any, Type, Union, get_args, get_origin, get_type_hints


def serialize_value(cls: Type[Any], field: Field[Any], value: Any) -> Any:
    """Serialize one model field value for DB writes."""

    if value is None:
        return None

    annotation = model_type_hints(cls).get(field.name, field.type)
    codec = _field_codec(field)
    if isinstance(value, Enum) or codec == "enum":
        return _serialize_enum(value, annotation=annotation, field=field)

    if _is_json_field(annotation, codec):
        return _serialize_json(value)

    return value


def _serialize_enum(value: Any, *, annotation: Any, field: Field[Any]) -> Any:
    if isinstance(value, Enum):
        return value.value
    enum_type = _unwrap_optional(annotation)
    if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
        raise ValueError(
            f"Field {field.name!r} uses enum codec but has no Enum annotation."
        )
    try:
        return enum_type(value).value
    except ValueError as exc:
        raise ValueError(
            f"Invalid enum value {value!r} for field {field.name!r}."
        ) from exc


def _serialize_json(value: Any) -> Any:
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return value
    return json.dumps(value)


def _field_codec(field: Field[Any]) -> str | None:
    codec = field.metadata.get("codec")
    if codec is None:
        return None
    if not isinstance(codec, str):
        raise TypeError(
            f"Field {field.name!r} metadata codec must be a string, got {type(codec).__name__}."
        )
    normalized = codec.strip().lower()
    if normalized in {"json", "enum"}:
        return normalized
    raise ValueError(
        f"Unsupported codec {codec!r} on field {field.name!r}. "
        "Supported codecs: 'json', 'enum'."
    )


def _is_json_field(annotation: Any, codec: str | None) -> bool:
    if codec == "json":
        return True
    if codec == "enum":
        return False

    base = _unwrap_optional(annotation)
    if base in {dict, list}:
        return True
    if isinstance(base, str):
        return base.startswith(("dict", "list", "Dict", "List"))

    return get_origin(base) in {dict, list}


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin not in {Union, types.UnionType}:
        return annotation

    all_args = get_args(annotation)
    args = [arg for arg in all_args if arg is not type(None)]
    if len(args) == 1 and len(all_args) == 2:
        return args[0]
    return annotation


@lru_cache(maxsize=None)
def model_type_hints(cls: Type[Any]) -> dict[str, Any]:
    """Resolved field annotations, falling back to raw strings when unresolvable."""

    try:
        return dict(get_type_hints(cls))
    except (NameError, TypeError):
        return {}
