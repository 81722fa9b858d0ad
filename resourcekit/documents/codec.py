"""JSON document codec wrapping values as `{"content": <value>}`."""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from resourcekit.runtime.errors import DocumentDecodeError, DocumentEncodeError
from resourcekit.runtime.json_codec import dumps_text, loads

TValue = TypeVar("TValue")

CONTENT_FIELD = "content"


class JsonDocumentCodec:
    """orjson-backed codec; dataclasses and typed collections round-trip."""

    def __init__(self, *, pretty: bool = True) -> None:
        self._pretty = pretty

    def encode(self, value: Any) -> str:
        try:
            return dumps_text({CONTENT_FIELD: value}, pretty=self._pretty, default=_encode_default)
        except TypeError as exc:
            raise DocumentEncodeError(f"cannot serialize {type(value).__name__}: {exc}") from exc

    def decode(self, text: str, value_type: type[TValue]) -> TValue:
        try:
            document = loads(text)
        except ValueError as exc:
            raise DocumentDecodeError(f"malformed JSON: {exc}") from exc
        if not isinstance(document, dict) or CONTENT_FIELD not in document:
            raise DocumentDecodeError(f"document has no '{CONTENT_FIELD}' field")
        try:
            return convert(document[CONTENT_FIELD], value_type)
        except (TypeError, ValueError, KeyError) as exc:
            raise DocumentDecodeError(str(exc)) from exc


def _encode_default(value: Any) -> Any:
    to_payload = getattr(value, "to_payload", None)
    if callable(to_payload):
        return to_payload()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


def convert(data: Any, target: Any) -> Any:
    """Convert plain JSON data into an instance of `target`."""
    if target is Any or target is object:
        return data
    origin = get_origin(target)
    if origin is Union or origin is types.UnionType:
        return _convert_union(data, get_args(target))
    if origin in (list, set, frozenset, tuple) or origin is Sequence:
        return _convert_sequence(data, origin, get_args(target))
    if origin in (dict, Mapping):
        return _convert_mapping(data, get_args(target))
    if target is type(None):
        if data is not None:
            raise TypeError(f"expected null, got {type(data).__name__}")
        return None
    if not isinstance(target, type):
        raise TypeError(f"unsupported target type: {target!r}")
    if dataclasses.is_dataclass(target):
        return _convert_dataclass(data, target)
    from_payload = getattr(target, "from_payload", None)
    if callable(from_payload):
        if not isinstance(data, Mapping):
            raise TypeError(f"{target.__name__} expects an object, got {type(data).__name__}")
        return from_payload(data)
    if issubclass(target, Enum):
        return target(data)
    if target is float and isinstance(data, (int, float)) and not isinstance(data, bool):
        return float(data)
    if target is int and isinstance(data, bool):
        raise TypeError("expected int, got bool")
    if target is dict:
        return _convert_mapping(data, ())
    if target in (list, tuple, set, frozenset):
        return _convert_sequence(data, target, ())
    if not isinstance(data, target):
        raise TypeError(f"expected {target.__name__}, got {type(data).__name__}")
    return data


def _convert_union(data: Any, members: tuple[Any, ...]) -> Any:
    if data is None and type(None) in members:
        return None
    errors: list[str] = []
    for member in members:
        if member is type(None):
            continue
        try:
            return convert(data, member)
        except (TypeError, ValueError, KeyError) as exc:
            errors.append(str(exc))
    raise TypeError("no union member matched: " + "; ".join(errors))


def _convert_sequence(data: Any, origin: Any, args: tuple[Any, ...]) -> Any:
    if not isinstance(data, list):
        raise TypeError(f"expected array, got {type(data).__name__}")
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(convert(item, args[0]) for item in data)
        if args:
            if len(args) != len(data):
                raise ValueError(f"expected {len(args)} items, got {len(data)}")
            return tuple(convert(item, arg) for item, arg in zip(data, args, strict=True))
        return tuple(data)
    item_type = args[0] if args else Any
    items = [convert(item, item_type) for item in data]
    if origin in (set, frozenset):
        return origin(items)
    return items


def _convert_mapping(data: Any, args: tuple[Any, ...]) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected object, got {type(data).__name__}")
    value_type = args[1] if len(args) == 2 else Any
    return {key: convert(value, value_type) for key, value in data.items()}


def _convert_dataclass(data: Any, target: type[Any]) -> Any:
    if not isinstance(data, dict):
        raise TypeError(f"{target.__name__} expects an object, got {type(data).__name__}")
    hints = get_type_hints(target)
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(target):
        if not field.init or field.name not in data:
            continue
        kwargs[field.name] = convert(data[field.name], hints.get(field.name, Any))
    return target(**kwargs)
