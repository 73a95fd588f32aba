"""Primitive JSON encoders.

An encoder is any callable turning a Python value into a :data:`JsonValue`,
the in-memory shape accepted by :func:`json.dumps`.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping

type JsonPrimitive = None | bool | int | float | str
type JsonValue = JsonPrimitive | list[JsonValue] | dict[str, JsonValue]
type Encoder[T] = Callable[[T], JsonValue]


def string(item: str) -> JsonValue:
    return item


def integer(item: int) -> JsonValue:
    return item


def floating(item: float) -> JsonValue:
    return item


def boolean(item: bool) -> JsonValue:
    return item


def null() -> JsonValue:
    return None


def list_[T](encoder: Encoder[T], items: Iterable[T]) -> JsonValue:
    return [encoder(item) for item in items]


def dict_[K, V](key_fn: Callable[[K], str], encoder: Encoder[V], mapping: Mapping[K, V]) -> JsonValue:
    """Encode a mapping as a native JSON object; *key_fn* must produce strings."""
    return {key_fn(key): encoder(item) for key, item in mapping.items()}


def object_(pairs: Iterable[tuple[str, JsonValue]]) -> JsonValue:
    return dict(pairs)


def encode(item: JsonValue, indent: int = 0) -> str:
    """Serialize to JSON text; ``indent=0`` gives the compact form."""
    if indent:
        return json.dumps(item, indent=indent)
    return json.dumps(item, separators=(",", ":"))
