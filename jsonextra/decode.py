"""Composable JSON decoders.

A :class:`Decoder` describes how to pull a typed value out of a parsed JSON
value. Running a decoder never raises for malformed input; it returns
``Err(DecodeError)`` naming where decoding diverged and what was expected.

Scalar type checks go through pydantic ``TypeAdapter``s in strict mode so that
``true`` is never accepted as an integer and ``"1"`` is never a number.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from pydantic import TypeAdapter, ValidationError

from jsonextra.result import Err, Ok, Result

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class DecodeError:
    """Why a decoder rejected a value.

    ``path`` lists the field names and array indexes leading from the root to
    the rejected value. ``alternatives`` is only set by :func:`one_of`.
    """

    message: str
    value: Any = None
    path: tuple[object, ...] = ()
    alternatives: tuple[DecodeError, ...] = ()

    def nest(self, segment: object) -> DecodeError:
        """Return a copy located one level deeper, under *segment*."""
        return replace(self, path=(segment, *self.path))

    @property
    def location(self) -> str:
        parts = ["json"]
        for segment in self.path:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif isinstance(segment, str) and _IDENTIFIER.match(segment):
                parts.append(f".{segment}")
            elif isinstance(segment, str):
                parts.append(f"[{json.dumps(segment)}]")
            else:
                parts.append(f"[{segment!r}]")
        return "".join(parts)

    def __str__(self) -> str:
        if self.alternatives:
            lines = [f"All {len(self.alternatives)} alternatives failed at {self.location}:"]
            for number, alternative in enumerate(self.alternatives, start=1):
                lines.append(f"  ({number}) " + str(alternative).replace("\n", "\n      "))
            return "\n".join(lines)
        try:
            rendered = json.dumps(self.value, indent=4, default=repr)
        except (TypeError, ValueError):
            rendered = repr(self.value)
        rendered = rendered.replace("\n", "\n    ")
        return f"Problem with the value at {self.location}:\n\n    {rendered}\n\n{self.message}"


class Decoder[T]:
    """A reusable description of how to decode a ``T`` from a JSON value."""

    __slots__ = ("_run", "_label")

    def __init__(self, run: Callable[[Any], Result[DecodeError, T]], label: str = "decoder") -> None:
        self._run = run
        self._label = label

    def __repr__(self) -> str:
        return f"<Decoder {self._label}>"

    def run(self, raw: Any) -> Result[DecodeError, T]:
        return self._run(raw)

    def map[U](self, fn: Callable[[T], U]) -> Decoder[U]:
        return map_(fn, self)

    def and_then[U](self, fn: Callable[[T], Decoder[U]]) -> Decoder[U]:
        return and_then(fn, self)

    def and_map[A, B](self: Decoder[Callable[[A], B]], other: Decoder[A]) -> Decoder[B]:
        """Apply the decoded function to the value decoded by *other*.

        Both decoders see the same input. When either fails the first error
        wins, checking this decoder before *other*.
        """
        return map2(lambda fn, arg: fn(arg), self, other)

    def with_default(self, fallback: T) -> Decoder[T]:
        """Never fail here: replace any failure of this decoder with *fallback*."""

        def run(raw: Any) -> Result[DecodeError, T]:
            result = self.run(raw)
            if isinstance(result, Err):
                logger.debug(
                    "json.default_used: %s at %s", result.error.message, result.error.location
                )
                return Ok(fallback)
            return result

        return Decoder(run, f"{self._label} with default")


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def _strict(adapter: TypeAdapter[Any], expected: str) -> Decoder[Any]:
    def run(raw: Any) -> Result[DecodeError, Any]:
        try:
            return Ok(adapter.validate_python(raw, strict=True))
        except ValidationError:
            return Err(DecodeError(f"Expecting {expected}", raw))

    return Decoder(run, expected)


string: Decoder[str] = _strict(TypeAdapter(str), "a STRING")
integer: Decoder[int] = _strict(TypeAdapter(int), "an INT")
floating: Decoder[float] = _strict(TypeAdapter(float), "a FLOAT")
boolean: Decoder[bool] = _strict(TypeAdapter(bool), "a BOOL")

_NONE = TypeAdapter(None)


def null[T](default: T) -> Decoder[T]:
    """Succeed with *default* when the value is JSON ``null``."""

    def run(raw: Any) -> Result[DecodeError, T]:
        try:
            _NONE.validate_python(raw, strict=True)
        except ValidationError:
            return Err(DecodeError("Expecting null", raw))
        return Ok(default)

    return Decoder(run, "null")


def value() -> Decoder[Any]:
    """Pass the raw JSON value through untouched."""
    return Decoder(Ok, "value")


# ---------------------------------------------------------------------------
# Containers and navigation
# ---------------------------------------------------------------------------


def list_of[T](decoder: Decoder[T]) -> Decoder[list[T]]:
    def run(raw: Any) -> Result[DecodeError, list[T]]:
        if not isinstance(raw, list | tuple):
            return Err(DecodeError("Expecting a LIST", raw))
        items: list[T] = []
        for position, element in enumerate(raw):
            result = decoder.run(element)
            if isinstance(result, Err):
                return Err(result.error.nest(position))
            items.append(result.value)
        return Ok(items)

    return Decoder(run, f"list of {decoder._label}")


def key_value_pairs[T](decoder: Decoder[T]) -> Decoder[list[tuple[str, T]]]:
    def run(raw: Any) -> Result[DecodeError, list[tuple[str, T]]]:
        if not isinstance(raw, dict):
            return Err(DecodeError("Expecting an OBJECT", raw))
        pairs: list[tuple[str, T]] = []
        for key, element in raw.items():
            result = decoder.run(element)
            if isinstance(result, Err):
                return Err(result.error.nest(key))
            pairs.append((key, result.value))
        return Ok(pairs)

    return Decoder(run, f"key/value pairs of {decoder._label}")


def dict_of[T](decoder: Decoder[T]) -> Decoder[dict[str, T]]:
    """Decode a JSON object whose values all share one decoder."""
    return key_value_pairs(decoder).map(dict)


def field[T](name: str, decoder: Decoder[T]) -> Decoder[T]:
    def run(raw: Any) -> Result[DecodeError, T]:
        if not isinstance(raw, dict) or name not in raw:
            return Err(DecodeError(f"Expecting an OBJECT with a field named `{name}`", raw))
        result = decoder.run(raw[name])
        if isinstance(result, Err):
            return Err(result.error.nest(name))
        return result

    return Decoder(run, f"field {name!r}")


def at[T](path: Sequence[str], decoder: Decoder[T]) -> Decoder[T]:
    """Decode a nested field, e.g. ``at(["user", "name"], string)``."""
    for name in reversed(path):
        decoder = field(name, decoder)
    return decoder


def index[T](position: int, decoder: Decoder[T]) -> Decoder[T]:
    def run(raw: Any) -> Result[DecodeError, T]:
        if not isinstance(raw, list | tuple):
            return Err(DecodeError("Expecting a LIST", raw))
        if not 0 <= position < len(raw):
            msg = f"Expecting a LONGER array. Need index {position} but only see {len(raw)} entries"
            return Err(DecodeError(msg, raw))
        result = decoder.run(raw[position])
        if isinstance(result, Err):
            return Err(result.error.nest(position))
        return result

    return Decoder(run, f"index {position}")


# ---------------------------------------------------------------------------
# Optionality
# ---------------------------------------------------------------------------


def optional[T](decoder: Decoder[T]) -> Decoder[T | None]:
    """Succeed with ``None`` whenever *decoder* fails."""

    def run(raw: Any) -> Result[DecodeError, T | None]:
        result = decoder.run(raw)
        if isinstance(result, Err):
            return Ok(None)
        return result

    return Decoder(run, f"optional {decoder._label}")


def nullable[T](decoder: Decoder[T]) -> Decoder[T | None]:
    """Accept JSON ``null`` as ``None``; anything else must satisfy *decoder*."""

    def run(raw: Any) -> Result[DecodeError, T | None]:
        if raw is None:
            return Ok(None)
        return decoder.run(raw)

    return Decoder(run, f"nullable {decoder._label}")


# ---------------------------------------------------------------------------
# Construction and composition
# ---------------------------------------------------------------------------


def succeed[T](result: T) -> Decoder[T]:
    return Decoder(lambda _raw: Ok(result), "succeed")


def fail(message: str) -> Decoder[Any]:
    return Decoder(lambda raw: Err(DecodeError(message, raw)), "fail")


def lazy[T](thunk: Callable[[], Decoder[T]]) -> Decoder[T]:
    """Defer building a decoder, for recursive structures."""
    return Decoder(lambda raw: thunk().run(raw), "lazy")


def map_[T, U](fn: Callable[[T], U], decoder: Decoder[T]) -> Decoder[U]:
    def run(raw: Any) -> Result[DecodeError, U]:
        return decoder.run(raw).map(fn)

    return Decoder(run, decoder._label)


def map2[A, B, C](fn: Callable[[A, B], C], first: Decoder[A], second: Decoder[B]) -> Decoder[C]:
    """Run both decoders on the same value and combine their results."""

    def run(raw: Any) -> Result[DecodeError, C]:
        left = first.run(raw)
        right = second.run(raw)
        match left, right:
            case Ok(a), Ok(b):
                return Ok(fn(a, b))
            case Err(), _:
                return left
            case _:
                return right

    return Decoder(run, f"{first._label} and {second._label}")


def and_then[T, U](fn: Callable[[T], Decoder[U]], decoder: Decoder[T]) -> Decoder[U]:
    def run(raw: Any) -> Result[DecodeError, U]:
        result = decoder.run(raw)
        if isinstance(result, Err):
            return result
        return fn(result.value).run(raw)

    return Decoder(run, decoder._label)


def one_of[T](*decoders: Decoder[T]) -> Decoder[T]:
    """Try each decoder in order and keep the first success."""

    def run(raw: Any) -> Result[DecodeError, T]:
        errors: list[DecodeError] = []
        for decoder in decoders:
            result = decoder.run(raw)
            if isinstance(result, Ok):
                return result
            errors.append(result.error)
        if not errors:
            return Err(DecodeError("Ran into a one_of with no possibilities!", raw))
        return Err(DecodeError("All alternatives failed", raw, alternatives=tuple(errors)))

    return Decoder(run, "one of")


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------


def decode_value[T](decoder: Decoder[T], raw: Any) -> Result[DecodeError, T]:
    """Run *decoder* against an already parsed JSON value."""
    return decoder.run(raw)


def decode_string[T](decoder: Decoder[T], text: str | bytes) -> Result[DecodeError, T]:
    """Parse *text* as JSON, then run *decoder* against it."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.debug("json.parse_failed: %s", exc)
        msg = f"This is not valid JSON! {exc.msg} (line {exc.lineno}, column {exc.colno})"
        return Err(DecodeError(msg, _printable(text)))
    except (TypeError, ValueError) as exc:
        logger.debug("json.parse_failed: %s", exc)
        return Err(DecodeError(f"This is not valid JSON! {exc}", _printable(text)))
    return decoder.run(raw)


def _printable(text: object) -> object:
    if isinstance(text, bytes | bytearray):
        return bytes(text).decode(errors="replace")
    return text
