"""Higher-order helpers built on the primitive decoders and encoders.

Wire shapes produced and consumed here:

* mappings: ``{"keys": [...], "values": [...]}``, two parallel arrays so that
  keys need not be strings;
* results: ``{"okay": ...}`` or ``{"error": ...}``, never both.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Mapping, Sequence
from typing import Any

from jsonextra import decode, encode
from jsonextra.config import ExtraSettings
from jsonextra.decode import DecodeError, Decoder
from jsonextra.encode import Encoder, JsonValue
from jsonextra.result import Err, Ok, Result

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Record building
# ---------------------------------------------------------------------------


def curry(fn: Callable[..., Any], arity: int) -> Any:
    """Turn an *arity*-argument callable into a chain of one-argument callables.

    ``curry(Person, 2)("Ann")(5) == Person("Ann", 5)``. An arity of 0 calls
    *fn* immediately.
    """
    if arity < 0:
        msg = f"arity must be non-negative, got {arity}"
        raise ValueError(msg)

    def collect(args: tuple[Any, ...]) -> Any:
        if len(args) == arity:
            return fn(*args)
        return lambda arg: collect((*args, arg))

    return collect(())


def and_map[A, B](value_decoder: Decoder[A], fn_decoder: Decoder[Callable[[A], B]]) -> Decoder[B]:
    """Pipeline form of :meth:`Decoder.and_map`, value decoder first."""
    return fn_decoder.and_map(value_decoder)


def decode_record[T](fn: Callable[..., T], *decoders: Decoder[Any]) -> Decoder[T]:
    """Decode each argument of *fn* with the matching decoder and call it.

    Equivalent to ``succeed(curry(fn, n)).and_map(d1)...and_map(dn)``.
    """
    builder: Decoder[Any] = decode.succeed(curry(fn, len(decoders)))
    for decoder in decoders:
        builder = builder.and_map(decoder)
    return builder


# ---------------------------------------------------------------------------
# Optional values
# ---------------------------------------------------------------------------


def with_default[T](fallback: T, decoder: Decoder[T]) -> Decoder[T]:
    """Pipeline form of :meth:`Decoder.with_default`.

    Only failures of *decoder* are replaced. Enclosing decoders still fail
    normally, so in ``field("x", with_default(0, integer))`` a missing ``x``
    is an error while a non-integer ``x`` becomes ``0``.
    """
    return decoder.with_default(fallback)


def encode_optional[T](encoder: Encoder[T], item: T | None) -> JsonValue:
    if item is None:
        return None
    return encoder(item)


def optional_field[T](name: str, decoder: Decoder[T]) -> Decoder[T | None]:
    """``None`` when *name* is absent; a present but malformed value still fails."""

    def run(raw: Any) -> Result[DecodeError, T | None]:
        if not isinstance(raw, dict):
            return Err(DecodeError(f"Expecting an OBJECT with an optional field named `{name}`", raw))
        if name not in raw:
            return Ok(None)
        return decode.field(name, decoder).run(raw)

    return Decoder(run, f"optional field {name!r}")


def optional_nullable_field[T](name: str, decoder: Decoder[T]) -> Decoder[T | None]:
    """Like :func:`optional_field`, also treating an explicit ``null`` as absent."""
    return optional_field(name, decode.nullable(decoder))


def from_result[T](result: Result[str, T]) -> Decoder[T]:
    """Lift an already computed result into a decoder."""
    match result:
        case Ok(item):
            return decode.succeed(item)
        case Err(message):
            return decode.fail(message)


def sequence[T](decoders: Sequence[Decoder[T]]) -> Decoder[list[T]]:
    """Run every decoder against the same value; fail with the first error."""
    collected: Decoder[list[T]] = decode.succeed([])
    for decoder in decoders:
        collected = decode.map2(lambda items, item: [*items, item], collected, decoder)
    return collected


# ---------------------------------------------------------------------------
# Mappings as parallel arrays
# ---------------------------------------------------------------------------


def encode_dict[K, V](key_encoder: Encoder[K], value_encoder: Encoder[V], mapping: Mapping[K, V]) -> JsonValue:
    keys: list[JsonValue] = []
    values: list[JsonValue] = []
    for key, item in mapping.items():
        keys.append(key_encoder(key))
        values.append(value_encoder(item))
    return {"keys": keys, "values": values}


def decode_dict_with[K: Hashable, A, V](
    key_decoder: Decoder[K],
    element_decoder: Decoder[A],
    convert: Callable[[A], V],
    *,
    strict: bool | None = None,
) -> Decoder[dict[K, V]]:
    """Decode ``{"keys": [...], "values": [...]}``, converting each value.

    With *strict* the two arrays must have equal length. Without it the pairs
    are truncated to the shorter array. ``None`` reads
    ``JSONEXTRA_STRICT_DICT_LENGTHS`` when the decoder is built. Duplicate
    keys keep the last value.

    Decoded keys must be hashable. Tuple keys travel as arrays, so decode
    them with ``list_of(...).map(tuple)``.
    """
    if strict is None:
        strict = ExtraSettings().strict_dict_lengths

    def build(raw: Any, keys: list[K], elements: list[A]) -> Result[DecodeError, dict[K, V]]:
        if len(keys) != len(elements):
            if strict:
                msg = (
                    "Expecting 'keys' and 'values' of equal length, "
                    f"got {len(keys)} keys and {len(elements)} values"
                )
                return Err(DecodeError(msg, raw))
            logger.warning(
                "json.dict_length_mismatch: truncating %d keys and %d values to %d pairs",
                len(keys),
                len(elements),
                min(len(keys), len(elements)),
            )
        for position, key in enumerate(keys):
            try:
                hash(key)
            except TypeError:
                msg = f"Expecting hashable keys, got {type(key).__name__}; map the key decoder to a tuple"
                return Err(DecodeError(msg, raw["keys"][position]).nest(position).nest("keys"))
        return Ok({key: convert(element) for key, element in zip(keys, elements, strict=False)})

    keys_decoder = decode.field("keys", decode.list_of(key_decoder))
    values_decoder = decode.field("values", decode.list_of(element_decoder))

    def run(raw: Any) -> Result[DecodeError, dict[K, V]]:
        match keys_decoder.run(raw), values_decoder.run(raw):
            case Ok(keys), Ok(elements):
                return build(raw, keys, elements)
            case (Err() as failure, _):
                return failure
            case (_, failure):
                return failure

    return Decoder(run, "dict")


def decode_dict[K: Hashable, V](
    key_decoder: Decoder[K], value_decoder: Decoder[V], *, strict: bool | None = None
) -> Decoder[dict[K, V]]:
    return decode_dict_with(key_decoder, value_decoder, lambda item: item, strict=strict)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def encode_result[E, A](error_encoder: Encoder[E], ok_encoder: Encoder[A], result: Result[E, A]) -> JsonValue:
    match result:
        case Ok(item):
            return {"okay": ok_encoder(item)}
        case Err(error):
            return {"error": error_encoder(error)}
    msg = f"expected Ok or Err, got {type(result).__name__}"
    raise TypeError(msg)


def decode_result[E, A](error_decoder: Decoder[E], ok_decoder: Decoder[A]) -> Decoder[Result[E, A]]:
    """Mirror of :func:`encode_result`.

    A present, decodable ``okay`` wins. Otherwise ``error`` must decode.
    """
    okay = decode.optional(decode.field("okay", ok_decoder).map(Ok))
    error = decode.field("error", error_decoder).map(Err)

    def pick(found: Ok[A] | None) -> Decoder[Result[E, A]]:
        if found is None:
            return error
        return decode.succeed(found)

    return okay.and_then(pick)


def encode_result_to_string[E, A](error_encoder: Encoder[E], ok_encoder: Encoder[A], result: Result[E, A]) -> str:
    return encode.encode(encode_result(error_encoder, ok_encoder, result))


def decode_result_from_string[E, A](
    error_decoder: Decoder[E], ok_decoder: Decoder[A], text: str
) -> Result[str, Result[E, A]]:
    """Parse and decode *text*; the outer ``Err`` carries a readable report."""
    return decode.decode_string(decode_result(error_decoder, ok_decoder), text).map_error(str)
