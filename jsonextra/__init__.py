"""Composable helpers on top of the json module: record decoding, defaults, dicts and results."""

from jsonextra.decode import DecodeError, Decoder, decode_string, decode_value
from jsonextra.extra import (
    and_map,
    curry,
    decode_dict,
    decode_dict_with,
    decode_record,
    decode_result,
    decode_result_from_string,
    encode_dict,
    encode_optional,
    encode_result,
    encode_result_to_string,
    from_result,
    optional_field,
    optional_nullable_field,
    sequence,
    with_default,
)
from jsonextra.result import Err, Ok, Result, UnwrapError

__all__ = [
    "DecodeError",
    "Decoder",
    "Err",
    "Ok",
    "Result",
    "UnwrapError",
    "and_map",
    "curry",
    "decode_dict",
    "decode_dict_with",
    "decode_record",
    "decode_result",
    "decode_result_from_string",
    "decode_string",
    "decode_value",
    "encode_dict",
    "encode_optional",
    "encode_result",
    "encode_result_to_string",
    "from_result",
    "optional_field",
    "optional_nullable_field",
    "sequence",
    "with_default",
]
