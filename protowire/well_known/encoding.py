# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
Binary encoding of the well-known types.

The well-known types are ordinary proto3 messages, this module encodes their message bodies (without an outer length
prefix, the same as a top-level message) using the wire primitives:

- Duration and Timestamp: `int64 seconds = 1; int32 nanos = 2;`
- wrappers: `T value = 1;`
- Value: `oneof kind { NullValue null_value = 1; double number_value = 2; string string_value = 3; bool bool_value = 4;
  Struct struct_value = 5; ListValue list_value = 6; }`
- Struct: `map<string, Value> fields = 1;`
- ListValue: `repeated Value values = 1;`

Fields holding their default value are not written, unknown fields are skipped when decoding and, for repeated
occurrences of a singular field, the last one wins.

>>> from protowire.well_known.duration import Duration
>>> se = Serializer.build_bytes_serializer()
>>> encode_duration(se, Duration(seconds=1, nanos=500_000_000))
>>> bytes(se.finalize()).hex()
'08011080cab5ee01'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('08011080cab5ee01'))
>>> decode_duration(de)
Duration(seconds=1, nanos=500000000)
"""

import math
from typing import Callable, NamedTuple, TypeVar

from protowire.conf import ProtowireSettings, get_default_settings
from protowire.exception import UnsupportedOperationError
from protowire.serialization import BadDataError, Deserializer, Serializer
from protowire.serialization.encoding.bytes import decode_bytes, encode_bytes
from protowire.serialization.encoding.fixed import decode_double, decode_float, encode_double, encode_float
from protowire.serialization.encoding.tag import WireType, decode_tag, encode_tag, skip_field
from protowire.serialization.encoding.utf8 import decode_utf8, encode_utf8
from protowire.serialization.encoding.varint import decode_varint, encode_varint
from protowire.serialization.encoding.zigzag import limit_int32
from protowire.well_known.duration import Duration
from protowire.well_known.null_value import NullValue
from protowire.well_known.struct_value import ListValue, Struct, Value, ValueKind
from protowire.well_known.timestamp import Timestamp
from protowire.well_known.wrappers import (
    BoolValue,
    BytesValue,
    DoubleValue,
    FloatValue,
    Int32Value,
    Int64Value,
    StringValue,
    UInt32Value,
    UInt64Value,
    WrapperValue,
)

W = TypeVar('W', bound=WrapperValue)
T = TypeVar('T')


def _check_wire_type(field_number: int, wire_type: WireType, expected: WireType) -> None:
    if wire_type != expected:
        raise BadDataError(f'field {field_number} has wire type {wire_type.name}, expected {expected.name}')


def _encode_embedded(serializer: Serializer, field_number: int, encoder: Callable[[Serializer], None]) -> None:
    payload = Serializer.build_bytes_serializer()
    encoder(payload)
    encode_tag(serializer, field_number, WireType.LEN)
    encode_bytes(serializer, payload.finalize())


def _decode_embedded(
    deserializer: Deserializer,
    settings: ProtowireSettings,
    decoder: Callable[[Deserializer], T],
) -> T:
    payload = Deserializer.build_bytes_deserializer(decode_bytes(deserializer, settings=settings))
    return decoder(payload)


def _check_depth(depth: int, settings: ProtowireSettings) -> None:
    if depth > settings.MAX_RECURSION_DEPTH:
        raise BadDataError(f'message is nested more than {settings.MAX_RECURSION_DEPTH} levels deep')


# Duration and Timestamp


def _encode_seconds_nanos(serializer: Serializer, seconds: int, nanos: int) -> None:
    if seconds:
        encode_tag(serializer, 1, WireType.VARINT)
        encode_varint(serializer, seconds)
    if nanos:
        encode_tag(serializer, 2, WireType.VARINT)
        encode_varint(serializer, nanos)


def _decode_seconds_nanos(deserializer: Deserializer, settings: ProtowireSettings) -> tuple[int, int]:
    seconds = nanos = 0
    while not deserializer.is_empty():
        field_number, wire_type = decode_tag(deserializer)
        if field_number == 1:
            _check_wire_type(field_number, wire_type, WireType.VARINT)
            seconds = decode_varint(deserializer, signed=True)
        elif field_number == 2:
            _check_wire_type(field_number, wire_type, WireType.VARINT)
            nanos = limit_int32(decode_varint(deserializer, signed=True))
        else:
            skip_field(deserializer, field_number, wire_type, settings=settings)
    return seconds, nanos


def encode_duration(serializer: Serializer, duration: Duration) -> None:
    duration.validate()
    _encode_seconds_nanos(serializer, duration.seconds, duration.nanos)


def decode_duration(deserializer: Deserializer, *, settings: ProtowireSettings | None = None) -> Duration:
    seconds, nanos = _decode_seconds_nanos(deserializer, settings or get_default_settings())
    duration = Duration(seconds=seconds, nanos=nanos)
    duration.validate()
    return duration


def encode_timestamp(serializer: Serializer, timestamp: Timestamp) -> None:
    timestamp.validate()
    _encode_seconds_nanos(serializer, timestamp.seconds, timestamp.nanos)


def decode_timestamp(deserializer: Deserializer, *, settings: ProtowireSettings | None = None) -> Timestamp:
    seconds, nanos = _decode_seconds_nanos(deserializer, settings or get_default_settings())
    timestamp = Timestamp(seconds=seconds, nanos=nanos)
    timestamp.validate()
    return timestamp


# Wrappers


class _WrapperCodec(NamedTuple):
    wire_type: WireType
    encode: Callable[[Serializer, object], None]
    decode: Callable[[Deserializer, ProtowireSettings], object]


def _is_default(value: object) -> bool:
    if isinstance(value, float):
        # -0.0 is not the default value
        return value == 0.0 and math.copysign(1.0, value) > 0
    return not value


_WRAPPER_CODECS: dict[type[WrapperValue], _WrapperCodec] = {
    BoolValue: _WrapperCodec(
        WireType.VARINT,
        lambda se, value: encode_varint(se, int(bool(value))),
        lambda de, _: decode_varint(de, signed=False) != 0,
    ),
    StringValue: _WrapperCodec(
        WireType.LEN,
        lambda se, value: encode_utf8(se, value),  # type: ignore[arg-type]
        lambda de, settings: decode_utf8(de, settings=settings),
    ),
    BytesValue: _WrapperCodec(
        WireType.LEN,
        lambda se, value: encode_bytes(se, value),  # type: ignore[arg-type]
        lambda de, settings: decode_bytes(de, settings=settings),
    ),
    DoubleValue: _WrapperCodec(
        WireType.I64,
        lambda se, value: encode_double(se, value),  # type: ignore[arg-type]
        lambda de, _: decode_double(de),
    ),
    FloatValue: _WrapperCodec(
        WireType.I32,
        lambda se, value: encode_float(se, value),  # type: ignore[arg-type]
        lambda de, _: decode_float(de),
    ),
    Int32Value: _WrapperCodec(
        WireType.VARINT,
        lambda se, value: encode_varint(se, limit_int32(value)),  # type: ignore[arg-type]
        lambda de, _: limit_int32(decode_varint(de, signed=True)),
    ),
    Int64Value: _WrapperCodec(
        WireType.VARINT,
        lambda se, value: encode_varint(se, value),  # type: ignore[arg-type]
        lambda de, _: decode_varint(de, signed=True),
    ),
    UInt32Value: _WrapperCodec(
        WireType.VARINT,
        lambda se, value: encode_varint(se, value),  # type: ignore[arg-type]
        lambda de, _: decode_varint(de, signed=False) & 0xffff_ffff,
    ),
    UInt64Value: _WrapperCodec(
        WireType.VARINT,
        lambda se, value: encode_varint(se, value),  # type: ignore[arg-type]
        lambda de, _: decode_varint(de, signed=False),
    ),
}


def _get_wrapper_codec(wrapper_cls: type[WrapperValue]) -> _WrapperCodec:
    codec = _WRAPPER_CODECS.get(wrapper_cls)
    if codec is None:
        raise UnsupportedOperationError(f'no binary codec for {wrapper_cls.__name__}')
    return codec


def encode_wrapper(serializer: Serializer, wrapper: WrapperValue) -> None:
    codec = _get_wrapper_codec(type(wrapper))
    if _is_default(wrapper.value):
        return
    encode_tag(serializer, 1, codec.wire_type)
    codec.encode(serializer, wrapper.value)


def decode_wrapper(
    deserializer: Deserializer,
    wrapper_cls: type[W],
    *,
    settings: ProtowireSettings | None = None,
) -> W:
    settings = settings or get_default_settings()
    codec = _get_wrapper_codec(wrapper_cls)
    wrapper = wrapper_cls()
    while not deserializer.is_empty():
        field_number, wire_type = decode_tag(deserializer)
        if field_number == 1:
            _check_wire_type(field_number, wire_type, codec.wire_type)
            wrapper = wrapper_cls(codec.decode(deserializer, settings))
        else:
            skip_field(deserializer, field_number, wire_type, settings=settings)
    return wrapper


# Value, Struct and ListValue


def encode_value(serializer: Serializer, value: Value, *, settings: ProtowireSettings | None = None) -> None:
    _encode_value(serializer, value, settings or get_default_settings(), 0)


def _encode_value(serializer: Serializer, value: Value, settings: ProtowireSettings, depth: int) -> None:
    _check_depth(depth, settings)
    match value.kind:
        case ValueKind.NULL:
            encode_tag(serializer, 1, WireType.VARINT)
            encode_varint(serializer, NullValue.NULL_VALUE)
        case ValueKind.NUMBER:
            assert isinstance(value.payload, float)
            encode_tag(serializer, 2, WireType.I64)
            encode_double(serializer, value.payload)
        case ValueKind.STRING:
            assert isinstance(value.payload, str)
            encode_tag(serializer, 3, WireType.LEN)
            encode_utf8(serializer, value.payload)
        case ValueKind.BOOL:
            encode_tag(serializer, 4, WireType.VARINT)
            encode_varint(serializer, int(value.payload is True))
        case ValueKind.STRUCT:
            struct = value.payload
            assert isinstance(struct, Struct)
            _encode_embedded(serializer, 5, lambda se: _encode_struct(se, struct, settings, depth + 1))
        case ValueKind.LIST:
            list_value = value.payload
            assert isinstance(list_value, ListValue)
            _encode_embedded(serializer, 6, lambda se: _encode_list_value(se, list_value, settings, depth + 1))


def decode_value(deserializer: Deserializer, *, settings: ProtowireSettings | None = None) -> Value:
    return _decode_value(deserializer, settings or get_default_settings(), 0)


def _decode_value(deserializer: Deserializer, settings: ProtowireSettings, depth: int) -> Value:
    _check_depth(depth, settings)
    value = Value.null_value()
    while not deserializer.is_empty():
        field_number, wire_type = decode_tag(deserializer)
        match field_number:
            case 1:
                _check_wire_type(field_number, wire_type, WireType.VARINT)
                decode_varint(deserializer, signed=False)
                value = Value.null_value()
            case 2:
                _check_wire_type(field_number, wire_type, WireType.I64)
                value = Value.number_value(decode_double(deserializer))
            case 3:
                _check_wire_type(field_number, wire_type, WireType.LEN)
                value = Value.string_value(decode_utf8(deserializer, settings=settings))
            case 4:
                _check_wire_type(field_number, wire_type, WireType.VARINT)
                value = Value.bool_value(decode_varint(deserializer, signed=False) != 0)
            case 5:
                _check_wire_type(field_number, wire_type, WireType.LEN)
                struct = _decode_embedded(deserializer, settings, lambda de: _decode_struct(de, settings, depth + 1))
                value = Value.struct_value(struct)
            case 6:
                _check_wire_type(field_number, wire_type, WireType.LEN)
                list_value = _decode_embedded(
                    deserializer, settings, lambda de: _decode_list_value(de, settings, depth + 1)
                )
                value = Value.list_value(list_value)
            case _:
                skip_field(deserializer, field_number, wire_type, settings=settings)
    return value


def encode_struct(serializer: Serializer, struct: Struct, *, settings: ProtowireSettings | None = None) -> None:
    _encode_struct(serializer, struct, settings or get_default_settings(), 0)


def _encode_struct(serializer: Serializer, struct: Struct, settings: ProtowireSettings, depth: int) -> None:
    _check_depth(depth, settings)

    def encode_entry(se: Serializer, key: str, value: Value) -> None:
        encode_tag(se, 1, WireType.LEN)
        encode_utf8(se, key)
        _encode_embedded(se, 2, lambda inner: _encode_value(inner, value, settings, depth + 1))

    for key, value in struct.fields.items():
        _encode_embedded(serializer, 1, lambda se: encode_entry(se, key, value))


def decode_struct(deserializer: Deserializer, *, settings: ProtowireSettings | None = None) -> Struct:
    return _decode_struct(deserializer, settings or get_default_settings(), 0)


def _decode_struct(deserializer: Deserializer, settings: ProtowireSettings, depth: int) -> Struct:
    _check_depth(depth, settings)

    def decode_entry(de: Deserializer) -> tuple[str, Value]:
        key = ''
        value = Value.null_value()
        while not de.is_empty():
            field_number, wire_type = decode_tag(de)
            if field_number == 1:
                _check_wire_type(field_number, wire_type, WireType.LEN)
                key = decode_utf8(de, settings=settings)
            elif field_number == 2:
                _check_wire_type(field_number, wire_type, WireType.LEN)
                value = _decode_embedded(de, settings, lambda inner: _decode_value(inner, settings, depth + 1))
            else:
                skip_field(de, field_number, wire_type, settings=settings)
        return key, value

    fields: dict[str, Value] = {}
    while not deserializer.is_empty():
        field_number, wire_type = decode_tag(deserializer)
        if field_number == 1:
            _check_wire_type(field_number, wire_type, WireType.LEN)
            key, value = _decode_embedded(deserializer, settings, decode_entry)
            fields[key] = value
        else:
            skip_field(deserializer, field_number, wire_type, settings=settings)
    return Struct(fields)


def encode_list_value(
    serializer: Serializer,
    list_value: ListValue,
    *,
    settings: ProtowireSettings | None = None,
) -> None:
    _encode_list_value(serializer, list_value, settings or get_default_settings(), 0)


def _encode_list_value(serializer: Serializer, list_value: ListValue, settings: ProtowireSettings, depth: int) -> None:
    _check_depth(depth, settings)
    for value in list_value.values:
        _encode_embedded(serializer, 1, lambda se: _encode_value(se, value, settings, depth + 1))


def decode_list_value(deserializer: Deserializer, *, settings: ProtowireSettings | None = None) -> ListValue:
    return _decode_list_value(deserializer, settings or get_default_settings(), 0)


def _decode_list_value(deserializer: Deserializer, settings: ProtowireSettings, depth: int) -> ListValue:
    _check_depth(depth, settings)
    values: list[Value] = []
    while not deserializer.is_empty():
        field_number, wire_type = decode_tag(deserializer)
        if field_number == 1:
            _check_wire_type(field_number, wire_type, WireType.LEN)
            values.append(_decode_embedded(deserializer, settings, lambda de: _decode_value(de, settings, depth + 1)))
        else:
            skip_field(deserializer, field_number, wire_type, settings=settings)
    return ListValue(tuple(values))
