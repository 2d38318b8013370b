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

"""
Cursor based access to the wire format.

Every function here is pure over its explicit arguments: readers take a buffer and a cursor and return the value
together with the advanced cursor, writers take a `bytearray`, a cursor and a value and return the buffer together with
the advanced cursor. A writer may return a different (grown) buffer, the returned buffer is the one to keep using.

>>> buf, cursor = bytearray(), 0
>>> buf, cursor = write_tag(buf, cursor, 1, WireType.VARINT)
>>> buf, cursor = write_varint(buf, cursor, 150)
>>> buf, cursor = write_tag(buf, cursor, 2, WireType.LEN)
>>> buf, cursor = write_string(buf, cursor, 'testing')
>>> bytes(buf[:cursor]).hex()
'089601120774657374696e67'

>>> read_tag(buf, 0)
(1, <WireType.VARINT: 0>, 1)
>>> read_varint(buf, 1)
(150, 3)
>>> read_tag(buf, 3)
(2, <WireType.LEN: 2>, 4)
>>> read_string(buf, 4)
('testing', 12)
"""

from typing import Callable, TypeVar

from protowire.conf import ProtowireSettings
from protowire.serialization import Buffer, Deserializer, Serializer
from protowire.serialization.bytes_deserializer import BytesDeserializer
from protowire.serialization.bytes_serializer import reserve
from protowire.serialization.encoding import fixed
from protowire.serialization.encoding.bytes import decode_bytes, encode_bytes
from protowire.serialization.encoding.tag import WireType, decode_tag, encode_tag, skip_field as _skip_field
from protowire.serialization.encoding.utf8 import decode_utf8, encode_utf8
from protowire.serialization.encoding.varint import decode_varint, encode_varint
from protowire.serialization.encoding.zigzag import (
    decode_sint,
    decode_zigzag,
    encode_sint,
    encode_zigzag,
    limit_int32,
)

T = TypeVar('T')


def _reader(buf: Buffer, cursor: int) -> BytesDeserializer:
    if cursor < 0:
        raise ValueError('cursor cannot be negative')
    return Deserializer.build_bytes_deserializer(memoryview(buf).cast('B')[cursor:])


def _read(buf: Buffer, cursor: int, decoder: Callable[[Deserializer], T]) -> tuple[T, int]:
    deserializer = _reader(buf, cursor)
    value = decoder(deserializer)
    return value, cursor + deserializer.cur_pos()


def _write(buf: bytearray, cursor: int, encoder: Callable[[Serializer, T], None], value: T) -> tuple[bytearray, int]:
    serializer = Serializer.build_bytes_serializer(buf, cursor)
    encoder(serializer, value)
    return serializer.buffer, serializer.cur_pos()


def read_varint(buf: Buffer, cursor: int, *, signed: bool = True) -> tuple[int, int]:
    """ Read a varint, 10-byte values with the high bit set are read as negative unless `signed=False`.
    """
    return _read(buf, cursor, lambda de: decode_varint(de, signed=signed))


def write_varint(buf: bytearray, cursor: int, n: int) -> tuple[bytearray, int]:
    return _write(buf, cursor, encode_varint, n)


def read_sint(buf: Buffer, cursor: int) -> tuple[int, int]:
    """Read a zigzag encoded varint (sint32/sint64)."""
    return _read(buf, cursor, decode_sint)


def write_sint(buf: bytearray, cursor: int, n: int) -> tuple[bytearray, int]:
    return _write(buf, cursor, encode_sint, n)


def read_tag(buf: Buffer, cursor: int) -> tuple[int, WireType, int]:
    """Read a field tag, returns `(field_number, wire_type, new_cursor)`."""
    (field_number, wire_type), cursor = _read(buf, cursor, decode_tag)
    return field_number, wire_type, cursor


def write_tag(buf: bytearray, cursor: int, field_number: int, wire_type: WireType) -> tuple[bytearray, int]:
    return _write(buf, cursor, lambda se, _: encode_tag(se, field_number, wire_type), None)


def skip_field(
    buf: Buffer,
    cursor: int,
    field_number: int,
    wire_type: WireType,
    *,
    settings: ProtowireSettings | None = None,
) -> int:
    """Skip the payload of the field whose tag ends at `cursor`, returns the cursor after it."""
    _, cursor = _read(buf, cursor, lambda de: _skip_field(de, field_number, wire_type, settings=settings))
    return cursor


def read_fixed32(buf: Buffer, cursor: int) -> tuple[int, int]:
    return _read(buf, cursor, fixed.decode_fixed32)


def write_fixed32(buf: bytearray, cursor: int, n: int) -> tuple[bytearray, int]:
    return _write(buf, cursor, fixed.encode_fixed32, n)


def read_signed_fixed32(buf: Buffer, cursor: int) -> tuple[int, int]:
    return _read(buf, cursor, fixed.decode_sfixed32)


def write_signed_fixed32(buf: bytearray, cursor: int, n: int) -> tuple[bytearray, int]:
    return _write(buf, cursor, fixed.encode_sfixed32, n)


def read_fixed64(buf: Buffer, cursor: int) -> tuple[int, int]:
    return _read(buf, cursor, fixed.decode_fixed64)


def write_fixed64(buf: bytearray, cursor: int, n: int) -> tuple[bytearray, int]:
    return _write(buf, cursor, fixed.encode_fixed64, n)


def read_signed_fixed64(buf: Buffer, cursor: int) -> tuple[int, int]:
    return _read(buf, cursor, fixed.decode_sfixed64)


def write_signed_fixed64(buf: bytearray, cursor: int, n: int) -> tuple[bytearray, int]:
    return _write(buf, cursor, fixed.encode_sfixed64, n)


def read_float(buf: Buffer, cursor: int) -> tuple[float, int]:
    return _read(buf, cursor, fixed.decode_float)


def write_float(buf: bytearray, cursor: int, x: float) -> tuple[bytearray, int]:
    return _write(buf, cursor, fixed.encode_float, x)


def read_double(buf: Buffer, cursor: int) -> tuple[float, int]:
    return _read(buf, cursor, fixed.decode_double)


def write_double(buf: bytearray, cursor: int, x: float) -> tuple[bytearray, int]:
    return _write(buf, cursor, fixed.encode_double, x)


def read_buffer(buf: Buffer, cursor: int, *, settings: ProtowireSettings | None = None) -> tuple[bytes, int]:
    """Read a length-delimited payload (bytes fields, embedded messages, packed fields)."""
    return _read(buf, cursor, lambda de: decode_bytes(de, settings=settings))


def write_buffer(buf: bytearray, cursor: int, data: Buffer) -> tuple[bytearray, int]:
    return _write(buf, cursor, encode_bytes, data)


def read_string(buf: Buffer, cursor: int, *, settings: ProtowireSettings | None = None) -> tuple[str, int]:
    return _read(buf, cursor, lambda de: decode_utf8(de, settings=settings))


def write_string(buf: bytearray, cursor: int, text: str) -> tuple[bytearray, int]:
    return _write(buf, cursor, encode_utf8, text)


__all__ = [
    'WireType',
    'decode_zigzag',
    'encode_zigzag',
    'limit_int32',
    'read_buffer',
    'read_double',
    'read_fixed32',
    'read_fixed64',
    'read_float',
    'read_signed_fixed32',
    'read_signed_fixed64',
    'read_sint',
    'read_string',
    'read_tag',
    'read_varint',
    'reserve',
    'skip_field',
    'write_buffer',
    'write_double',
    'write_fixed32',
    'write_fixed64',
    'write_float',
    'write_signed_fixed32',
    'write_signed_fixed64',
    'write_sint',
    'write_string',
    'write_tag',
    'write_varint',
]
