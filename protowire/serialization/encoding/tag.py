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
This module implements field tags: every field on the wire starts with a varint holding `field_number << 3 |
wire_type`, the wire type tells how to find the end of the field payload.

>>> se = Serializer.build_bytes_serializer()
>>> encode_tag(se, 1, WireType.VARINT)  # writes 08
>>> encode_tag(se, 2, WireType.LEN)  # writes 12
>>> encode_tag(se, 16, WireType.I32)  # writes 8501
>>> bytes(se.finalize()).hex()
'08128501'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('08128501'))
>>> decode_tag(de)
(1, <WireType.VARINT: 0>)
>>> decode_tag(de)
(2, <WireType.LEN: 2>)
>>> decode_tag(de)
(16, <WireType.I32: 5>)
>>> de.finalize()

Unknown fields can be skipped without knowing their schema, groups are skipped up to the matching end tag:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0b 0801 0c 10 96 01'))
>>> skip_field(de, *decode_tag(de))
>>> decode_tag(de)
(2, <WireType.VARINT: 0>)
"""

from enum import IntEnum

from structlog import get_logger

from protowire.conf import ProtowireSettings, get_default_settings
from protowire.exception import OutOfRangeError
from protowire.serialization import BadDataError, Deserializer, OutOfDataError, Serializer, TooLongError

from .varint import decode_varint, encode_varint

logger = get_logger()

MAX_FIELD_NUMBER = (1 << 29) - 1


class WireType(IntEnum):
    VARINT = 0
    I64 = 1
    LEN = 2
    SGROUP = 3
    EGROUP = 4
    I32 = 5


_WIRE_TYPE_VALUES = frozenset(int(wire_type) for wire_type in WireType)


def encode_tag(serializer: Serializer, field_number: int, wire_type: WireType) -> None:
    """ Encodes a field tag.
    """
    if not 1 <= field_number <= MAX_FIELD_NUMBER:
        raise OutOfRangeError(f'field number {field_number} is not in [1, {MAX_FIELD_NUMBER}]')
    if wire_type not in _WIRE_TYPE_VALUES:
        raise OutOfRangeError(f'invalid wire type: {wire_type}')
    encode_varint(serializer, (field_number << 3) | int(wire_type))


def decode_tag(deserializer: Deserializer) -> tuple[int, WireType]:
    """ Decodes a field tag into `(field_number, wire_type)`.
    """
    value = decode_varint(deserializer, signed=False)
    field_number = value >> 3
    if not 1 <= field_number <= MAX_FIELD_NUMBER:
        raise BadDataError(f'invalid field number: {field_number}')
    try:
        wire_type = WireType(value & 0b111)
    except ValueError as e:
        raise BadDataError(f'invalid wire type: {value & 0b111}') from e
    return field_number, wire_type


def skip_field(
    deserializer: Deserializer,
    field_number: int,
    wire_type: WireType,
    *,
    settings: ProtowireSettings | None = None,
) -> None:
    """ Consumes the payload of a field whose tag was just read.
    """
    settings = settings or get_default_settings()
    _skip_field(deserializer, field_number, wire_type, settings, 0)


def _skip_field(
    deserializer: Deserializer,
    field_number: int,
    wire_type: WireType,
    settings: ProtowireSettings,
    depth: int,
) -> None:
    logger.debug('skip field', field_number=field_number, wire_type=wire_type.name)
    if wire_type == WireType.VARINT:
        decode_varint(deserializer, signed=False)
    elif wire_type == WireType.I64:
        _skip_bytes(deserializer, 8)
    elif wire_type == WireType.I32:
        _skip_bytes(deserializer, 4)
    elif wire_type == WireType.LEN:
        size = decode_varint(deserializer, signed=False)
        if size > settings.BYTES_MAX_LENGTH:
            raise TooLongError(f'length {size} exceeds the maximum of {settings.BYTES_MAX_LENGTH}')
        _skip_bytes(deserializer, size)
    elif wire_type == WireType.SGROUP:
        if depth >= settings.MAX_RECURSION_DEPTH:
            raise BadDataError('groups are nested too deep')
        while True:
            inner_number, inner_type = decode_tag(deserializer)
            if inner_type == WireType.EGROUP:
                if inner_number != field_number:
                    raise BadDataError(f'group {field_number} closed by end group {inner_number}')
                return
            _skip_field(deserializer, inner_number, inner_type, settings, depth + 1)
    else:
        raise BadDataError(f'unexpected end group {field_number}')


def _skip_bytes(deserializer: Deserializer, n: int) -> None:
    data = deserializer.read_bytes(n)
    if len(data) != n:
        raise OutOfDataError('not enough bytes to read')
