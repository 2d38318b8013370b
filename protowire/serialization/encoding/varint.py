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
This module implements the protobuf varint, a variable-length code for integers of up to 64 bits.

Each byte carries 7 bits of data, least significant group first, and the high bit of every byte except the last is set
to signal that more bytes follow. Non-negative values use the minimal number of bytes. Negative values (int32/int64
fields, as opposed to sint32/sint64 which use zigzag) are always written as the 10-byte two's-complement form of the
value as a 64-bit integer.

References:
- https://protobuf.dev/programming-guides/encoding/#varints

>>> se = Serializer.build_bytes_serializer()
>>> encode_varint(se, 0)  # writes 00
>>> encode_varint(se, 150)  # writes 9601
>>> encode_varint(se, 300)  # writes ac02
>>> encode_varint(se, -1)  # writes ffffffffffffffffff01
>>> bytes(se.finalize()).hex()
'009601ac02ffffffffffffffffff01'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('009601ac02ffffffffffffffffff01'))
>>> decode_varint(de, signed=True)  # reads 00
0
>>> decode_varint(de, signed=True)  # reads 9601
150
>>> decode_varint(de, signed=True)  # reads ac02
300
>>> decode_varint(de, signed=True)  # reads ffffffffffffffffff01
-1
>>> de.finalize()

The same 10 bytes read as an unsigned value give the uint64 interpretation:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffffffffffffff01'))
>>> decode_varint(de, signed=False) == 2**64 - 1
True

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ac'))
>>> try:
...     decode_varint(de, signed=False)
... except ValueError as e:
...     print(*e.args)
not enough bytes to read
"""

from protowire.exception import OutOfRangeError
from protowire.serialization import BadDataError, Deserializer, Serializer

VARINT_MAX_BYTES = 10

_UINT64_LIMIT = 1 << 64
_INT64_MIN = -(1 << 63)
_SIGN_BIT = 1 << 63


def varint_size(value: int) -> int:
    """ Number of bytes `encode_varint` uses for `value`.

    >>> varint_size(127), varint_size(128), varint_size(-1)
    (1, 2, 10)
    """
    if value < 0:
        return VARINT_MAX_BYTES
    return max(1, (value.bit_length() + 6) // 7)


def encode_varint(serializer: Serializer, value: int) -> None:
    """ Encodes an integer as a varint.

    Accepts anything in `[-2**63, 2**64)`, negative values are written in their 10-byte two's-complement form.
    """
    if value < 0:
        if value < _INT64_MIN:
            raise OutOfRangeError(f'{value} does not fit in 64 bits')
        value += _UINT64_LIMIT
    elif value >= _UINT64_LIMIT:
        raise OutOfRangeError(f'{value} does not fit in 64 bits')
    while value > 0b0111_1111:
        serializer.write_byte((value & 0b0111_1111) | 0b1000_0000)
        value >>= 7
    serializer.write_byte(value)


def decode_varint(deserializer: Deserializer, *, signed: bool) -> int:
    """ Decodes a varint.

    The value is taken as a 64-bit integer, with `signed=True` values with the high bit set are returned as negative
    numbers, which is how the 10-byte form of a negative int32/int64 reads back.
    """
    result = 0
    shift = 0
    for _ in range(VARINT_MAX_BYTES):
        byte = deserializer.read_byte()
        result |= (byte & 0b0111_1111) << shift
        shift += 7
        if (byte & 0b1000_0000) == 0:
            result &= _UINT64_LIMIT - 1
            if signed and result & _SIGN_BIT:
                return result - _UINT64_LIMIT
            return result
    raise BadDataError(f'varint is longer than {VARINT_MAX_BYTES} bytes')
