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
This module implements the fixed-width encodings of the wire format: fixed32, sfixed32, fixed64, sfixed64, float and
double. All of them are little-endian.

>>> se = Serializer.build_bytes_serializer()
>>> encode_fixed32(se, 1)  # writes 01000000
>>> encode_sfixed32(se, -2)  # writes feffffff
>>> encode_fixed64(se, 2**64 - 1)  # writes ffffffffffffffff
>>> encode_sfixed64(se, -2**63)  # writes 0000000000000080
>>> encode_float(se, 1.5)  # writes 0000c03f
>>> encode_double(se, -2.0)  # writes 00000000000000c0
>>> bytes(se.finalize()).hex()
'01000000feffffffffffffffffffffff00000000000000800000c03f00000000000000c0'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex(
...     '01000000feffffffffffffffffffffff00000000000000800000c03f00000000000000c0'))
>>> decode_fixed32(de), decode_sfixed32(de)
(1, -2)
>>> decode_fixed64(de) == 2**64 - 1, decode_sfixed64(de) == -2**63
(True, True)
>>> decode_float(de), decode_double(de)
(1.5, -2.0)
>>> de.finalize()

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_fixed32(se, 2**32)
... except ValueError as e:
...     print(*e.args)
4294967296 does not fit in 4 unsigned bytes
"""

import math
import struct

from protowire.exception import OutOfRangeError
from protowire.serialization import Deserializer, OutOfDataError, Serializer


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    """ Encode an int using the given byte-length and signedness, little-endian.
    """
    try:
        data = int.to_bytes(number, length, byteorder='little', signed=signed)
    except OverflowError as e:
        kind = 'signed' if signed else 'unsigned'
        raise OutOfRangeError(f'{number} does not fit in {length} {kind} bytes') from e
    serializer.write_bytes(data)


def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> int:
    """ Decode an int using the given byte-length and signedness, little-endian.
    """
    data = deserializer.read_bytes(length)
    if len(data) != length:
        raise OutOfDataError('not enough bytes to read')
    return int.from_bytes(data, byteorder='little', signed=signed)


def encode_fixed32(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=4, signed=False)


def decode_fixed32(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=4, signed=False)


def encode_sfixed32(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=4, signed=True)


def decode_sfixed32(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=4, signed=True)


def encode_fixed64(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=8, signed=False)


def decode_fixed64(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=8, signed=False)


def encode_sfixed64(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=8, signed=True)


def decode_sfixed64(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=8, signed=True)


def encode_float(serializer: Serializer, value: float) -> None:
    """ Encodes an IEEE-754 single precision float, values beyond its range become infinities.
    """
    try:
        data = struct.pack('<f', value)
    except OverflowError:
        data = struct.pack('<f', math.copysign(math.inf, value))
    serializer.write_bytes(data)


def decode_float(deserializer: Deserializer) -> float:
    value, = deserializer.read_struct('<f')
    return value


def encode_double(serializer: Serializer, value: float) -> None:
    serializer.write_struct((value,), '<d')


def decode_double(deserializer: Deserializer) -> float:
    value, = deserializer.read_struct('<d')
    return value

