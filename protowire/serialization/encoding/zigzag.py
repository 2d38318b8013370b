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
This module implements zigzag encoding, used by sint32/sint64 fields so that small negative values stay small as
varints.

Signed integers are mapped to unsigned integers by interleaving: 0 -> 0, -1 -> 1, 1 -> 2, -2 -> 3, 2 -> 4, ...

>>> [encode_zigzag(n) for n in (0, -1, 1, -2, 2147483647, -2147483648)]
[0, 1, 2, 3, 4294967294, 4294967295]
>>> [decode_zigzag(m) for m in (0, 1, 2, 3, 4294967294, 4294967295)]
[0, -1, 1, -2, 2147483647, -2147483648]

>>> se = Serializer.build_bytes_serializer()
>>> encode_sint(se, -1)  # writes 01
>>> encode_sint(se, -64)  # writes 7f
>>> encode_sint(se, 64)  # writes 8001
>>> bytes(se.finalize()).hex()
'017f8001'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('017f8001'))
>>> decode_sint(de), decode_sint(de), decode_sint(de)
(-1, -64, 64)
>>> de.finalize()
"""

from protowire.serialization import Deserializer, Serializer

from .varint import decode_varint, encode_varint

_UINT32_LIMIT = 1 << 32
_INT32_LIMIT = 1 << 31


def encode_zigzag(n: int) -> int:
    """Map a signed integer to an unsigned one."""
    return -2 * n - 1 if n < 0 else 2 * n


def decode_zigzag(m: int) -> int:
    """Inverse of `encode_zigzag`."""
    if m < 0:
        raise ValueError('zigzag encoded values are never negative')
    return -((m + 1) // 2) if m & 1 else m // 2


def limit_int32(n: int) -> int:
    """ Coerce an integer into int32 wire semantics.

    The value is reduced modulo 2**32 and re-centered into [-2**31, 2**31 - 1], the same thing a 32-bit overflow would
    do.

    >>> limit_int32(2**31), limit_int32(2**32 + 5), limit_int32(-2**31 - 1)
    (-2147483648, 5, 2147483647)
    """
    return (n + _INT32_LIMIT) % _UINT32_LIMIT - _INT32_LIMIT


def encode_sint(serializer: Serializer, value: int) -> None:
    """ Encodes a sint32/sint64 value: zigzag followed by varint.
    """
    encode_varint(serializer, encode_zigzag(value))


def decode_sint(deserializer: Deserializer) -> int:
    """ Decodes a sint32/sint64 value.
    """
    return decode_zigzag(decode_varint(deserializer, signed=False))
