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
A packed repeated field is a single length-delimited payload holding the encoded items back to back, without tags.
Only scalar numeric types (varint, fixed32, fixed64 wire types) can be packed.

Layout: [N: varint byte length][item_0]...[item_k]

>>> from protowire.serialization.encoding.varint import decode_varint, encode_varint
>>> se = Serializer.build_bytes_serializer()
>>> encode_packed(se, [3, 270, 86942], encode_varint)
>>> bytes(se.finalize()).hex()
'06038e029ea705'

Breakdown of the result:

    06: 6 bytes of payload
    03: 3
    8e02: 270
    9ea705: 86942

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('06038e029ea705'))
>>> decode_packed(de, lambda d: decode_varint(d, signed=False), tuple)
(3, 270, 86942)
>>> de.finalize()
"""

from collections.abc import Iterable, Iterator
from typing import Callable, TypeVar

from protowire.conf import ProtowireSettings
from protowire.serialization import Deserializer, Serializer
from protowire.serialization.encoding.bytes import decode_bytes, encode_bytes

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R')


def encode_packed(serializer: Serializer, values: Iterable[T], encoder: Encoder[T]) -> None:
    payload = Serializer.build_bytes_serializer()
    for value in values:
        encoder(payload, value)
    encode_bytes(serializer, payload.finalize())


def decode_packed(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
    *,
    settings: ProtowireSettings | None = None,
) -> R:
    payload = Deserializer.build_bytes_deserializer(decode_bytes(deserializer, settings=settings))

    def iter_items() -> Iterator[T]:
        while not payload.is_empty():
            yield decoder(payload)

    return builder(iter_items())
