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
This modules implements length-delimited byte sequences: the length of the sequence encoded as a varint followed by the
raw bytes. The same framing carries strings, bytes fields, embedded messages and packed repeated fields.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # will prepend b'\x04' before writing b'test'
>>> bytes(se.finalize()).hex()
'0474657374'

>>> se = Serializer.build_bytes_serializer()
>>> raw_data = b'test' * 32
>>> len(raw_data)
128
>>> encode_bytes(se, raw_data)  # prepends b'\x80\x01' before raw_data
>>> encoded_data = bytes(se.finalize())
>>> len(encoded_data)
130
>>> encoded_data[:10].hex()
'80017465737474657374'

>>> de = Deserializer.build_bytes_deserializer(encoded_data)  # that we encoded before
>>> decoded_data = decode_bytes(de)
>>> de.finalize()  # called to assert we've consumed everything
>>> decoded_data == raw_data
True

>>> de = Deserializer.build_bytes_deserializer(b'\x04testfoo')
>>> _ = decode_bytes(de)
>>> try:
...     de.finalize()
... except ValueError as e:
...     print(*e.args)
trailing data

>>> de = Deserializer.build_bytes_deserializer(b'\x05test')
>>> try:
...     decode_bytes(de)
... except ValueError as e:
...     print(*e.args)
not enough bytes to read
"""

from protowire.conf import ProtowireSettings, get_default_settings
from protowire.serialization import Buffer, Deserializer, Serializer, TooLongError

from .varint import decode_varint, encode_varint


def encode_bytes(serializer: Serializer, data: Buffer) -> None:
    """ Encodes a byte-sequence adding a length prefix.

    This modules's docstring has more details and examples.
    """
    view = memoryview(data).cast('B')
    encode_varint(serializer, len(view))
    serializer.write_bytes(view)


def decode_bytes(deserializer: Deserializer, *, settings: ProtowireSettings | None = None) -> bytes:
    """ Decodes a byte-sequence with a length prefix.

    This modules's docstring has more details and examples.
    """
    settings = settings or get_default_settings()
    size = decode_varint(deserializer, signed=False)
    if size > settings.BYTES_MAX_LENGTH:
        raise TooLongError(f'length {size} exceeds the maximum of {settings.BYTES_MAX_LENGTH}')
    return bytes(deserializer.read_bytes(size))
