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
In-memory serializer backed by a growable buffer.

The buffer is a plain `bytearray` whose length is its capacity. When a write does not fit, `reserve` allocates a new
buffer with a capacity that is a power of 3 and copies the bytes written so far, so the number of reallocations stays
logarithmic on the final size.

>>> buf = bytearray(b'ab')
>>> reserve(buf, 2, 0) is buf
True
>>> grown = reserve(buf, 2, 5)
>>> len(grown)
9
>>> bytes(grown[:2])
b'ab'

>>> se = Serializer.build_bytes_serializer()
>>> se.write_bytes(b'test')
>>> se.write_byte(0x21)
>>> len(se.buffer)
9
>>> bytes(se.finalize())
b'test!'
"""

from structlog import get_logger
from typing_extensions import override

from protowire.conf import ProtowireSettings, get_default_settings

from .serializer import Serializer
from .types import Buffer

logger = get_logger()

GROWTH_BASE = 3


def reserve(buffer: bytearray, cursor: int, amount: int) -> bytearray:
    """ Make sure `amount` bytes can be written to `buffer` at `cursor`.

    Returns `buffer` itself when it has enough room, otherwise a new buffer with bytes `[0, cursor)` copied over. The
    returned buffer must always be used from then on, the previous one may be stale.
    """
    if amount < 0 or cursor < 0:
        raise ValueError('cursor and amount cannot be negative')
    if len(buffer) - cursor >= amount:
        return buffer
    required = len(buffer) + amount
    capacity = 1
    while capacity < required:
        capacity *= GROWTH_BASE
    grown = bytearray(capacity)
    grown[:cursor] = buffer[:cursor]
    logger.debug('buffer grown', old_capacity=len(buffer), new_capacity=capacity, cursor=cursor)
    return grown


class BytesSerializer(Serializer):
    """Simple implementation of Serializer to write to memory.

    Writes go into a growable `bytearray`, which can be provided by the caller together with the position to start
    writing at. Bytes past the cursor in a caller-provided buffer are overwritten.
    """

    def __init__(
        self,
        buffer: bytearray | None = None,
        cursor: int = 0,
        *,
        settings: ProtowireSettings | None = None,
    ) -> None:
        if buffer is None:
            settings = settings or get_default_settings()
            buffer = bytearray(settings.INITIAL_BUFFER_CAPACITY)
        if not 0 <= cursor <= len(buffer):
            raise ValueError(f'cursor {cursor} is outside of the buffer')
        self._buffer: bytearray = buffer
        self._pos: int = cursor

    @property
    def buffer(self) -> bytearray:
        """The current backing buffer, it may be replaced by any write."""
        return self._buffer

    @override
    def finalize(self) -> memoryview:
        result = memoryview(bytes(self._buffer[:self._pos]))
        del self._buffer
        del self._pos
        return result

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        if not 0 <= data <= 0xff:
            raise ValueError(f'{data} is not a byte')
        self._buffer = reserve(self._buffer, self._pos, 1)
        self._buffer[self._pos] = data
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        part = memoryview(data).cast('B')
        size = len(part)
        self._buffer = reserve(self._buffer, self._pos, size)
        self._buffer[self._pos:self._pos + size] = part
        self._pos += size
