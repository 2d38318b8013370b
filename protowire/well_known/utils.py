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

from protowire.exception import MalformedInputError

NANOS_PER_SECOND = 1_000_000_000
NANOS_DIGITS = 9


def format_nanos(nanos: int) -> str:
    """ Format the fractional part of a second, using 3, 6 or 9 digits, whichever is the shortest exact one.

    >>> format_nanos(0), format_nanos(500_000_000), format_nanos(10_000), format_nanos(1)
    ('', '.500', '.000010', '.000000001')
    """
    assert 0 <= nanos < NANOS_PER_SECOND
    if nanos == 0:
        return ''
    if nanos % 1_000_000 == 0:
        return f'.{nanos // 1_000_000:03d}'
    if nanos % 1_000 == 0:
        return f'.{nanos // 1_000:06d}'
    return f'.{nanos:09d}'


def parse_nanos(fraction: str | None) -> int:
    """ Parse the digits after the decimal point of a second as nanoseconds, they are right-padded to 9 digits.

    >>> parse_nanos(None), parse_nanos('5'), parse_nanos('000010'), parse_nanos('000000001')
    (0, 500000000, 10000, 1)
    """
    if not fraction:
        return 0
    if len(fraction) > NANOS_DIGITS or not fraction.isascii() or not fraction.isdigit():
        raise MalformedInputError(f'invalid fractional seconds: {fraction!r}')
    return int(fraction.ljust(NANOS_DIGITS, '0'))
