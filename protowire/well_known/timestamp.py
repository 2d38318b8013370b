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

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from typing_extensions import Self

from protowire.exception import MalformedInputError, OutOfRangeError
from protowire.well_known.utils import format_nanos, parse_nanos

# 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z
MIN_TIMESTAMP_SECONDS = -62_135_596_800
MAX_TIMESTAMP_SECONDS = 253_402_300_799
MAX_TIMESTAMP_NANOS = 999_999_999

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)

_TIMESTAMP_RE = re.compile(
    r'(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})'
    r'T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})'
    r'(?:\.(?P<fraction>[0-9]{1,9}))?'
    r'(?:Z|(?P<offset_sign>[+-])(?P<offset_hour>[0-9]{2}):(?P<offset_minute>[0-9]{2}))'
)


@dataclass(slots=True, frozen=True, kw_only=True)
class Timestamp:
    """A point in time as seconds and nanoseconds since the unix epoch, in UTC.

    Its JSON form is RFC3339 with a `Z` suffix, like `"1972-01-01T10:00:20.021Z"`. When parsing, a numeric offset is
    accepted as well and converted to UTC.
    """
    seconds: int = 0
    nanos: int = 0

    def validate(self) -> None:
        """Raise OutOfRangeError if any component is outside its bounds."""
        if not MIN_TIMESTAMP_SECONDS <= self.seconds <= MAX_TIMESTAMP_SECONDS:
            raise OutOfRangeError(f'timestamp seconds out of range: {self.seconds}')
        if not 0 <= self.nanos <= MAX_TIMESTAMP_NANOS:
            raise OutOfRangeError(f'timestamp nanos out of range: {self.nanos}')

    def to_datetime(self) -> datetime:
        """Convert to an aware datetime in UTC, nanoseconds are truncated to microseconds."""
        self.validate()
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)

    @classmethod
    def from_datetime(cls, value: datetime) -> Self:
        """Create from an aware datetime."""
        if value.tzinfo is None:
            raise ValueError('datetime must be timezone aware')
        delta = value - _EPOCH
        timestamp = cls(seconds=delta // _ONE_SECOND, nanos=delta.microseconds * 1000)
        timestamp.validate()
        return timestamp

    def to_json(self) -> str:
        self.validate()
        dt = _EPOCH + timedelta(seconds=self.seconds)
        return (
            f'{dt.year:04d}-{dt.month:02d}-{dt.day:02d}'
            f'T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}'
            f'{format_nanos(self.nanos)}Z'
        )

    @classmethod
    def from_json(cls, data: Any) -> Self:
        if not isinstance(data, str):
            raise MalformedInputError(f'timestamp must be a string, got {type(data).__name__}')
        match = _TIMESTAMP_RE.fullmatch(data)
        if match is None:
            raise MalformedInputError(f'invalid timestamp: {data!r}')
        try:
            dt = datetime(
                int(match['year']),
                int(match['month']),
                int(match['day']),
                int(match['hour']),
                int(match['minute']),
                int(match['second']),
                tzinfo=timezone.utc,
            )
        except ValueError as e:
            raise MalformedInputError(f'invalid timestamp: {data!r}') from e
        seconds = (dt - _EPOCH) // _ONE_SECOND
        if match['offset_sign'] is not None:
            offset_hour = int(match['offset_hour'])
            offset_minute = int(match['offset_minute'])
            if offset_hour > 23 or offset_minute > 59:
                raise MalformedInputError(f'invalid timestamp offset: {data!r}')
            offset = offset_hour * 3600 + offset_minute * 60
            # local time is UTC plus the offset
            seconds += -offset if match['offset_sign'] == '+' else offset
        timestamp = cls(seconds=seconds, nanos=parse_nanos(match['fraction']))
        timestamp.validate()
        return timestamp

