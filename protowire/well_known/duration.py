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
from typing import Any

from typing_extensions import Self

from protowire.exception import MalformedInputError, OutOfRangeError
from protowire.well_known.utils import format_nanos, parse_nanos

# 10000 years, as defined by google.protobuf.Duration
MAX_DURATION_SECONDS = 315_576_000_000
MAX_DURATION_NANOS = 999_999_999

_DURATION_RE = re.compile(r'(?P<sign>-)?(?P<seconds>[0-9]+)(?:\.(?P<fraction>[0-9]{1,9}))?s')


@dataclass(slots=True, frozen=True, kw_only=True)
class Duration:
    """A signed span of time with nanosecond resolution.

    Its JSON form is a string with an `s` suffix, like `"1.5s"` or `"-0.000001s"`.
    """
    seconds: int = 0
    nanos: int = 0

    def validate(self) -> None:
        """Raise OutOfRangeError if any component is outside its bounds or their signs disagree."""
        if not -MAX_DURATION_SECONDS <= self.seconds <= MAX_DURATION_SECONDS:
            raise OutOfRangeError(f'duration seconds out of range: {self.seconds}')
        if not -MAX_DURATION_NANOS <= self.nanos <= MAX_DURATION_NANOS:
            raise OutOfRangeError(f'duration nanos out of range: {self.nanos}')
        if (self.seconds < 0 < self.nanos) or (self.nanos < 0 < self.seconds):
            raise OutOfRangeError(f'duration seconds and nanos have different signs: {self.seconds}, {self.nanos}')

    def to_json(self) -> str:
        self.validate()
        sign = '-' if self.seconds < 0 or self.nanos < 0 else ''
        return f'{sign}{abs(self.seconds)}{format_nanos(abs(self.nanos))}s'

    @classmethod
    def from_json(cls, data: Any) -> Self:
        if not isinstance(data, str):
            raise MalformedInputError(f'duration must be a string, got {type(data).__name__}')
        match = _DURATION_RE.fullmatch(data)
        if match is None:
            raise MalformedInputError(f'invalid duration: {data!r}')
        sign = -1 if match['sign'] else 1
        duration = cls(seconds=sign * int(match['seconds']), nanos=sign * parse_nanos(match['fraction']))
        duration.validate()
        return duration
