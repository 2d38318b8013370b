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
Helpers to go between JSON text and the well-known types.

>>> from protowire.well_known.duration import Duration
>>> to_json_text(Duration(seconds=1, nanos=500_000_000))
'"1.500s"'
>>> from_json_text(Duration, '"-0.500s"')
Duration(seconds=0, nanos=-500000000)
"""

import json
import math
from typing import Any, NoReturn, Protocol, TypeVar

from protowire.exception import MalformedInputError, OutOfRangeError

M = TypeVar('M', bound='JsonMappable')


class JsonMappable(Protocol):
    def to_json(self) -> Any:
        ...

    @classmethod
    def from_json(cls: type[M], data: Any) -> M:
        ...


def _reject_constant(name: str) -> NoReturn:
    raise MalformedInputError(f'{name} is not valid JSON')


def _parse_float(literal: str) -> float:
    # float() turns literals beyond the double range into infinities
    value = float(literal)
    if math.isinf(value):
        raise OutOfRangeError(f'number out of range: {literal}')
    return value


def to_json_text(message: JsonMappable, *, indent: int | None = None) -> str:
    """Serialize a well-known type to JSON text."""
    return json.dumps(message.to_json(), indent=indent, allow_nan=False, ensure_ascii=False)


def from_json_text(cls: type[M], text: str | bytes) -> M:
    """Deserialize a well-known type from JSON text."""
    try:
        data = json.loads(text, parse_float=_parse_float, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f'invalid JSON: {e.msg}') from e
    except UnicodeDecodeError as e:
        raise MalformedInputError('JSON text is not valid utf-8') from e
    return cls.from_json(data)
