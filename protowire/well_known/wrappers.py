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
Wrapper types: messages with a single `value` field, used to tell an unset scalar apart from its default value.

Their JSON form is the bare JSON form of the wrapped scalar.

>>> BoolValue(True).to_json()
True
>>> Int32Value.from_json('-5')
Int32Value(value=-5)
>>> BytesValue(b'\\x00\\xff').to_json()
'AP8='
>>> DoubleValue(float('-inf')).to_json()
'-Infinity'
"""

from __future__ import annotations

import base64
import binascii
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from typing_extensions import Self, override

from protowire.exception import MalformedInputError, OutOfRangeError
from protowire.serialization.encoding.zigzag import limit_int32

T = TypeVar('T')

FLOAT32_MAX = 3.4028234663852886e38

_INTEGER_RE = re.compile(r'-?[0-9]+')
_NUMBER_RE = re.compile(r'-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_SPECIAL_FLOATS = {
    'NaN': math.nan,
    'Infinity': math.inf,
    '-Infinity': -math.inf,
}


def _parse_integer(data: Any, type_name: str) -> int:
    if isinstance(data, bool):
        raise MalformedInputError(f'{type_name} must be a number, got bool')
    if isinstance(data, int):
        return data
    if isinstance(data, float):
        if not data.is_integer():
            raise MalformedInputError(f'{type_name} must be an integer, got {data!r}')
        return int(data)
    if isinstance(data, str) and _INTEGER_RE.fullmatch(data):
        return int(data)
    raise MalformedInputError(f'{type_name} must be an integer, got {data!r}')


def _check_integer_range(value: int, type_name: str, lower: int, upper: int) -> int:
    if not lower <= value <= upper:
        raise OutOfRangeError(f'{type_name} out of range: {value}')
    return value


def _parse_float(data: Any, type_name: str) -> float:
    if isinstance(data, bool):
        raise MalformedInputError(f'{type_name} must be a number, got bool')
    if isinstance(data, str):
        if data in _SPECIAL_FLOATS:
            return _SPECIAL_FLOATS[data]
        if not _NUMBER_RE.fullmatch(data):
            raise MalformedInputError(f'{type_name} must be a number, got {data!r}')
    elif not isinstance(data, (int, float)):
        raise MalformedInputError(f'{type_name} must be a number, got {type(data).__name__}')
    try:
        value = float(data)
    except OverflowError as e:
        raise OutOfRangeError(f'{type_name} out of range: {data}') from e
    if math.isinf(value) and not (isinstance(data, float) and math.isinf(data)):
        raise OutOfRangeError(f'{type_name} out of range: {data}')
    return value


def _float_to_json(value: float) -> float | str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    return value


@dataclass(frozen=True)
class WrapperValue(ABC, Generic[T]):
    value: T

    TYPE_NAME: ClassVar[str]

    def to_json(self) -> Any:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> Self:
        return cls(cls._parse_json(data))

    @classmethod
    @abstractmethod
    def _parse_json(cls, data: Any) -> T:
        raise NotImplementedError


@dataclass(frozen=True)
class BoolValue(WrapperValue[bool]):
    value: bool = False

    TYPE_NAME: ClassVar[str] = 'google.protobuf.BoolValue'

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> bool:
        if not isinstance(data, bool):
            raise MalformedInputError(f'BoolValue must be a boolean, got {type(data).__name__}')
        return data


@dataclass(frozen=True)
class StringValue(WrapperValue[str]):
    value: str = ''

    TYPE_NAME: ClassVar[str] = 'google.protobuf.StringValue'

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> str:
        if not isinstance(data, str):
            raise MalformedInputError(f'StringValue must be a string, got {type(data).__name__}')
        return data


@dataclass(frozen=True)
class BytesValue(WrapperValue[bytes]):
    value: bytes = b''

    TYPE_NAME: ClassVar[str] = 'google.protobuf.BytesValue'

    @override
    def to_json(self) -> str:
        return base64.b64encode(self.value).decode('ascii')

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> bytes:
        if not isinstance(data, str):
            raise MalformedInputError(f'BytesValue must be a base64 string, got {type(data).__name__}')
        # both the standard and the url-safe alphabets are accepted, with or without padding
        text = data.replace('-', '+').replace('_', '/')
        text += '=' * (-len(text) % 4)
        try:
            return base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedInputError(f'BytesValue is not valid base64: {data!r}') from e


@dataclass(frozen=True)
class DoubleValue(WrapperValue[float]):
    value: float = 0.0

    TYPE_NAME: ClassVar[str] = 'google.protobuf.DoubleValue'

    @override
    def to_json(self) -> float | str:
        return _float_to_json(self.value)

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> float:
        return _parse_float(data, 'DoubleValue')


@dataclass(frozen=True)
class FloatValue(WrapperValue[float]):
    value: float = 0.0

    TYPE_NAME: ClassVar[str] = 'google.protobuf.FloatValue'

    @override
    def to_json(self) -> float | str:
        return _float_to_json(self.value)

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> float:
        value = _parse_float(data, 'FloatValue')
        if math.isfinite(value) and abs(value) > FLOAT32_MAX:
            raise OutOfRangeError(f'FloatValue out of range: {data}')
        return value


@dataclass(frozen=True)
class Int32Value(WrapperValue[int]):
    value: int = 0

    TYPE_NAME: ClassVar[str] = 'google.protobuf.Int32Value'

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> int:
        return limit_int32(_parse_integer(data, 'Int32Value'))


@dataclass(frozen=True)
class UInt32Value(WrapperValue[int]):
    value: int = 0

    TYPE_NAME: ClassVar[str] = 'google.protobuf.UInt32Value'

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> int:
        return _check_integer_range(_parse_integer(data, 'UInt32Value'), 'UInt32Value', 0, 2**32 - 1)


@dataclass(frozen=True)
class Int64Value(WrapperValue[int]):
    value: int = 0

    TYPE_NAME: ClassVar[str] = 'google.protobuf.Int64Value'

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> int:
        return _check_integer_range(_parse_integer(data, 'Int64Value'), 'Int64Value', -2**63, 2**63 - 1)


@dataclass(frozen=True)
class UInt64Value(WrapperValue[int]):
    value: int = 0

    TYPE_NAME: ClassVar[str] = 'google.protobuf.UInt64Value'

    @override
    @classmethod
    def _parse_json(cls, data: Any) -> int:
        return _check_integer_range(_parse_integer(data, 'UInt64Value'), 'UInt64Value', 0, 2**64 - 1)
