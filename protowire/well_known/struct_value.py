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
Value, Struct and ListValue model an arbitrary JSON document: a Value is one JSON node, a Struct is a JSON object and a
ListValue is a JSON array. The three types are mutually recursive.

>>> doc = Struct.from_json({'a': 1, 'b': [True, None, 'x']})
>>> doc.fields['b'].kind
<ValueKind.LIST: 'list_value'>
>>> doc.to_json()
{'a': 1, 'b': [True, None, 'x']}

Python's json module keeps arrays and objects apart, so an empty list is an empty ListValue and an empty dict is an
empty Struct:

>>> Value.from_json([]).kind, Value.from_json({}).kind
(<ValueKind.LIST: 'list_value'>, <ValueKind.STRUCT: 'struct_value'>)
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from typing_extensions import Self

from protowire.conf import ProtowireSettings, get_default_settings
from protowire.exception import MalformedInputError, OutOfRangeError

Payload = Union[None, float, str, bool, 'Struct', 'ListValue']


class ValueKind(Enum):
    NULL = 'null_value'
    NUMBER = 'number_value'
    STRING = 'string_value'
    BOOL = 'bool_value'
    STRUCT = 'struct_value'
    LIST = 'list_value'


def _check_depth(depth: int, settings: ProtowireSettings) -> None:
    if depth > settings.MAX_RECURSION_DEPTH:
        raise MalformedInputError(f'value is nested more than {settings.MAX_RECURSION_DEPTH} levels deep')


@dataclass(slots=True, frozen=True)
class Value:
    """One JSON node: exactly one of null, number, string, bool, struct or list.

    Use the named constructors (`Value.number_value(1.5)`, ...) to build instances.
    """
    kind: ValueKind = ValueKind.NULL
    payload: Payload = None

    def __post_init__(self) -> None:
        match self.kind:
            case ValueKind.NULL:
                ok = self.payload is None
            case ValueKind.NUMBER:
                ok = isinstance(self.payload, (int, float)) and not isinstance(self.payload, bool)
                if ok:
                    object.__setattr__(self, 'payload', float(self.payload))  # type: ignore[arg-type]
            case ValueKind.STRING:
                ok = isinstance(self.payload, str)
            case ValueKind.BOOL:
                ok = isinstance(self.payload, bool)
            case ValueKind.STRUCT:
                ok = isinstance(self.payload, Struct)
            case ValueKind.LIST:
                ok = isinstance(self.payload, ListValue)
            case _:
                ok = False
        if not ok:
            raise TypeError(f'invalid payload for {self.kind.name}: {self.payload!r}')

    @classmethod
    def null_value(cls) -> Self:
        return cls(ValueKind.NULL, None)

    @classmethod
    def number_value(cls, number: float) -> Self:
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def string_value(cls, text: str) -> Self:
        return cls(ValueKind.STRING, text)

    @classmethod
    def bool_value(cls, flag: bool) -> Self:
        return cls(ValueKind.BOOL, flag)

    @classmethod
    def struct_value(cls, struct: Struct) -> Self:
        return cls(ValueKind.STRUCT, struct)

    @classmethod
    def list_value(cls, list_value: ListValue) -> Self:
        return cls(ValueKind.LIST, list_value)

    def to_json(self, *, settings: ProtowireSettings | None = None) -> Any:
        return self._to_json(settings or get_default_settings(), 0)

    def _to_json(self, settings: ProtowireSettings, depth: int) -> Any:
        _check_depth(depth, settings)
        match self.kind:
            case ValueKind.NUMBER:
                assert isinstance(self.payload, float)
                number = self.payload
                if not math.isfinite(number):
                    # JSON has no representation for it, a string would read back as a string_value
                    raise MalformedInputError(f'cannot serialize {number} as a Value')
                if number.is_integer() and not (number == 0 and math.copysign(1.0, number) < 0):
                    return int(number)
                return number
            case ValueKind.STRUCT:
                assert isinstance(self.payload, Struct)
                return self.payload._to_json(settings, depth + 1)
            case ValueKind.LIST:
                assert isinstance(self.payload, ListValue)
                return self.payload._to_json(settings, depth + 1)
            case _:
                return self.payload

    @classmethod
    def from_json(cls, data: Any, *, settings: ProtowireSettings | None = None) -> Self:
        return cls._from_json(data, settings or get_default_settings(), 0)

    @classmethod
    def _from_json(cls, data: Any, settings: ProtowireSettings, depth: int) -> Self:
        _check_depth(depth, settings)
        # bool is checked before numbers because it is a subclass of int
        if data is None:
            return cls.null_value()
        if isinstance(data, bool):
            return cls.bool_value(data)
        if isinstance(data, (int, float)):
            try:
                number = float(data)
            except OverflowError as e:
                raise OutOfRangeError(f'number too large for a Value: {data}') from e
            if not math.isfinite(number):
                raise MalformedInputError(f'cannot represent {data} as a Value')
            return cls.number_value(number)
        if isinstance(data, str):
            return cls.string_value(data)
        if isinstance(data, Mapping):
            return cls.struct_value(Struct._from_json(data, settings, depth + 1))
        if isinstance(data, Sequence) and not isinstance(data, (bytes, bytearray)):
            return cls.list_value(ListValue._from_json(data, settings, depth + 1))
        raise MalformedInputError(f'cannot represent {type(data).__name__} as a Value')


@dataclass(slots=True, frozen=True)
class Struct:
    """A JSON object: string keys mapped to values, key order is not significant."""
    fields: dict[str, Value] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(frozenset(self.fields.items()))

    def to_json(self, *, settings: ProtowireSettings | None = None) -> dict[str, Any]:
        return self._to_json(settings or get_default_settings(), 0)

    def _to_json(self, settings: ProtowireSettings, depth: int) -> dict[str, Any]:
        _check_depth(depth, settings)
        return {key: value._to_json(settings, depth + 1) for key, value in self.fields.items()}

    @classmethod
    def from_json(cls, data: Any, *, settings: ProtowireSettings | None = None) -> Self:
        return cls._from_json(data, settings or get_default_settings(), 0)

    @classmethod
    def _from_json(cls, data: Any, settings: ProtowireSettings, depth: int) -> Self:
        _check_depth(depth, settings)
        if not isinstance(data, Mapping):
            raise MalformedInputError(f'Struct must be an object, got {type(data).__name__}')
        fields: dict[str, Value] = {}
        for key, item in data.items():
            if not isinstance(key, str):
                raise MalformedInputError(f'Struct keys must be strings, got {key!r}')
            fields[key] = Value._from_json(item, settings, depth + 1)
        return cls(fields)


@dataclass(slots=True, frozen=True)
class ListValue:
    """A JSON array of values."""
    values: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, 'values', tuple(self.values))

    def to_json(self, *, settings: ProtowireSettings | None = None) -> list[Any]:
        return self._to_json(settings or get_default_settings(), 0)

    def _to_json(self, settings: ProtowireSettings, depth: int) -> list[Any]:
        _check_depth(depth, settings)
        return [value._to_json(settings, depth + 1) for value in self.values]

    @classmethod
    def from_json(cls, data: Any, *, settings: ProtowireSettings | None = None) -> Self:
        return cls._from_json(data, settings or get_default_settings(), 0)

    @classmethod
    def _from_json(cls, data: Any, settings: ProtowireSettings, depth: int) -> Self:
        _check_depth(depth, settings)
        if isinstance(data, (str, bytes, bytearray, Mapping)) or not isinstance(data, Sequence):
            raise MalformedInputError(f'ListValue must be an array, got {type(data).__name__}')
        return cls(tuple(Value._from_json(item, settings, depth + 1) for item in data))
