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

from pathlib import Path
from typing import Union

from pydantic import Field, NonNegativeInt, PositiveInt, field_validator

from protowire.utils import pydantic
from protowire.utils.yaml import dict_from_yaml


class ProtowireSettings(pydantic.BaseModel):
    # Largest length prefix accepted for a length-delimited field (bytes, strings, embedded messages, packed fields).
    BYTES_MAX_LENGTH: NonNegativeInt = 2**31 - 1

    # Capacity of the buffer allocated by a fresh BytesSerializer, it grows by powers of 3 as needed.
    INITIAL_BUFFER_CAPACITY: NonNegativeInt = 0

    # Maximum nesting of Value/Struct/ListValue and of groups being skipped. Each JSON array or object level counts
    # twice (the Value and its ListValue/Struct), each group once. Capped at 100 to stay well below the interpreter
    # recursion limit.
    MAX_RECURSION_DEPTH: PositiveInt = Field(default=100, le=100)

    @field_validator('BYTES_MAX_LENGTH')
    @classmethod
    def _check_bytes_max_length(cls, value: int) -> int:
        if value > 2**64 - 1:
            raise ValueError('BYTES_MAX_LENGTH cannot exceed the varint domain')
        return value

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'ProtowireSettings':
        """Takes a filepath to a yaml file and returns the validated settings."""
        return cls.model_validate(dict_from_yaml(filepath=filepath))


_DEFAULT_SETTINGS = ProtowireSettings()


def get_default_settings() -> ProtowireSettings:
    """Return the default settings, the returned object is immutable."""
    return _DEFAULT_SETTINGS
