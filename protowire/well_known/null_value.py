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

from enum import IntEnum
from typing import Any

from typing_extensions import Self

from protowire.exception import MalformedInputError


class NullValue(IntEnum):
    """Singleton enumeration standing for the JSON `null`."""
    NULL_VALUE = 0

    def to_json(self) -> None:
        return None

    @classmethod
    def from_json(cls, data: Any) -> Self:
        if data is None or data == cls.NULL_VALUE.name:
            return cls.NULL_VALUE
        raise MalformedInputError(f'NullValue must be null, got {data!r}')
