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
The well-known types and their canonical JSON mapping.

Every type has a `to_json()` method returning a JSON-compatible Python value (as produced by `json.loads`) and a
`from_json()` classmethod doing the inverse. `protowire.well_known.json_format` goes all the way to JSON text and
`protowire.well_known.encoding` has the binary encoders.
"""

from protowire.well_known.duration import Duration
from protowire.well_known.json_format import from_json_text, to_json_text
from protowire.well_known.null_value import NullValue
from protowire.well_known.struct_value import ListValue, Struct, Value, ValueKind
from protowire.well_known.timestamp import Timestamp
from protowire.well_known.wrappers import (
    BoolValue,
    BytesValue,
    DoubleValue,
    FloatValue,
    Int32Value,
    Int64Value,
    StringValue,
    UInt32Value,
    UInt64Value,
    WrapperValue,
)

__all__ = [
    'BoolValue',
    'BytesValue',
    'DoubleValue',
    'Duration',
    'FloatValue',
    'Int32Value',
    'Int64Value',
    'ListValue',
    'NullValue',
    'StringValue',
    'Struct',
    'Timestamp',
    'UInt32Value',
    'UInt64Value',
    'Value',
    'ValueKind',
    'WrapperValue',
    'from_json_text',
    'to_json_text',
]
