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


class ProtowireError(Exception):
    """Base class for exceptions in protowire."""
    pass


class MalformedInputError(ProtowireError, ValueError):
    """Raised when the input (binary or JSON) does not have the expected shape.

    Decoding is deterministic, so retrying with the same input will always fail the same way.
    """
    pass


class OutOfRangeError(ProtowireError, ValueError):
    """Raised when a value is well formed but lies outside the bounds of its type."""
    pass


class UnsupportedOperationError(ProtowireError):
    """Raised when an operation is not supported for the given type or input."""
    pass
