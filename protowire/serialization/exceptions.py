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

from protowire.exception import MalformedInputError, ProtowireError


class SerializationError(ProtowireError, ValueError):
    """Base class for errors of the binary wire format."""
    pass


class BadDataError(SerializationError, MalformedInputError):
    """Raised when the bytes being decoded are not a valid encoding.

    A structural decode failure invalidates the whole enclosing message, handlers should not try to continue reading
    from the same deserializer.
    """
    pass


class OutOfDataError(BadDataError):
    """Raised when the data ends before the value being decoded is complete."""
    pass


class TooLongError(SerializationError, MalformedInputError):
    """Raised when a length prefix exceeds the configured maximum length, the input is treated as malformed."""
    pass
