# Copyright 2026 Hathor Labs
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
from typing import Any, Optional

from licensefeatures.exceptions import UnknownTypeCodeError

# Marker for kinds whose payload length is written on the wire.
VARIABLE_LENGTH = None


class FeatureKind(IntEnum):
    """Kinds of value a feature can hold.

    The int value of each member is its wire code, codes are stable and must never be reassigned.
    """

    fixed_width: Optional[int]

    def __new__(cls, code: int, fixed_width: Optional[int]) -> 'FeatureKind':
        obj = int.__new__(cls, code)
        obj._value_ = code
        obj.fixed_width = fixed_width
        return obj

    BINARY = (1, VARIABLE_LENGTH)
    STRING = (2, VARIABLE_LENGTH)
    BYTE = (3, 1)
    SHORT = (4, 2)
    INT = (5, 4)
    LONG = (6, 8)
    FLOAT = (7, 4)
    DOUBLE = (8, 8)
    BIG_INTEGER = (9, VARIABLE_LENGTH)
    BIG_DECIMAL = (10, VARIABLE_LENGTH)
    TIMESTAMP = (11, 8)

    @classmethod
    def _missing_(cls, value: Any) -> None:
        raise UnknownTypeCodeError(value)

    @classmethod
    def from_code(cls, code: int) -> 'FeatureKind':
        """Resolve a wire code, raises UnknownTypeCodeError if no kind has it."""
        return cls(code)

    @property
    def code(self) -> int:
        return int(self)

    @property
    def is_variable_length(self) -> bool:
        return self.fixed_width is VARIABLE_LENGTH
