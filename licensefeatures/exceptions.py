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

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from licensefeatures.feature_kind import FeatureKind


class FeatureError(Exception):
    """Base class for every error raised by this package"""


class NullValueError(FeatureError, ValueError):
    """A feature cannot be created from a missing value"""


class TypeMismatchError(FeatureError, TypeError):
    """A typed accessor was called on a feature of another kind"""

    def __init__(self, expected: FeatureKind, actual: FeatureKind) -> None:
        super().__init__(f'feature is {actual.name}, not {expected.name}')
        self.expected = expected
        self.actual = actual


class MalformedPayloadError(FeatureError, ValueError):
    """The payload does not have the shape its kind requires, only detected when the value is extracted"""


class DecodeError(FeatureError, ValueError):
    """Base class for errors when reading a feature from its wire format"""


class UnknownTypeCodeError(DecodeError):
    """The wire code does not belong to any feature kind"""

    def __init__(self, code: int) -> None:
        super().__init__(f'unknown feature type code: {code}')
        self.code = code


class TruncatedInputError(DecodeError):
    """There are fewer bytes than the header requires"""

    def __init__(self, actual: int, minimum: int) -> None:
        super().__init__(f'cannot decode a feature from {actual} bytes, at least {minimum} are needed')
        self.actual = actual
        self.minimum = minimum


class LengthMismatchError(DecodeError):
    """The lengths in the header do not account for exactly the whole input"""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f'feature header declares {expected} bytes but input has {actual}')
        self.expected = expected
        self.actual = actual


class InvalidEncodingError(DecodeError):
    """A name or string value is not valid UTF-8"""


class FeatureTooLargeError(DecodeError):
    """The input is larger than the configured limits"""

    def __init__(self, what: str, size: int, limit: int) -> None:
        super().__init__(f'{what} has {size} bytes, limit is {limit}')
        self.size = size
        self.limit = limit
