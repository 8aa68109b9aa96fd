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

"""
Typed license features and their self-describing binary encoding.

>>> from decimal import Decimal
>>> price = Feature.from_big_decimal('price', Decimal('123.45'))
>>> data = encode(price)
>>> decode(data).unwrap().as_big_decimal()
Decimal('123.45')
"""

from licensefeatures.codec import FeatureCodec, decode, encode
from licensefeatures.exceptions import (
    DecodeError,
    FeatureError,
    FeatureTooLargeError,
    InvalidEncodingError,
    LengthMismatchError,
    MalformedPayloadError,
    NullValueError,
    TruncatedInputError,
    TypeMismatchError,
    UnknownTypeCodeError,
)
from licensefeatures.feature import Feature
from licensefeatures.feature_kind import FeatureKind
from licensefeatures.version import __version__

__all__ = [
    'Feature',
    'FeatureKind',
    'FeatureCodec',
    'encode',
    'decode',
    'FeatureError',
    'NullValueError',
    'TypeMismatchError',
    'MalformedPayloadError',
    'DecodeError',
    'UnknownTypeCodeError',
    'TruncatedInputError',
    'LengthMismatchError',
    'InvalidEncodingError',
    'FeatureTooLargeError',
    '__version__',
]
