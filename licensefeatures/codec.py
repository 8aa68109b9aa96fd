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

r"""
This module implements the wire format of a single feature.

All integers are 4-byte big-endian:

    [type code][name length][payload length, variable-length kinds only][name, UTF-8][payload]

Fixed-width kinds omit the payload length, it is implied by the kind:

>>> encode(Feature.from_byte('x', -1)).hex()
'000000030000000178ff'
>>> encode(Feature.from_string('os', 'linux')).hex()
'0000000200000002000000056f736c696e7578'

>>> decode(bytes.fromhex('0000000200000002000000056f736c696e7578'))
Ok(Feature(name='os', kind=<FeatureKind.STRING: 2>, payload=b'linux'))
>>> decode(b'\x00\x00\x00')
Err(TruncatedInputError('cannot decode a feature from 3 bytes, at least 8 are needed'))
"""

from structlog import get_logger

from licensefeatures.conf import CodecSettings, get_settings
from licensefeatures.exceptions import (
    DecodeError,
    FeatureTooLargeError,
    InvalidEncodingError,
    LengthMismatchError,
    TruncatedInputError,
)
from licensefeatures.feature import Feature
from licensefeatures.feature_kind import FeatureKind
from licensefeatures.serialization import BadDataError, Deserializer, Serializer, TooLongError
from licensefeatures.serialization.encoding.int import decode_int, encode_int
from licensefeatures.serialization.encoding.utf8 import decode_utf8, encode_utf8, utf8_length
from licensefeatures.serialization.types import Buffer
from licensefeatures.utils.result import Result, as_result

logger = get_logger()

WORD_LENGTH = 4

# Trailer of fixed-width features in the legacy layout, where the payload length word is reserved but never written.
_LEGACY_PADDING = bytes(WORD_LENGTH)


def header_length(kind: FeatureKind | None, *, legacy_framing: bool = False) -> int:
    """ Length of the words that precede the name.

    With `kind=None` this is the minimum any feature needs before its kind is known.
    """
    if legacy_framing or (kind is not None and kind.is_variable_length):
        return 3 * WORD_LENGTH
    return 2 * WORD_LENGTH


def _encode_word(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=WORD_LENGTH, signed=True)


def _decode_word(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=WORD_LENGTH, signed=True)


def encode_feature(serializer: Serializer, feature: Feature, *, legacy_framing: bool = False) -> None:
    """ Write the whole wire format of a feature.
    """
    kind = feature.kind
    _encode_word(serializer, kind.code)
    _encode_word(serializer, utf8_length(feature.name))
    if kind.is_variable_length:
        _encode_word(serializer, len(feature.payload))
    encode_utf8(serializer, feature.name)
    serializer.write_bytes(feature.payload)
    if legacy_framing and not kind.is_variable_length:
        serializer.write_bytes(_LEGACY_PADDING)


def decode_feature(deserializer: Deserializer, *, legacy_framing: bool = False,
                   max_name_length: int | None = None) -> Feature:
    """ Read a feature that takes every byte left in the deserializer.

    The kind is resolved before the length words are read, since it decides whether the payload length is present.
    """
    total = deserializer.remaining()
    minimum = header_length(None, legacy_framing=legacy_framing)
    if total < minimum:
        raise TruncatedInputError(total, minimum)

    kind = FeatureKind.from_code(_decode_word(deserializer))
    header = header_length(kind, legacy_framing=legacy_framing)
    if total < header:
        raise TruncatedInputError(total, header)

    name_length = _decode_word(deserializer)
    if kind.fixed_width is None:
        payload_length = _decode_word(deserializer)
    else:
        payload_length = kind.fixed_width
    expected = header + name_length + payload_length
    if name_length < 0 or payload_length < 0 or expected != total:
        raise LengthMismatchError(expected, total)
    if max_name_length is not None and name_length > max_name_length:
        raise FeatureTooLargeError('feature name', name_length, max_name_length)

    try:
        name = decode_utf8(deserializer, length=name_length)
    except BadDataError as e:
        raise InvalidEncodingError('feature name is not valid UTF-8') from e
    payload = bytes(deserializer.read_bytes(payload_length))
    # what is left is the legacy padding, its content is not checked
    deserializer.read_all()
    return Feature(name, kind, payload)


class FeatureCodec:
    """Encodes and decodes features according to a set of codec settings."""

    def __init__(self, settings: CodecSettings | None = None) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.log = logger.new()

    def encode(self, feature: Feature) -> bytes:
        """ Serialize a feature, the output is deterministic for equal features.

        Both limits are off by default. When set, TooLongError is raised for a name longer than `max_name_length` and
        MaxBytesExceededError for a serialized feature longer than `max_feature_size`.
        """
        max_name_length = self.settings.max_name_length
        if max_name_length is not None:
            name_length = utf8_length(feature.name)
            if name_length > max_name_length:
                raise TooLongError(f'feature name has {name_length} bytes, limit is {max_name_length}')
        serializer = Serializer.build_bytes_serializer()
        limited = serializer.with_optional_max_bytes(self.settings.max_feature_size)
        encode_feature(limited, feature, legacy_framing=self.settings.legacy_framing)
        return bytes(serializer.finalize())

    def decode(self, data: Buffer) -> Result[Feature, DecodeError]:
        """ Parse a serialized feature.

        The whole input must be exactly one feature. Failures are returned as an `Err` holding a DecodeError.
        """
        result = self._decode(data)
        if result.is_err():
            self.log.debug('feature decode failed', size=len(data), error=repr(result.err()))
        return result

    @as_result(DecodeError)
    def _decode(self, data: Buffer) -> Feature:
        max_feature_size = self.settings.max_feature_size
        if max_feature_size is not None and len(data) > max_feature_size:
            raise FeatureTooLargeError('feature', len(data), max_feature_size)
        deserializer = Deserializer.build_bytes_deserializer(data)
        feature = decode_feature(
            deserializer,
            legacy_framing=self.settings.legacy_framing,
            max_name_length=self.settings.max_name_length,
        )
        deserializer.finalize()
        return feature


_default_codec: FeatureCodec | None = None


def get_default_codec() -> FeatureCodec:
    """ Return the codec bound to the process-wide settings, it is rebuilt only when those settings are reloaded.
    """
    global _default_codec
    settings = get_settings()
    if _default_codec is None or _default_codec.settings is not settings:
        _default_codec = FeatureCodec(settings)
    return _default_codec


def encode(feature: Feature) -> bytes:
    """ Serialize a feature with the process-wide settings.
    """
    return get_default_codec().encode(feature)


def decode(data: Buffer) -> Result[Feature, DecodeError]:
    """ Parse a serialized feature with the process-wide settings.
    """
    return get_default_codec().decode(data)
