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
A feature is a single named and typed attribute of a license.

Features are created with one of the `Feature.from_<kind>` constructors, which validate the value and produce the
payload, or by decoding their wire format. The value is read back with the `as_<kind>` accessor matching the kind of
the feature, any other accessor raises `TypeMismatchError`.

>>> feature = Feature.from_int('seats', 25)
>>> feature.kind
<FeatureKind.INT: 5>
>>> feature.payload.hex()
'00000019'
>>> feature.as_int()
25
>>> Feature.decode(feature.encode()) == feature
True
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from licensefeatures.exceptions import InvalidEncodingError, MalformedPayloadError, NullValueError, TypeMismatchError
from licensefeatures.feature_kind import FeatureKind
from licensefeatures.serialization import BadDataError, Deserializer, Serializer
from licensefeatures.serialization.encoding.big_int import decode_big_int, encode_big_int
from licensefeatures.serialization.encoding.decimal import decode_decimal, encode_decimal
from licensefeatures.serialization.encoding.float import decode_float, encode_float
from licensefeatures.serialization.encoding.int import decode_int, encode_int
from licensefeatures.serialization.encoding.timestamp import decode_timestamp, encode_timestamp
from licensefeatures.serialization.encoding.utf8 import decode_utf8, encode_utf8
from licensefeatures.serialization.types import Buffer

_INTEGER_KINDS = (FeatureKind.BYTE, FeatureKind.SHORT, FeatureKind.INT, FeatureKind.LONG)
_FLOAT_KINDS = (FeatureKind.FLOAT, FeatureKind.DOUBLE)


def _check_value(value: Any, expected: type | tuple[type, ...]) -> None:
    if value is None:
        raise NullValueError('cannot create a feature from a None value')
    # bool is an int subclass, but a flag is never a valid number here
    if isinstance(value, bool) or not isinstance(value, expected):
        raise TypeError(f'unexpected value type: {type(value).__name__}')


def _build_payload(write: Callable[[Serializer], None]) -> bytes:
    serializer = Serializer.build_bytes_serializer()
    write(serializer)
    return bytes(serializer.finalize())


@dataclass(frozen=True, slots=True)
class Feature:
    name: str
    kind: FeatureKind
    payload: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f'feature name must be a str, got {type(self.name).__name__}')
        # names are length-framed in UTF-8 bytes, so they must be encodable
        self.name.encode('utf-8')
        if not isinstance(self.kind, FeatureKind):
            if not isinstance(self.kind, int) or isinstance(self.kind, bool):
                raise TypeError(f'feature kind must be a FeatureKind, got {type(self.kind).__name__}')
            object.__setattr__(self, 'kind', FeatureKind.from_code(self.kind))
        if not isinstance(self.payload, (bytes, bytearray, memoryview)):
            raise TypeError(f'feature payload must be bytes, got {type(self.payload).__name__}')
        # the payload is part of the hash, mutable buffers are copied
        if type(self.payload) is not bytes:
            object.__setattr__(self, 'payload', bytes(self.payload))
        if self.kind.fixed_width is not None and len(self.payload) != self.kind.fixed_width:
            raise ValueError(f'{self.kind.name} payload must have {self.kind.fixed_width} bytes, '
                             f'got {len(self.payload)}')

    # constructors

    @classmethod
    def from_binary(cls, name: str, value: Buffer) -> Feature:
        _check_value(value, (bytes, bytearray, memoryview))
        return cls(name, FeatureKind.BINARY, bytes(value))

    @classmethod
    def from_string(cls, name: str, value: str) -> Feature:
        _check_value(value, str)
        return cls(name, FeatureKind.STRING, _build_payload(lambda se: encode_utf8(se, value)))

    @classmethod
    def _from_integer(cls, name: str, kind: FeatureKind, value: int) -> Feature:
        assert kind in _INTEGER_KINDS and kind.fixed_width is not None
        _check_value(value, int)
        length = kind.fixed_width
        return cls(name, kind, _build_payload(lambda se: encode_int(se, value, length=length, signed=True)))

    @classmethod
    def from_byte(cls, name: str, value: int) -> Feature:
        return cls._from_integer(name, FeatureKind.BYTE, value)

    @classmethod
    def from_short(cls, name: str, value: int) -> Feature:
        return cls._from_integer(name, FeatureKind.SHORT, value)

    @classmethod
    def from_int(cls, name: str, value: int) -> Feature:
        return cls._from_integer(name, FeatureKind.INT, value)

    @classmethod
    def from_long(cls, name: str, value: int) -> Feature:
        return cls._from_integer(name, FeatureKind.LONG, value)

    @classmethod
    def _from_floating(cls, name: str, kind: FeatureKind, value: float) -> Feature:
        assert kind in _FLOAT_KINDS and kind.fixed_width is not None
        _check_value(value, (int, float))
        length = kind.fixed_width
        try:
            number = float(value)
        except OverflowError:
            raise ValueError(f'value is too large for a {kind.name} feature')
        return cls(name, kind, _build_payload(lambda se: encode_float(se, number, length=length)))

    @classmethod
    def from_float(cls, name: str, value: float) -> Feature:
        """Single precision, the value is rounded to the nearest binary32."""
        return cls._from_floating(name, FeatureKind.FLOAT, value)

    @classmethod
    def from_double(cls, name: str, value: float) -> Feature:
        return cls._from_floating(name, FeatureKind.DOUBLE, value)

    @classmethod
    def from_big_integer(cls, name: str, value: int) -> Feature:
        _check_value(value, int)
        return cls(name, FeatureKind.BIG_INTEGER, _build_payload(lambda se: encode_big_int(se, value)))

    @classmethod
    def from_big_decimal(cls, name: str, value: Decimal) -> Feature:
        """The exponent of the decimal is kept, `Decimal('1.50')` and `Decimal('1.5')` have different payloads."""
        _check_value(value, Decimal)
        return cls(name, FeatureKind.BIG_DECIMAL, _build_payload(lambda se: encode_decimal(se, value)))

    @classmethod
    def from_timestamp(cls, name: str, value: datetime) -> Feature:
        """The datetime must be timezone-aware, it is stored with millisecond precision."""
        _check_value(value, datetime)
        return cls(name, FeatureKind.TIMESTAMP, _build_payload(lambda se: encode_timestamp(se, value)))

    # wire format

    def encode(self) -> bytes:
        """Serialize this feature using the process-wide codec settings."""
        from licensefeatures.codec import encode
        return encode(self)

    @classmethod
    def decode(cls, data: Buffer) -> Feature:
        """Parse a serialized feature, raises a DecodeError subclass when the data is invalid."""
        from licensefeatures.codec import decode
        return decode(data).unwrap_or_raise()

    # predicates

    def is_binary(self) -> bool:
        return self.kind is FeatureKind.BINARY

    def is_string(self) -> bool:
        return self.kind is FeatureKind.STRING

    def is_byte(self) -> bool:
        return self.kind is FeatureKind.BYTE

    def is_short(self) -> bool:
        return self.kind is FeatureKind.SHORT

    def is_int(self) -> bool:
        return self.kind is FeatureKind.INT

    def is_long(self) -> bool:
        return self.kind is FeatureKind.LONG

    def is_float(self) -> bool:
        return self.kind is FeatureKind.FLOAT

    def is_double(self) -> bool:
        return self.kind is FeatureKind.DOUBLE

    def is_big_integer(self) -> bool:
        return self.kind is FeatureKind.BIG_INTEGER

    def is_big_decimal(self) -> bool:
        return self.kind is FeatureKind.BIG_DECIMAL

    def is_timestamp(self) -> bool:
        return self.kind is FeatureKind.TIMESTAMP

    # accessors

    def _check_kind(self, expected: FeatureKind) -> None:
        if self.kind is not expected:
            raise TypeMismatchError(expected, self.kind)

    def _reader(self, expected: FeatureKind) -> Deserializer:
        self._check_kind(expected)
        return Deserializer.build_bytes_deserializer(self.payload)

    def as_binary(self) -> bytes:
        self._check_kind(FeatureKind.BINARY)
        return self.payload

    def as_string(self) -> str:
        de = self._reader(FeatureKind.STRING)
        try:
            return decode_utf8(de, length=len(self.payload))
        except BadDataError as e:
            raise InvalidEncodingError(f'feature {self.name!r} is not valid UTF-8') from e

    def as_byte(self) -> int:
        return decode_int(self._reader(FeatureKind.BYTE), length=1, signed=True)

    def as_short(self) -> int:
        return decode_int(self._reader(FeatureKind.SHORT), length=2, signed=True)

    def as_int(self) -> int:
        return decode_int(self._reader(FeatureKind.INT), length=4, signed=True)

    def as_long(self) -> int:
        return decode_int(self._reader(FeatureKind.LONG), length=8, signed=True)

    def as_float(self) -> float:
        return decode_float(self._reader(FeatureKind.FLOAT), length=4)

    def as_double(self) -> float:
        return decode_float(self._reader(FeatureKind.DOUBLE), length=8)

    def as_big_integer(self) -> int:
        de = self._reader(FeatureKind.BIG_INTEGER)
        try:
            return decode_big_int(de, length=len(self.payload))
        except BadDataError as e:
            raise MalformedPayloadError(f'feature {self.name!r}: {e}') from e

    def as_big_decimal(self) -> Decimal:
        de = self._reader(FeatureKind.BIG_DECIMAL)
        try:
            return decode_decimal(de, length=len(self.payload))
        except BadDataError as e:
            raise MalformedPayloadError(f'feature {self.name!r}: {e}') from e

    def as_timestamp(self) -> datetime:
        de = self._reader(FeatureKind.TIMESTAMP)
        try:
            return decode_timestamp(de)
        except BadDataError as e:
            raise MalformedPayloadError(f'feature {self.name!r}: {e}') from e

    def value(self) -> Any:
        """Return the value using the accessor of this feature's kind."""
        return _ACCESSORS[self.kind](self)


_ACCESSORS: dict[FeatureKind, Callable[[Feature], Any]] = {
    FeatureKind.BINARY: Feature.as_binary,
    FeatureKind.STRING: Feature.as_string,
    FeatureKind.BYTE: Feature.as_byte,
    FeatureKind.SHORT: Feature.as_short,
    FeatureKind.INT: Feature.as_int,
    FeatureKind.LONG: Feature.as_long,
    FeatureKind.FLOAT: Feature.as_float,
    FeatureKind.DOUBLE: Feature.as_double,
    FeatureKind.BIG_INTEGER: Feature.as_big_integer,
    FeatureKind.BIG_DECIMAL: Feature.as_big_decimal,
    FeatureKind.TIMESTAMP: Feature.as_timestamp,
}
