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
This module implements encoding of `decimal.Decimal` values as an unscaled integer and a scale.

A decimal is `unscaled * 10**-scale`. The unscaled value is written like in `big_int` and is followed by the scale as
a 4-byte big-endian signed integer, so the scale is always the last 4 bytes. There is no length prefix.

>>> se = Serializer.build_bytes_serializer()
>>> encode_decimal(se, Decimal('123.45'))  # writes 3039 00000002
>>> bytes(se.finalize()).hex()
'303900000002'

>>> se = Serializer.build_bytes_serializer()
>>> encode_decimal(se, Decimal('-1.5'))  # writes f1 00000001
>>> bytes(se.finalize()).hex()
'f100000001'

>>> se = Serializer.build_bytes_serializer()
>>> encode_decimal(se, Decimal('7E+3'))  # writes 07 fffffffd
>>> bytes(se.finalize()).hex()
'07fffffffd'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('303900000002'))
>>> decode_decimal(de, length=6)
Decimal('123.45')
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('f100000001'))
>>> decode_decimal(de, length=5)
Decimal('-1.5')
>>> de.finalize()

>>> split_decimal(Decimal('0.050'))
(50, 3)
>>> make_decimal(-12345, 2)
Decimal('-123.45')
"""

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal

from licensefeatures.serialization import BadDataError, Deserializer, Serializer

from .big_int import decode_big_int, encode_big_int
from .int import decode_int, encode_int

SCALE_LENGTH = 4

_MIN_SCALE = -(2 ** 31)
_MAX_SCALE = 2 ** 31 - 1

# Exact context: no rounding for any unscaled value and any 32-bit scale.
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def split_decimal(value: Decimal) -> tuple[int, int]:
    """ Return the `(unscaled, scale)` pair of a finite decimal, preserving its exponent.

    The unscaled value is taken by shifting the exponent to zero, which keeps it exact for any number of digits.
    """
    if not value.is_finite():
        raise ValueError(f'cannot encode a non-finite decimal: {value}')
    exponent = value.as_tuple().exponent
    assert isinstance(exponent, int)
    return int(value.scaleb(-exponent, context=_EXACT)), -exponent


def make_decimal(unscaled: int, scale: int) -> Decimal:
    """ Build the decimal `unscaled * 10**-scale` without rounding.
    """
    return Decimal(unscaled).scaleb(-scale, context=_EXACT)


def encode_decimal(serializer: Serializer, value: Decimal) -> None:
    """ Encode a decimal as its unscaled value followed by its 4-byte scale.

    This module's docstring has more details and examples.
    """
    unscaled, scale = split_decimal(value)
    if not _MIN_SCALE <= scale <= _MAX_SCALE:
        raise ValueError(f'scale out of range: {scale}')
    encode_big_int(serializer, unscaled)
    encode_int(serializer, scale, length=SCALE_LENGTH, signed=True)


def decode_decimal(deserializer: Deserializer, *, length: int) -> Decimal:
    """ Decode a decimal that takes `length` bytes, the scale included.
    """
    if length < SCALE_LENGTH:
        raise BadDataError(f'decimal needs at least {SCALE_LENGTH} bytes, got {length}')
    unscaled = decode_big_int(deserializer, length=length - SCALE_LENGTH)
    scale = decode_int(deserializer, length=SCALE_LENGTH, signed=True)
    return make_decimal(unscaled, scale)
