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
This module implements encoding of an instant in time as a signed 64-bit count of milliseconds since the Unix epoch.

Only timezone-aware datetimes are accepted, they are decoded back as UTC datetimes. Sub-millisecond precision is lost,
the value is floored to the millisecond.

>>> value = datetime(2020, 1, 1, tzinfo=timezone.utc)
>>> datetime_to_millis(value)
1577836800000
>>> datetime_to_millis(datetime(1969, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc))
-1

>>> se = Serializer.build_bytes_serializer()
>>> encode_timestamp(se, value)
>>> encoded = bytes(se.finalize())
>>> len(encoded)
8

>>> de = Deserializer.build_bytes_deserializer(encoded)
>>> decode_timestamp(de) == value
True
>>> de.finalize()

>>> try:
...     datetime_to_millis(datetime(2020, 1, 1))
... except ValueError as e:
...     print(*e.args)
cannot encode a naive datetime
"""

from datetime import datetime, timedelta, timezone

from licensefeatures.serialization import BadDataError, Deserializer, Serializer

from .int import decode_int, encode_int

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
TIMESTAMP_LENGTH = 8

_ONE_MILLISECOND = timedelta(milliseconds=1)


def datetime_to_millis(value: datetime) -> int:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError('cannot encode a naive datetime')
    return (value - EPOCH) // _ONE_MILLISECOND


def millis_to_datetime(millis: int) -> datetime:
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError as e:
        raise BadDataError(f'timestamp out of range: {millis}') from e


def encode_timestamp(serializer: Serializer, value: datetime) -> None:
    """ Encodes a timezone-aware datetime using 8 bytes.
    """
    encode_int(serializer, datetime_to_millis(value), length=TIMESTAMP_LENGTH, signed=True)


def decode_timestamp(deserializer: Deserializer) -> datetime:
    """ Decodes 8 bytes into a UTC datetime.
    """
    millis = decode_int(deserializer, length=TIMESTAMP_LENGTH, signed=True)
    return millis_to_datetime(millis)
