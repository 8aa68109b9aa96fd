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
This module implements IEEE-754 floating point encoding, either binary32 (`length=4`) or binary64 (`length=8`).

Both are written big-endian, exactly like Java's `DataOutput.writeFloat/writeDouble`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4)  # writes 3fc00000
>>> encode_float(se, -2.0, length=8)  # writes c000000000000000
>>> bytes(se.finalize()).hex()
'3fc00000c000000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('3fc00000c000000000000000'))
>>> decode_float(de, length=4)
1.5
>>> decode_float(de, length=8)
-2.0
>>> de.finalize()

Values are rounded to the nearest binary32 when `length=4`, but a finite value that does not fit is an error:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_float(se, 1e300, length=4)
... except ValueError as e:
...     print(*e.args)
too big to encode
"""

from licensefeatures.serialization import Deserializer, Serializer

_FORMATS: dict[int, str] = {
    4: '>f',
    8: '>d',
}


def _get_format(length: int) -> str:
    try:
        return _FORMATS[length]
    except KeyError:
        raise ValueError(f'unsupported float length: {length}')


def encode_float(serializer: Serializer, value: float, *, length: int) -> None:
    """ Encode a float using 4 or 8 bytes.
    """
    fmt = _get_format(length)
    try:
        serializer.write_struct((value,), fmt)
    except OverflowError:
        raise ValueError('too big to encode')


def decode_float(deserializer: Deserializer, *, length: int) -> float:
    """ Decode a float from 4 or 8 bytes.
    """
    value, = deserializer.read_struct(_get_format(length))
    return value
