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
Fixed-size big-endian integers.

Every header word of a feature is a signed 32-bit integer, and the byte, short, int and long kinds store their value
with the width of the matching Java primitive.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 5, length=4, signed=True)
>>> encode_int(se, -2, length=2, signed=True)
>>> encode_int(se, 200, length=1, signed=False)
>>> bytes(se.finalize()).hex()
'00000005fffec8'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00000005fffec8'))
>>> decode_int(de, length=4, signed=True)
5
>>> decode_int(de, length=2, signed=True)
-2
>>> decode_int(de, length=1, signed=True)
-56
>>> de.finalize()

Values that do not fit are refused instead of being truncated:

>>> encode_int(Serializer.build_bytes_serializer(), 2 ** 31, length=4, signed=True)
Traceback (most recent call last):
...
ValueError: 2147483648 does not fit in 4 signed bytes
"""

from licensefeatures.serialization import Deserializer, Serializer


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    """Write `number` as exactly `length` big-endian bytes."""
    try:
        data = number.to_bytes(length, 'big', signed=signed)
    except OverflowError as e:
        kind = 'signed' if signed else 'unsigned'
        raise ValueError(f'{number} does not fit in {length} {kind} bytes') from e
    serializer.write_bytes(data)


def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> int:
    return int.from_bytes(deserializer.read_bytes(length), 'big', signed=signed)
