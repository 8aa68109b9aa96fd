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
This module implements arbitrary precision integers using the shortest big-endian two's complement representation.

The representation always includes a sign bit, so it is never empty, and it matches Java's `BigInteger.toByteArray`.
There is no length prefix, the length has to be known by the reader.

>>> se = Serializer.build_bytes_serializer()
>>> encode_big_int(se, 0)  # writes 00
>>> encode_big_int(se, 127)  # writes 7f
>>> encode_big_int(se, 128)  # writes 0080
>>> encode_big_int(se, -128)  # writes 80
>>> encode_big_int(se, -129)  # writes ff7f
>>> bytes(se.finalize()).hex()
'007f008080ff7f'

>>> [big_int_length(n) for n in (0, 127, 128, -128, -129)]
[1, 1, 2, 1, 2]

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0080ff7f'))
>>> decode_big_int(de, length=2)
128
>>> decode_big_int(de, length=2)
-129
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(b'')
>>> try:
...     decode_big_int(de, length=0)
... except ValueError as e:
...     print(*e.args)
big integer cannot be empty
"""

from licensefeatures.serialization import BadDataError, Deserializer, Serializer


def big_int_length(value: int) -> int:
    """ Number of bytes needed to represent `value` in two's complement, sign bit included.
    """
    magnitude = value if value >= 0 else ~value
    return magnitude.bit_length() // 8 + 1


def encode_big_int(serializer: Serializer, value: int) -> None:
    """ Encode an int with the minimal two's complement length.

    This module's docstring has more details and examples.
    """
    data = int.to_bytes(value, big_int_length(value), byteorder='big', signed=True)
    serializer.write_bytes(data)


def decode_big_int(deserializer: Deserializer, *, length: int) -> int:
    """ Decode a two's complement int that takes `length` bytes.

    Encodings longer than the minimal one are accepted.
    """
    if length <= 0:
        raise BadDataError('big integer cannot be empty')
    data = deserializer.read_bytes(length)
    return int.from_bytes(data, byteorder='big', signed=True)
