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
This module implements strict utf-8 string encoding without a length prefix.

The byte length (not the number of characters) has to be written by the caller and given back when decoding.

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'foobar')  # writes 666f6f626172
>>> encode_utf8(se, 'ñ')  # writes c3b1
>>> bytes(se.finalize()).hex()
'666f6f626172c3b1'

>>> utf8_length('ñ')
2

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('666f6f626172c3b1'))
>>> decode_utf8(de, length=6)
'foobar'
>>> decode_utf8(de, length=2)
'ñ'
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(b'\xc3')
>>> try:
...     decode_utf8(de, length=1)
... except ValueError as e:
...     print(*e.args)
invalid utf-8 sequence
"""

from licensefeatures.serialization import BadDataError, Deserializer, Serializer


def utf8_length(value: str) -> int:
    return len(value.encode('utf-8'))


def encode_utf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using UTF-8.
    """
    assert isinstance(value, str)
    serializer.write_bytes(value.encode('utf-8'))


def decode_utf8(deserializer: Deserializer, *, length: int) -> str:
    """ Decodes `length` bytes of UTF-8, errors on malformed sequences.
    """
    data = bytes(deserializer.read_bytes(length))
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise BadDataError('invalid utf-8 sequence') from e
