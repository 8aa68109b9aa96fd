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

import struct
from abc import ABC, abstractmethod
from typing import Any

from typing_extensions import override

from .exceptions import OutOfDataError, SerializationError
from .types import Buffer


class Deserializer(ABC):
    """Read side of the wire codec.

    Implementations provide `remaining` and `read_bytes`, reads never consume anything when they fail.
    """

    def finalize(self) -> None:
        """Check that every byte was consumed, the deserializer cannot be used after this."""
        raise TypeError('this deserializer does not support finalization')

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        return BytesDeserializer(data)

    @abstractmethod
    def remaining(self) -> int:
        """Number of bytes that can still be read."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int) -> Buffer:
        """Read exactly n bytes, errors if there isn't enough data"""
        raise NotImplementedError

    def is_empty(self) -> bool:
        return self.remaining() == 0

    def read_byte(self) -> int:
        """Read a single byte as unsigned int."""
        return self.read_bytes(1)[0]

    def read_all(self) -> Buffer:
        return self.read_bytes(self.remaining())

    def read_struct(self, format: str) -> tuple[Any, ...]:
        return struct.unpack(format, self.read_bytes(struct.calcsize(format)))


class BytesDeserializer(Deserializer):
    """Deserializer over an in-memory byte sequence, the returned slices share memory with the input."""

    def __init__(self, data: Buffer) -> None:
        self._view = memoryview(data).cast('B')
        self._offset = 0

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise SerializationError(f'trailing data: {self.remaining()} bytes were not read')
        del self._view

    @override
    def remaining(self) -> int:
        return len(self._view) - self._offset

    @override
    def read_bytes(self, n: int) -> memoryview:
        if n < 0:
            raise SerializationError('value cannot be negative')
        if n > self.remaining():
            raise OutOfDataError(f'cannot read {n} bytes, only {self.remaining()} are left')
        start, self._offset = self._offset, self._offset + n
        return self._view[start:self._offset]
