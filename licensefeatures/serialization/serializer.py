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
from typing import Any, Optional

from typing_extensions import override

from .exceptions import MaxBytesExceededError
from .types import Buffer


class Serializer(ABC):
    """Write side of the wire codec.

    Implementations only need to provide `cur_pos` and `write_bytes`, every other write is expressed in terms of them.
    """

    def finalize(self) -> Buffer:
        """Return the bytes written so far, the serializer cannot be used after this."""
        raise TypeError('this serializer does not support finalization')

    @abstractmethod
    def cur_pos(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        raise NotImplementedError

    def write_byte(self, data: int) -> None:
        # int.to_bytes checks for correct range
        self.write_bytes(data.to_bytes(1, 'big'))

    def write_struct(self, data: tuple[Any, ...], format: str) -> None:
        self.write_bytes(struct.pack(format, *data))

    def with_optional_max_bytes(self, max_bytes: Optional[int]) -> Serializer:
        """Wrap this serializer so that writing past `max_bytes` raises MaxBytesExceededError.

        No wrapping happens when `max_bytes` is None.
        """
        if max_bytes is None:
            return self
        return MaxBytesSerializer(self, max_bytes)

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        return BytesSerializer()


class BytesSerializer(Serializer):
    """In-memory serializer backed by a single growing bytearray."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    @override
    def finalize(self) -> bytes:
        result = bytes(self._buffer)
        del self._buffer
        return result

    @override
    def cur_pos(self) -> int:
        return len(self._buffer)

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._buffer += data


class MaxBytesSerializer(Serializer):
    """Forward writes to an inner serializer while keeping count of how many bytes are still allowed.

    Once MaxBytesExceededError is raised nothing else should be written, the inner serializer is left as it was before
    the failing write.
    """

    def __init__(self, inner: Serializer, max_bytes: int) -> None:
        self.inner = inner
        self._bytes_left = max_bytes

    @override
    def finalize(self) -> Buffer:
        return self.inner.finalize()

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def write_bytes(self, data: Buffer) -> None:
        size = len(memoryview(data))
        if size > self._bytes_left:
            raise MaxBytesExceededError(f'cannot write {size} more bytes, only {self._bytes_left} are allowed')
        self._bytes_left -= size
        self.inner.write_bytes(data)
