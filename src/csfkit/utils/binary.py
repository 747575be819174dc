"""Binary I/O utilities for CSF parsing."""

import struct
from enum import Enum
from typing import BinaryIO
from io import BytesIO

from ..errors import CsfTruncatedError


class ByteOrder(Enum):
    """Byte order enum for struct packing/unpacking."""
    BIG_ENDIAN = ">"
    LITTLE_ENDIAN = "<"


class IoBuffer:
    """Binary reader with endian support and strict length checks."""

    def __init__(self, stream: BinaryIO, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN):
        self.stream = stream
        self.byte_order = byte_order

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN) -> 'IoBuffer':
        """Create from bytes."""
        return cls(BytesIO(data), byte_order)

    @property
    def position(self) -> int:
        """Current position in stream."""
        return self.stream.tell()

    def read_bytes(self, count: int) -> bytes:
        """Read exactly count bytes, raising CsfTruncatedError on a short read."""
        offset = self.stream.tell()
        data = self.stream.read(count)
        if len(data) != count:
            raise CsfTruncatedError(offset, count, len(data))
        return data

    def read_available(self, count: int) -> bytes:
        """Read up to count bytes; an empty result means end of stream."""
        return self.stream.read(count)

    def read_uint32(self) -> int:
        """Read unsigned 32-bit integer."""
        fmt = f"{self.byte_order.value}I"
        return struct.unpack(fmt, self.read_bytes(4))[0]


class IoWriter:
    """Binary writer with endian support."""

    def __init__(self, stream: BinaryIO = None, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN):
        self.stream = stream if stream is not None else BytesIO()
        self.byte_order = byte_order

    def getvalue(self) -> bytes:
        """Bytes written so far (in-memory writers only)."""
        return self.stream.getvalue()

    def write_bytes(self, data: bytes):
        """Write raw bytes."""
        self.stream.write(data)

    def write_uint32(self, value: int):
        """Write unsigned 32-bit integer."""
        fmt = f"{self.byte_order.value}I"
        self.stream.write(struct.pack(fmt, value))
