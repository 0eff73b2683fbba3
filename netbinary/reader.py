# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Binary readers using the encoding rules of .NET's System.IO.BinaryReader.

BinaryReader decodes from an in-memory buffer. StreamReader decodes from
any object with a ``read(n)`` method (file, socket file, serial port).
Both raise UnexpectedEndOfStream when the source runs dry and
InvalidData (or one of its varint subclasses) on malformed input.

Restartable decoding: if a read fails with UnexpectedEndOfStream, build a
new BinaryReader over the original buffer plus whatever arrived since and
repeat the reads. The position after a failed read is unspecified.
"""

import struct
from typing import BinaryIO

from .errors import InvalidData, UnexpectedEndOfStream
from .varint import read_varint, read_varint64

_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")
_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")


def _to_signed(value: int, bits: int) -> int:
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


class _ReaderBase:
    """Typed reads on top of read_u8/read_bytes supplied by subclasses."""

    def read_u8(self) -> int:
        raise NotImplementedError

    def read_bytes(self, size: int) -> bytes:
        raise NotImplementedError

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self.read_bytes(fmt.size))[0]

    def read_i8(self) -> int:
        return _to_signed(self.read_u8(), 8)

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_i16(self) -> int:
        return self._unpack(_I16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_u64(self) -> int:
        return self._unpack(_U64)

    def read_i64(self) -> int:
        return self._unpack(_I64)

    def read_f32(self) -> float:
        return self._unpack(_F32)

    def read_f64(self) -> float:
        return self._unpack(_F64)

    def read_bool(self) -> bool:
        """Read one byte; any nonzero value is True."""
        return self.read_u8() != 0

    def read_7bit_encoded_uint(self) -> int:
        """Read an unsigned 32-bit varint."""
        return read_varint(self.read_u8)

    def read_7bit_encoded_uint64(self) -> int:
        """Read an unsigned 64-bit varint."""
        return read_varint64(self.read_u8)

    def read_7bit_encoded_int(self) -> int:
        """Read a varint and return it as a signed 32-bit value."""
        return _to_signed(read_varint(self.read_u8), 32)

    def read_7bit_encoded_int64(self) -> int:
        """Read a varint and return it as a signed 64-bit value."""
        return _to_signed(read_varint64(self.read_u8), 64)

    def _read_prefix(self) -> int:
        length = self.read_7bit_encoded_int()
        if length < 0:
            raise InvalidData(f"Negative string length: {length}")
        return length

    def read_utf8_bytes(self) -> bytes:
        """
        Read a length-prefixed string and return its raw bytes.

        The bytes are not validated as UTF-8.

        Raises:
            InvalidData: If the length prefix is negative
            UnexpectedEndOfStream: If the string is truncated
        """
        return self.read_bytes(self._read_prefix())

    def read_utf8_str(self) -> str:
        """
        Read a length-prefixed UTF-8 string.

        Raises:
            InvalidData: If the contents are not well-formed UTF-8
        """
        data = self.read_utf8_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidData(f"Malformed UTF-8 string: {e}") from e

    def read_utf8_str_lossy(self) -> str:
        """Read a length-prefixed UTF-8 string, replacing bad sequences with U+FFFD."""
        return self.read_utf8_bytes().decode("utf-8", errors="replace")

    def read_utf16_bytes(self) -> bytes:
        """
        Read a length-prefixed UTF-16LE string and return its raw bytes.

        Raises:
            InvalidData: If the byte length is odd or negative
        """
        length = self._read_prefix()
        if length % 2:
            raise InvalidData(f"UTF-16 string has odd byte length: {length}")
        return self.read_bytes(length)

    def read_utf16_str(self) -> str:
        """
        Read a length-prefixed UTF-16LE string.

        Raises:
            InvalidData: If the contents contain unpaired surrogates
        """
        data = self.read_utf16_bytes()
        try:
            return data.decode("utf-16-le")
        except UnicodeDecodeError as e:
            raise InvalidData(f"Malformed UTF-16 string: {e}") from e

    def read_utf16_str_lossy(self) -> str:
        return self.read_utf16_bytes().decode("utf-16-le", errors="replace")


class BinaryReader(_ReaderBase):
    """
    Reads values from an in-memory buffer.

        r = BinaryReader(b"\\x06Hello!\\x55\\xaa")
        r.read_utf8_str()  # "Hello!"
        r.read_u16()       # 0xAA55
    """

    def __init__(self, data: bytes):
        self._buf = memoryview(bytes(data))
        self._pos = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._pos

    @property
    def data(self) -> bytes:
        """The unread tail of the buffer."""
        return bytes(self._buf[self._pos:])

    def at_end(self) -> bool:
        return self._pos >= len(self._buf)

    def read_u8(self) -> int:
        if self._pos >= len(self._buf):
            raise UnexpectedEndOfStream("Unexpected end of data reading u8")
        value = self._buf[self._pos]
        self._pos += 1
        return value

    def read_bytes(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"Negative read size: {size}")
        if self.remaining < size:
            raise UnexpectedEndOfStream(
                f"Unexpected end of data: need {size} bytes, have {self.remaining}"
            )
        value = bytes(self._buf[self._pos:self._pos + size])
        self._pos += size
        return value


class StreamReader(_ReaderBase):
    """
    Reads values from a binary stream.

    Works with anything whose ``read(n)`` returns up to n bytes and b""
    at end of stream, including ``serial.Serial`` (a read timeout counts
    as end of stream).
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._pos = 0

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    def read_u8(self) -> int:
        data = self._stream.read(1)
        if not data:
            raise UnexpectedEndOfStream("Unexpected end of stream reading u8")
        self._pos += 1
        return data[0]

    def read_bytes(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"Negative read size: {size}")
        result = bytearray()
        while len(result) < size:
            chunk = self._stream.read(size - len(result))
            if not chunk:
                self._pos += len(result)
                raise UnexpectedEndOfStream(
                    f"Unexpected end of stream: need {size} bytes, got {len(result)}"
                )
            result.extend(chunk)
        self._pos += size
        return bytes(result)
