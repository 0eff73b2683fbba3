# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Binary writer using the encoding rules of .NET's System.IO.BinaryWriter.

Fixed-size values are written as their little-endian in-memory
representation. Strings are written as a 7-bit encoded byte length
followed by the encoded characters.
"""

import struct
from typing import BinaryIO, Optional, Union

from .errors import CannotEncode
from .varint import encode_varint, encode_varint64

# .NET string lengths are signed 32-bit ints.
MAX_STRING_BYTES = 0x7FFFFFFF

_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")
_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")


class BinaryWriter:
    """
    Sequentially appends encoded values to a byte sink.

    The sink is either a bytearray (appended in place) or any object with
    a ``write(bytes)`` method such as a file, ``io.BytesIO`` or a serial
    port. Without an argument the writer owns a fresh bytearray:

        w = BinaryWriter()
        w.write_utf8_str("Hello!")
        w.write_u16(0xAA55)
        w.getvalue()  # b"\\x06Hello!\\x55\\xaa"
    """

    def __init__(self, out: Optional[Union[bytearray, BinaryIO]] = None):
        if out is None:
            out = bytearray()
        self._out = out

    @property
    def out(self) -> Union[bytearray, BinaryIO]:
        """Return the underlying sink."""
        return self._out

    def getvalue(self) -> bytes:
        """
        Return everything written so far.

        Raises:
            TypeError: If the sink is a stream rather than a bytearray
        """
        if not isinstance(self._out, bytearray):
            raise TypeError("getvalue() requires a bytearray sink")
        return bytes(self._out)

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes with no length prefix."""
        if isinstance(self._out, bytearray):
            self._out.extend(data)
        else:
            self._out.write(data)

    def _pack(self, fmt: struct.Struct, value) -> None:
        try:
            packed = fmt.pack(value)
        except struct.error as e:
            raise ValueError(f"Cannot pack {value!r} as {fmt.format}: {e}") from e
        self.write_bytes(packed)

    def write_u8(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"u8 out of range: {value}")
        self.write_bytes(bytes([value]))

    def write_i8(self, value: int) -> None:
        if not -0x80 <= value <= 0x7F:
            raise ValueError(f"i8 out of range: {value}")
        self.write_bytes(bytes([value & 0xFF]))

    def write_u16(self, value: int) -> None:
        self._pack(_U16, value)

    def write_i16(self, value: int) -> None:
        self._pack(_I16, value)

    def write_u32(self, value: int) -> None:
        self._pack(_U32, value)

    def write_i32(self, value: int) -> None:
        self._pack(_I32, value)

    def write_u64(self, value: int) -> None:
        self._pack(_U64, value)

    def write_i64(self, value: int) -> None:
        self._pack(_I64, value)

    def write_f32(self, value: float) -> None:
        """Write an IEEE-754 single, little-endian."""
        self._pack(_F32, value)

    def write_f64(self, value: float) -> None:
        """Write an IEEE-754 double, little-endian."""
        self._pack(_F64, value)

    def write_bool(self, value: bool) -> None:
        """Write a bool as one byte: 1 for True, 0 for False."""
        self.write_bytes(b"\x01" if value else b"\x00")

    def write_7bit_encoded_uint(self, value: int) -> None:
        """Write an unsigned 32-bit value as a varint."""
        self.write_bytes(encode_varint(value))

    def write_7bit_encoded_uint64(self, value: int) -> None:
        """Write an unsigned 64-bit value as a varint."""
        self.write_bytes(encode_varint64(value))

    def write_7bit_encoded_int(self, value: int) -> None:
        """
        Write a signed 32-bit value as a varint (.NET Write7BitEncodedInt).

        Negative values are encoded from their two's-complement bit
        pattern, so they always take 5 bytes.
        """
        if not -0x80000000 <= value <= 0x7FFFFFFF:
            raise ValueError(f"i32 out of range: {value}")
        self.write_bytes(encode_varint(value & 0xFFFFFFFF))

    def write_7bit_encoded_int64(self, value: int) -> None:
        """Write a signed 64-bit value as a varint (.NET Write7BitEncodedInt64)."""
        if not -0x8000000000000000 <= value <= 0x7FFFFFFFFFFFFFFF:
            raise ValueError(f"i64 out of range: {value}")
        self.write_bytes(encode_varint64(value & 0xFFFFFFFFFFFFFFFF))

    def _write_prefixed(self, data: bytes) -> None:
        if len(data) > MAX_STRING_BYTES:
            raise CannotEncode(f"String of {len(data)} bytes is too long to encode")
        self.write_bytes(encode_varint(len(data)))
        self.write_bytes(data)

    def write_utf8_bytes(self, data: bytes) -> None:
        """
        Write already-encoded UTF-8 bytes in length-prefixed form.

        The bytes are not validated.

        Raises:
            CannotEncode: If data is longer than 2**31 - 1 bytes
        """
        self._write_prefixed(bytes(data))

    def write_utf8_str(self, s: str) -> None:
        """
        Write a string as UTF-8 in length-prefixed form.

        Raises:
            CannotEncode: If the encoded string is longer than 2**31 - 1 bytes
        """
        self._write_prefixed(s.encode("utf-8"))

    def write_utf16_str(self, s: str) -> None:
        """Write a string as UTF-16LE, prefixed with its length in bytes."""
        self._write_prefixed(s.encode("utf-16-le"))
