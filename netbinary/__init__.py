# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
netbinary - .NET BinaryWriter/BinaryReader compatible encoding.

This package reads and writes values byte-for-byte the way .NET's
System.IO.BinaryWriter and System.IO.BinaryReader do, so Python code can
exchange binary data with .NET applications.

Example usage:
    from netbinary import BinaryWriter, BinaryReader, StreamReader

    w = BinaryWriter()
    w.write_u8(42)
    w.write_utf8_str("Hello, world!")
    w.write_7bit_encoded_uint(300)

    r = BinaryReader(w.getvalue())
    r.read_u8()                   # 42
    r.read_utf8_str()             # "Hello, world!"
    r.read_7bit_encoded_uint()    # 300

    # Decoding straight off a serial port
    import serial
    with serial.serial_for_url("/dev/ttyUSB0", 115200, timeout=1.0) as port:
        value = StreamReader(port).read_i32()
"""

from .errors import (
    DecodeError,
    UnexpectedEndOfStream,
    InvalidData,
    VarintTooLong,
    VarintOverflow,
    EncodeError,
    CannotEncode,
)
from .reader import BinaryReader, StreamReader
from .values import ValueKind, read_value, write_value, parse_value
from .varint import (
    encode_varint,
    encode_varint64,
    decode_varint,
    decode_varint64,
    read_varint,
    read_varint64,
    varint_size,
)
from .writer import BinaryWriter

__version__ = "0.1.0"

__all__ = [
    # Errors
    "DecodeError",
    "UnexpectedEndOfStream",
    "InvalidData",
    "VarintTooLong",
    "VarintOverflow",
    "EncodeError",
    "CannotEncode",
    # Reader / writer
    "BinaryReader",
    "StreamReader",
    "BinaryWriter",
    # Value kinds
    "ValueKind",
    "read_value",
    "write_value",
    "parse_value",
    # Varint
    "encode_varint",
    "encode_varint64",
    "decode_varint",
    "decode_varint64",
    "read_varint",
    "read_varint64",
    "varint_size",
]
