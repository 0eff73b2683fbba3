# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Varint encoding/decoding (.NET "7-bit encoded int" compatible).

Each byte carries 7 payload bits, least significant group first. Bit 7 is
set on every byte except the last. A 32-bit value takes at most 5 bytes,
a 64-bit value at most 10.

Encoding is strict (always the minimal form). Decoding is lenient about
redundant continuation bytes (``80 00`` decodes to 0) but rejects values
that do not fit the target width.
"""

from typing import Callable, Tuple

from .errors import UnexpectedEndOfStream, VarintOverflow, VarintTooLong

UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF

MAX_VARINT32_LEN = 5
MAX_VARINT64_LEN = 10

# Payload bits of the final byte that would land beyond the target width.
# 5th byte holds bits 28..34, only 28..31 are valid.
_VARINT32_LAST_MASK = 0x70
# 10th byte holds bits 63..69, only 63 is valid.
_VARINT64_LAST_MASK = 0x7E


def _encode(value: int, limit: int) -> bytes:
    if value < 0:
        raise ValueError("Cannot encode negative value as varint")
    if value > limit:
        raise ValueError(f"Value {value:#x} does not fit in varint (max {limit:#x})")

    result = bytearray()
    while value >= 0x80:
        result.append((value & 0x7F) | 0x80)
        value >>= 7
    result.append(value)
    return bytes(result)


def encode_varint(value: int) -> bytes:
    """
    Encode an unsigned 32-bit integer as a varint.

    Args:
        value: Integer in range [0, 0xFFFFFFFF]

    Returns:
        1 to 5 varint-encoded bytes

    Raises:
        ValueError: If value is negative or wider than 32 bits
    """
    return _encode(value, UINT32_MAX)


def encode_varint64(value: int) -> bytes:
    """
    Encode an unsigned 64-bit integer as a varint.

    Args:
        value: Integer in range [0, 0xFFFFFFFFFFFFFFFF]

    Returns:
        1 to 10 varint-encoded bytes
    """
    return _encode(value, UINT64_MAX)


def varint_size(value: int) -> int:
    """Return the number of bytes encode_varint/encode_varint64 produce."""
    if value < 0:
        raise ValueError("Cannot encode negative value as varint")
    return max(1, -(-value.bit_length() // 7))


def _read(read_byte: Callable[[], int], bits: int, max_len: int, last_mask: int) -> int:
    value = 0
    shift = 0

    for count in range(1, max_len + 1):
        byte = read_byte()

        if count == max_len:
            if byte & 0x80:
                raise VarintTooLong(
                    f"Varint decode: no terminator within {max_len} bytes"
                )
            if byte & last_mask:
                raise VarintOverflow(
                    f"Varint decode: value exceeds {bits} bits"
                )

        value |= (byte & 0x7F) << shift

        if not (byte & 0x80):
            return value

        shift += 7

    raise VarintTooLong(f"Varint decode: no terminator within {max_len} bytes")


def read_varint(read_byte: Callable[[], int]) -> int:
    """
    Decode an unsigned 32-bit varint from a byte source.

    Args:
        read_byte: Callable returning the next byte as an int. It must raise
            UnexpectedEndOfStream when the source is exhausted.

    Returns:
        Decoded value

    Raises:
        UnexpectedEndOfStream: If the source ends before the terminator
        VarintTooLong: If the 5th byte still has its continuation bit set
        VarintOverflow: If the 5th byte sets bits beyond bit 31
    """
    return _read(read_byte, 32, MAX_VARINT32_LEN, _VARINT32_LAST_MASK)


def read_varint64(read_byte: Callable[[], int]) -> int:
    """Decode an unsigned 64-bit varint from a byte source."""
    return _read(read_byte, 64, MAX_VARINT64_LEN, _VARINT64_LAST_MASK)


def _decode(data: bytes, offset: int, reader: Callable) -> Tuple[int, int]:
    pos = offset

    def read_byte() -> int:
        nonlocal pos
        if pos >= len(data):
            raise UnexpectedEndOfStream("Varint decode: unexpected end of data")
        byte = data[pos]
        pos += 1
        return byte

    value = reader(read_byte)
    return value, pos


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode an unsigned 32-bit varint from bytes.

    Args:
        data: Bytes containing the varint
        offset: Starting offset in data

    Returns:
        Tuple of (decoded value, new offset after varint)

    Raises:
        UnexpectedEndOfStream: If data ends before the terminator
        VarintTooLong: If no terminator within 5 bytes
        VarintOverflow: If the value does not fit in 32 bits
    """
    return _decode(data, offset, read_varint)


def decode_varint64(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Decode an unsigned 64-bit varint from bytes. See decode_varint."""
    return _decode(data, offset, read_varint64)
