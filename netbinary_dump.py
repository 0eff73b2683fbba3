#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Dump and produce .NET BinaryWriter streams.

Usage:
    python netbinary_dump.py decode --input data.bin u8 str varint
    python netbinary_dump.py decode --port /dev/ttyUSB0 --repeat int7 f64
    python netbinary_dump.py encode u8=42 str=Hello varint=300
    python netbinary_dump.py encode --output data.bin i32=-33 bool=true
"""

import argparse
import sys
from typing import BinaryIO, List, Optional, Tuple

import serial

from netbinary import (
    BinaryWriter,
    DecodeError,
    EncodeError,
    StreamReader,
    UnexpectedEndOfStream,
    ValueKind,
    parse_value,
    read_value,
    write_value,
)


def hexdump(data: bytes, width: int = 16) -> str:
    """Format bytes as offset / hex / ASCII lines."""
    lines = []
    for offset in range(0, len(data), width):
        chunk = data[offset:offset + width]
        hex_part = " ".join(f"{b:02x}" for b in chunk)
        text = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)
        lines.append(f"{offset:08x}  {hex_part:<{width * 3 - 1}}  {text}")
    return "\n".join(lines)


def parse_assignment(text: str) -> Tuple[ValueKind, object]:
    """Parse a KIND=VALUE argument."""
    kind_name, sep, raw = text.partition("=")
    if not sep:
        raise ValueError(f"Expected KIND=VALUE, got {text!r}")
    return ValueKind(kind_name), parse_value(ValueKind(kind_name), raw)


def open_port(port: str, baudrate: int, timeout: float):
    """Open a serial port by device path or pyserial URL (loop://, socket://...)."""
    return serial.serial_for_url(port, baudrate=baudrate, timeout=timeout)


def cmd_decode(stream: BinaryIO, kinds: List[ValueKind], repeat: bool) -> int:
    """Decode values and print one line per value."""
    reader = StreamReader(stream)

    while True:
        for index, kind in enumerate(kinds):
            offset = reader.position
            try:
                value = read_value(reader, kind)
            except UnexpectedEndOfStream:
                if repeat and index == 0 and reader.position == offset:
                    return 0
                raise
            print(f"{offset:08x}  {kind!s:<8}  {value!r}")
        if not repeat:
            return 0


def cmd_encode(out: Optional[BinaryIO], items: List[Tuple[ValueKind, object]]) -> int:
    """Encode values to a stream, or print a hex dump."""
    writer = BinaryWriter()
    for kind, value in items:
        write_value(writer, kind, value)

    data = writer.getvalue()
    if out is None:
        print(hexdump(data))
    else:
        out.write(data)
        out.flush()
    print(f"{len(data)} bytes", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Dump and produce .NET BinaryWriter streams"
    )
    parser.add_argument(
        "--port", "-p",
        help="Serial port or pyserial URL (e.g., /dev/ttyUSB0, loop://)"
    )
    parser.add_argument("--baudrate", "-b", type=int, default=115200,
                        help="Baud rate (default 115200)")
    parser.add_argument("--timeout", "-t", type=float, default=5.0,
                        help="Serial read timeout in seconds (default 5.0)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    kinds = [str(k) for k in ValueKind]

    # decode command
    decode_parser = subparsers.add_parser("decode", help="Decode values from a stream")
    decode_parser.add_argument("kinds", nargs="+", type=ValueKind, metavar="KIND",
                               help=f"Value kinds in order ({', '.join(kinds)})")
    decode_parser.add_argument("--input", "-i", help="Input file (default stdin)")
    decode_parser.add_argument("--repeat", "-r", action="store_true",
                               help="Repeat the kinds until the input ends")

    # encode command
    encode_parser = subparsers.add_parser("encode", help="Encode values")
    encode_parser.add_argument("values", nargs="+", metavar="KIND=VALUE",
                               help="Values to encode, in order")
    encode_parser.add_argument("--output", "-o",
                               help="Output file (default: hex dump on stdout)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    port = None
    if args.port:
        try:
            port = open_port(args.port, args.baudrate, args.timeout)
        except serial.SerialException as e:
            print(f"Error opening {args.port}: {e}", file=sys.stderr)
            return 1

    try:
        if args.command == "decode":
            if port is not None:
                return cmd_decode(port, args.kinds, args.repeat)
            if args.input:
                with open(args.input, "rb") as f:
                    return cmd_decode(f, args.kinds, args.repeat)
            return cmd_decode(sys.stdin.buffer, args.kinds, args.repeat)

        elif args.command == "encode":
            try:
                items = [parse_assignment(v) for v in args.values]
            except ValueError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
            if port is not None:
                return cmd_encode(port, items)
            if args.output:
                with open(args.output, "wb") as f:
                    return cmd_encode(f, items)
            return cmd_encode(None, items)

    except (DecodeError, EncodeError) as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    finally:
        if port is not None:
            port.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
