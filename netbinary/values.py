# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Named value kinds for reading and writing sequences of values.

Used by the command-line tool to describe the layout of a stream, e.g.
``u8 str varint f64``.
"""

from enum import Enum
from typing import Union

from .reader import BinaryReader, StreamReader
from .writer import BinaryWriter

Value = Union[int, float, bool, str]


class ValueKind(Enum):
    """Encodable value kinds, named as on the command line."""
    U8 = "u8"
    I8 = "i8"
    U16 = "u16"
    I16 = "i16"
    U32 = "u32"
    I32 = "i32"
    U64 = "u64"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"
    VARINT = "varint"
    VARINT64 = "varint64"
    INT7 = "int7"
    INT7_64 = "int7_64"
    STR = "str"
    STR16 = "str16"

    def __str__(self) -> str:
        return self.value

    @property
    def is_integer(self) -> bool:
        return self not in (ValueKind.F32, ValueKind.F64, ValueKind.BOOL,
                            ValueKind.STR, ValueKind.STR16)


# (reader method, writer method) per kind
_METHODS = {
    ValueKind.U8: ("read_u8", "write_u8"),
    ValueKind.I8: ("read_i8", "write_i8"),
    ValueKind.U16: ("read_u16", "write_u16"),
    ValueKind.I16: ("read_i16", "write_i16"),
    ValueKind.U32: ("read_u32", "write_u32"),
    ValueKind.I32: ("read_i32", "write_i32"),
    ValueKind.U64: ("read_u64", "write_u64"),
    ValueKind.I64: ("read_i64", "write_i64"),
    ValueKind.F32: ("read_f32", "write_f32"),
    ValueKind.F64: ("read_f64", "write_f64"),
    ValueKind.BOOL: ("read_bool", "write_bool"),
    ValueKind.VARINT: ("read_7bit_encoded_uint", "write_7bit_encoded_uint"),
    ValueKind.VARINT64: ("read_7bit_encoded_uint64", "write_7bit_encoded_uint64"),
    ValueKind.INT7: ("read_7bit_encoded_int", "write_7bit_encoded_int"),
    ValueKind.INT7_64: ("read_7bit_encoded_int64", "write_7bit_encoded_int64"),
    ValueKind.STR: ("read_utf8_str", "write_utf8_str"),
    ValueKind.STR16: ("read_utf16_str", "write_utf16_str"),
}


def read_value(reader: Union[BinaryReader, StreamReader], kind: ValueKind) -> Value:
    """Read one value of the given kind from a BinaryReader or StreamReader."""
    return getattr(reader, _METHODS[kind][0])()


def write_value(writer: BinaryWriter, kind: ValueKind, value: Value) -> None:
    """Write one value of the given kind."""
    getattr(writer, _METHODS[kind][1])(value)


def parse_value(kind: ValueKind, text: str) -> Value:
    """
    Parse command-line text into a value of the given kind.

    Integers accept any prefix int() understands with base 0 (``0x1F``,
    ``0b101``, ``-12``). Bools accept true/false/1/0/yes/no.

    Raises:
        ValueError: If text cannot be parsed
    """
    if kind.is_integer:
        return int(text, 0)
    if kind in (ValueKind.F32, ValueKind.F64):
        return float(text)
    if kind == ValueKind.BOOL:
        lowered = text.lower()
        if lowered in ("1", "true", "yes"):
            return True
        if lowered in ("0", "false", "no"):
            return False
        raise ValueError(f"Invalid bool: {text!r}")
    return text
