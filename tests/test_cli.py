# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Tests for the netbinary_dump command-line tool."""

import io
from unittest.mock import patch

import pytest
import serial

import netbinary_dump
from netbinary import ValueKind
from netbinary_dump import cmd_decode, hexdump, main, parse_assignment


class TestHexdump:
    """Tests for hexdump helper."""

    def test_single_line(self):
        line = hexdump(b"\x06Hello!")
        assert line.startswith("00000000  06 48 65 6c 6c 6f 21")
        assert line.endswith(".Hello!")

    def test_wraps(self):
        lines = hexdump(bytes(20)).splitlines()
        assert len(lines) == 2
        assert lines[1].startswith("00000010  00 00 00 00")

    def test_empty(self):
        assert hexdump(b"") == ""


class TestParseAssignment:
    """Tests for KIND=VALUE parsing."""

    def test_valid(self):
        assert parse_assignment("u8=42") == (ValueKind.U8, 42)
        assert parse_assignment("str=a=b") == (ValueKind.STR, "a=b")

    def test_missing_equals(self):
        with pytest.raises(ValueError, match="KIND=VALUE"):
            parse_assignment("u8")

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            parse_assignment("u128=1")


class TestEncodeCommand:
    """Tests for the encode subcommand."""

    def test_hexdump_to_stdout(self, capsys):
        assert main(["encode", "varint=300", "str=Hi"]) == 0
        out, err = capsys.readouterr()
        assert "ac 02 02 48 69" in out
        assert "5 bytes" in err

    def test_to_file(self, tmp_path):
        path = tmp_path / "out.bin"
        assert main(["encode", "--output", str(path), "i32=-33", "bool=true"]) == 0
        assert path.read_bytes() == b"\xDF\xFF\xFF\xFF\x01"

    def test_out_of_range(self, capsys):
        assert main(["encode", "u8=300"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_bad_assignment(self, capsys):
        assert main(["encode", "u8"]) == 1
        assert "KIND=VALUE" in capsys.readouterr().err


class TestDecodeCommand:
    """Tests for the decode subcommand."""

    def test_from_file(self, tmp_path, capsys):
        path = tmp_path / "in.bin"
        path.write_bytes(b"\x2A\x06Hello!\xAC\x02")

        assert main(["decode", "--input", str(path), "u8", "str", "varint"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "00000000  u8        42",
            "00000001  str       'Hello!'",
            "00000008  varint    300",
        ]

    def test_repeat_until_end(self, capsys):
        stream = io.BytesIO(b"\x00\x01\xAC\x02\xFF\xFF\xFF\xFF\x0F")
        assert cmd_decode(stream, [ValueKind.VARINT], repeat=True) == 0
        values = [line.split()[-1] for line in capsys.readouterr().out.splitlines()]
        assert values == ["0", "1", "300", "4294967295"]

    def test_repeat_partial_record_fails(self, tmp_path, capsys):
        """Input ending inside a record is an error even with --repeat."""
        path = tmp_path / "in.bin"
        path.write_bytes(b"\x01\x02\x03")

        assert main(["decode", "--input", str(path), "--repeat", "u8", "u8"]) == 1
        assert "UnexpectedEndOfStream" in capsys.readouterr().err

    def test_corrupt_varint(self, tmp_path, capsys):
        path = tmp_path / "in.bin"
        path.write_bytes(b"\xFF\xFF\xFF\xFF\x1F")

        assert main(["decode", "--input", str(path), "varint"]) == 1
        assert "VarintOverflow" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["decode", "--input", str(tmp_path / "nope.bin"), "u8"]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unknown_kind_exits(self):
        with pytest.raises(SystemExit):
            main(["decode", "u128"])


class TestPortOption:
    """Tests for --port handling."""

    def test_encode_then_decode_over_port(self, loop_port, capsys):
        """Encode writes to the port; decode reads the same bytes back."""
        with patch.object(netbinary_dump, "open_port", return_value=loop_port):
            with patch.object(loop_port, "close"):
                assert main(["--port", "loop://", "encode", "int7=-1", "str16=ok"]) == 0
                capsys.readouterr()
                assert main(["--port", "loop://", "decode", "int7", "str16"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "00000000  int7      -1",
            "00000005  str16     'ok'",
        ]

    def test_open_port_passes_settings(self):
        with patch("netbinary_dump.serial.serial_for_url") as mock_open:
            netbinary_dump.open_port("/dev/ttyUSB0", 9600, 2.0)
        mock_open.assert_called_once_with("/dev/ttyUSB0", baudrate=9600, timeout=2.0)

    def test_port_open_failure(self, capsys):
        with patch("netbinary_dump.serial.serial_for_url",
                   side_effect=serial.SerialException("no such device")):
            assert main(["--port", "/dev/ttyNOPE", "decode", "u8"]) == 1
        assert "Error opening /dev/ttyNOPE" in capsys.readouterr().err

    def test_port_closed_after_command(self, loop_port):
        with patch.object(netbinary_dump, "open_port", return_value=loop_port):
            main(["--port", "loop://", "encode", "u8=1"])
        assert not loop_port.is_open
