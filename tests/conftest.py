# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Pytest configuration and shared fixtures."""

import pytest
import serial


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--port",
        action="store",
        default=None,
        help="Serial port with TX wired to RX (e.g., /dev/ttyUSB0)",
    )
    parser.addoption(
        "--baudrate",
        action="store",
        type=int,
        default=115200,
        help="Baud rate for --port (default 115200)",
    )


@pytest.fixture
def loop_port():
    """
    In-process loopback serial port.

    Bytes written are returned by subsequent reads. The short timeout makes
    an empty port look like end of stream.
    """
    port = serial.serial_for_url("loop://", timeout=0.1)
    yield port
    port.close()


@pytest.fixture
def device_port(request):
    """
    Physical serial loopback from --port.

    Skips the test when no port is given.
    """
    name = request.config.getoption("--port")
    if not name:
        pytest.skip("No --port given")
    port = serial.serial_for_url(
        name,
        baudrate=request.config.getoption("--baudrate"),
        timeout=1.0,
    )
    port.reset_input_buffer()
    yield port
    port.close()
