# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Exceptions raised by the binary reader and writer.

All of them derive from ValueError, so callers that only care about
"bad bytes" can catch that.
"""


class DecodeError(ValueError):
    """Base exception for decoding errors."""
    pass


class UnexpectedEndOfStream(DecodeError):
    """The source ran out of bytes before the value was complete.

    The encoded value may still be well-formed if more data arrives.
    """
    pass


class InvalidData(DecodeError):
    """The input is malformed."""
    pass


class VarintTooLong(InvalidData):
    """No terminating byte within the maximum varint length."""
    pass


class VarintOverflow(InvalidData):
    """Decoded varint has bits set beyond the target integer width."""
    pass


class EncodeError(ValueError):
    """Base exception for encoding errors."""
    pass


class CannotEncode(EncodeError):
    """A value is too large to be written with a length prefix."""
    pass
