"""
Unsigned LEB128 varint encoding and decoding.

Multicodec prefixes are unsigned varints: the integer code is split into
7-bit groups, low-order group first, and every byte except the last carries
the continuation bit (0x80).

Byte structure::

    [C|D D D D D D D]
     ^-- Continuation bit (1 = more bytes, 0 = last byte)
       ^-----------^-- 7 bits of data

The two codes used by did:key in this package::

    secp256k1-pub  0xE7    -> [0xE7, 0x01]
    p256-pub       0x1200  -> [0x80, 0x24]

Multiformats requires the minimal encoding. A varint whose final byte is
zero (e.g. [0xE7, 0x81, 0x00]) decodes to the same integer but is a
different byte string, so it is rejected rather than silently accepted.

References:
    Unsigned varint specification:
        https://github.com/multiformats/unsigned-varint
    Multicodec table:
        https://github.com/multiformats/multicodec/blob/master/table.csv
"""

from __future__ import annotations

from didkey.types import DecodingError

MAX_VARINT_BYTES = 9
"""Multiformats caps unsigned varints at 9 bytes (63 bits)."""


class VarintError(DecodingError):
    """Raised when varint decoding fails."""


def encode_varint(value: int) -> bytes:
    """
    Encode an unsigned integer as a minimal LEB128 varint.

    Args:
        value: Non-negative integer to encode.

    Returns:
        Varint-encoded bytes.

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError("Varint must be non-negative")

    result = bytearray()

    # Emit 7 bits at a time with the continuation bit set,
    # until the remainder fits in a single byte.
    while value >= 0x80:
        result.append((value & 0x7F) | 0x80)
        value >>= 7

    # Final byte: continuation bit clear.
    result.append(value)

    return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a minimal varint from bytes at the given offset.

    Args:
        data: Input bytes containing the varint.
        offset: Starting position in data. Defaults to 0.

    Returns:
        Tuple of (decoded_value, bytes_consumed).

    Raises:
        VarintError: If the input is truncated, longer than
            `MAX_VARINT_BYTES`, or not minimally encoded.
    """
    result = 0
    shift = 0
    pos = offset

    while True:
        if pos >= len(data):
            raise VarintError("Truncated varint")

        if pos - offset >= MAX_VARINT_BYTES:
            raise VarintError("Varint too long")

        byte = data[pos]
        pos += 1

        result |= (byte & 0x7F) << shift
        shift += 7

        if not (byte & 0x80):
            break

    # A multi-byte varint ending in 0x00 has a redundant high group.
    #
    # The single byte 0x00 is the minimal encoding of zero and is fine.
    consumed = pos - offset
    if consumed > 1 and data[pos - 1] == 0:
        raise VarintError("Varint is not minimally encoded")

    return result, consumed
