"""
SEC1 point compression and decompression.

A public key is a curve point (x, y). SEC1 serialises it two ways::

    uncompressed = 0x04 || x (32 bytes) || y (32 bytes)       65 bytes
    compressed   = (0x02 | y mod 2) || x (32 bytes)            33 bytes

Compression drops y and keeps only its parity. Decompression recovers y
from the curve equation:

    y^2 = x^3 + a*x + b  (mod p)

For a prime p = 3 (mod 4), if r has a square root at all then
r^((p+1)/4) is one of its two roots; the other is p minus it. Not every x
is on the curve: when r is a non-residue the candidate squares to -r
instead of r, so the candidate must be squared and checked before use.

Only public keys pass through here, so the arithmetic does not need to be
constant-time.

References:
    - SEC 1 v2, section 2.3.3 (Elliptic-Curve-Point-to-Octet-String)
    - SEC 1 v2, section 2.3.4 (Octet-String-to-Elliptic-Curve-Point)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from didkey.types import (
    Bytes33,
    Bytes65,
    InvalidKeyFormatError,
    InvalidKeyLengthError,
    KeyDecodingFailedError,
)

from .curves import K256, P256, CurveParams
from .engine import modexp

__all__ = [
    "PointCodec",
    "P256_CODEC",
    "K256_CODEC",
    "codec_for",
]

UNCOMPRESSED_TAG: Final = 0x04
"""Leading byte of an uncompressed point."""

EVEN_Y_TAG: Final = 0x02
"""Leading byte of a compressed point with even y."""

ODD_Y_TAG: Final = 0x03
"""Leading byte of a compressed point with odd y."""


@dataclass(frozen=True, slots=True)
class PointCodec:
    """
    Compressed/uncompressed point conversion for one curve.

    Attributes:
        curve: Domain parameters of the curve.
    """

    curve: CurveParams

    def is_on_curve(self, x: int, y: int) -> bool:
        """Check y^2 = x^3 + a*x + b (mod p) with both coordinates in range."""
        p = self.curve.p
        if not (0 <= x < p and 0 <= y < p):
            return False
        return (y * y - self._curve_rhs(x)) % p == 0

    def compress(self, public_key: bytes) -> Bytes33:
        """
        Compress an uncompressed public key.

        Args:
            public_key: 65-byte uncompressed point.

        Returns:
            33-byte compressed point.

        Raises:
            InvalidKeyLengthError: If the key is not 65 bytes.
            InvalidKeyFormatError: If the key does not start with 0x04.
        """
        if len(public_key) != self.curve.uncompressed_length:
            raise InvalidKeyLengthError(
                expected=self.curve.uncompressed_length, actual=len(public_key)
            )
        if public_key[0] != UNCOMPRESSED_TAG:
            raise InvalidKeyFormatError(
                f"Uncompressed key must start with 0x04, got 0x{public_key[0]:02x}"
            )

        size = self.curve.coordinate_size
        x_bytes = public_key[1 : 1 + size]
        y = int.from_bytes(public_key[1 + size :], "big")

        tag = EVEN_Y_TAG if y % 2 == 0 else ODD_Y_TAG
        return Bytes33(bytes([tag]) + x_bytes)

    def decompress(self, public_key: bytes) -> Bytes65:
        """
        Decompress a compressed public key.

        Args:
            public_key: 33-byte compressed point.

        Returns:
            65-byte uncompressed point.

        Raises:
            InvalidKeyLengthError: If the key is not 33 bytes.
            InvalidKeyFormatError: If the key does not start with 0x02 or 0x03.
            KeyDecodingFailedError: If x is not the x-coordinate of a curve point.
        """
        if len(public_key) != self.curve.compressed_length:
            raise InvalidKeyLengthError(
                expected=self.curve.compressed_length, actual=len(public_key)
            )

        tag = public_key[0]
        if tag not in (EVEN_Y_TAG, ODD_Y_TAG):
            raise InvalidKeyFormatError(
                f"Compressed key must start with 0x02 or 0x03, got 0x{tag:02x}"
            )

        p = self.curve.p
        x = int.from_bytes(public_key[1:], "big")
        if x >= p:
            raise KeyDecodingFailedError("x-coordinate is not a field element")

        # Candidate root: valid only when rhs is a quadratic residue.
        rhs = self._curve_rhs(x)
        y = modexp(rhs, (p + 1) // 4, p)
        if (y * y) % p != rhs:
            raise KeyDecodingFailedError("x-coordinate is not on the curve")

        # Pick the root whose parity the tag asked for.
        if y % 2 != tag % 2:
            y = p - y

        size = self.curve.coordinate_size
        return Bytes65(
            bytes([UNCOMPRESSED_TAG]) + x.to_bytes(size, "big") + y.to_bytes(size, "big")
        )

    def _curve_rhs(self, x: int) -> int:
        """Evaluate x^3 + a*x + b (mod p)."""
        p = self.curve.p
        return (pow(x, 3, p) + self.curve.a * x + self.curve.b) % p


P256_CODEC: Final = PointCodec(P256)
"""Point codec for NIST P-256."""

K256_CODEC: Final = PointCodec(K256)
"""Point codec for secp256k1."""

_CODECS: Final = {codec.curve.curve_id: codec for codec in (P256_CODEC, K256_CODEC)}


def codec_for(curve: CurveParams) -> PointCodec:
    """Return the point codec of a registered curve."""
    return _CODECS[curve.curve_id]
