"""
Registry of the elliptic curves usable inside did:key.

Two curves are supported, each identified three ways:

+--------+-----------+-----------+---------------+
| Curve  | JWT alg   | Multicodec| Varint prefix |
+========+===========+===========+===============+
| P-256  | ES256     | 0x1200    | 80 24         |
| K-256  | ES256K    | 0xE7      | e7 01         |
+--------+-----------+-----------+---------------+

0xE7 is above 0x7F, so its varint needs two bytes: the low seven bits with
the continuation flag (0xE7), then the remaining bit (0x01). A one-byte
prefix 0xE7 would be a truncated varint.

Both are short Weierstrass curves y^2 = x^3 + a*x + b over a prime field
with p = 3 (mod 4). That congruence is what lets point decompression take
square roots with a single exponentiation.

The table is built once at import and never mutated. Collisions between
algorithm names or prefixes are programming errors and fail the import.

References:
    - SEC 2: Recommended Elliptic Curve Domain Parameters, sections 2.4.1 and 2.7.2
    - https://w3c-ccg.github.io/did-method-key/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from cryptography.hazmat.primitives.asymmetric import ec

from didkey.types import UnsupportedAlgorithmError, UnsupportedKeyTypeError

from .varint import encode_varint

__all__ = [
    "CurveId",
    "CurveParams",
    "P256",
    "K256",
    "CURVES",
    "lookup",
    "lookup_by_algorithm",
    "lookup_by_prefix",
]

COMPRESSED_KEY_LENGTH: Final = 33
"""Compressed SEC1 point: 0x02/0x03 + 32-byte x coordinate."""

UNCOMPRESSED_KEY_LENGTH: Final = 65
"""Uncompressed SEC1 point: 0x04 + 32-byte x + 32-byte y."""


class CurveId(Enum):
    """Identifiers of the supported curves."""

    P256 = "P-256"
    """NIST P-256 (secp256r1)."""

    K256 = "secp256k1"
    """The Koblitz curve used by Bitcoin and Ethereum."""


@dataclass(frozen=True, slots=True)
class CurveParams:
    """
    Immutable domain parameters and identifiers of one curve.

    Attributes:
        curve_id: Which curve this is.
        jwt_algorithm: JOSE algorithm name for ECDSA-SHA256 on this curve.
        multicodec: Multicodec code of the compressed public key.
        p: Field prime.
        a: Curve coefficient a.
        b: Curve coefficient b.
        n: Order of the base point.
        ec_curve: `cryptography` curve class used by the signing engine.
    """

    curve_id: CurveId
    jwt_algorithm: str
    multicodec: int
    p: int
    a: int
    b: int
    n: int
    ec_curve: type[ec.EllipticCurve] = field(repr=False)
    compressed_length: int = COMPRESSED_KEY_LENGTH
    uncompressed_length: int = UNCOMPRESSED_KEY_LENGTH

    @property
    def prefix(self) -> bytes:
        """Varint encoding of the multicodec code, as it appears in a did:key."""
        return encode_varint(self.multicodec)

    @property
    def half_order(self) -> int:
        """Largest S that is still low-S (floor(n / 2))."""
        return self.n // 2

    @property
    def coordinate_size(self) -> int:
        """Byte width of a field element."""
        return (self.p.bit_length() + 7) // 8


P256: Final = CurveParams(
    curve_id=CurveId.P256,
    jwt_algorithm="ES256",
    multicodec=0x1200,
    p=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    a=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    b=0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    n=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    ec_curve=ec.SECP256R1,
)
"""NIST P-256. The coefficient a is p - 3."""

K256: Final = CurveParams(
    curve_id=CurveId.K256,
    jwt_algorithm="ES256K",
    multicodec=0xE7,
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    ec_curve=ec.SECP256K1,
)
"""secp256k1: y^2 = x^3 + 7."""

CURVES: Final[tuple[CurveParams, ...]] = (P256, K256)
"""Every supported curve, in registration order."""


def _build_index() -> tuple[dict[str, CurveParams], dict[bytes, CurveParams]]:
    """Index the curve table by algorithm and prefix, refusing collisions."""
    by_algorithm: dict[str, CurveParams] = {}
    by_prefix: dict[bytes, CurveParams] = {}

    for curve in CURVES:
        assert curve.jwt_algorithm not in by_algorithm, f"duplicate {curve.jwt_algorithm}"
        assert curve.prefix not in by_prefix, f"duplicate prefix {curve.prefix.hex()}"
        assert curve.p % 4 == 3, f"{curve.curve_id.value} field prime is not 3 mod 4"

        by_algorithm[curve.jwt_algorithm] = curve
        by_prefix[curve.prefix] = curve

    return by_algorithm, by_prefix


_BY_ALGORITHM, _BY_PREFIX = _build_index()


def lookup(curve_id: CurveId) -> CurveParams:
    """Return the parameters of a curve by identifier."""
    return next(curve for curve in CURVES if curve.curve_id is curve_id)


def lookup_by_algorithm(jwt_algorithm: str) -> CurveParams:
    """
    Find the curve for a JWT algorithm name.

    Args:
        jwt_algorithm: "ES256" or "ES256K".

    Returns:
        The matching curve parameters.

    Raises:
        UnsupportedAlgorithmError: If no curve uses this algorithm.
    """
    try:
        return _BY_ALGORITHM[jwt_algorithm]
    except KeyError as e:
        raise UnsupportedAlgorithmError(jwt_algorithm) from e


def lookup_by_prefix(prefix: bytes) -> CurveParams:
    """
    Find the curve whose multicodec prefix is exactly `prefix`.

    Args:
        prefix: Varint-encoded multicodec bytes.

    Returns:
        The matching curve parameters.

    Raises:
        UnsupportedKeyTypeError: If no curve registers these bytes.
    """
    try:
        return _BY_PREFIX[bytes(prefix)]
    except KeyError as e:
        raise UnsupportedKeyTypeError(bytes(prefix)) from e
