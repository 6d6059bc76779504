"""
Boundary to the elliptic-curve math engine.

The algebra of ECDSA (scalar multiplication, the verification equation,
key generation) is delegated to the `cryptography` package. This module is
the only place that touches it, and it speaks this package's wire types:

- digests are 32-byte SHA-256 outputs,
- public keys are 65-byte uncompressed points,
- signatures are 64-byte r || s.

`cryptography` works with DER signatures and hashes internally. Both are
bridged here: signing and verification run on an already-computed digest
(`Prehashed`), and r, s are converted to and from DER around each call.
"""

from __future__ import annotations

import hashlib

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

from didkey.types import Bytes32, Bytes64, InvalidPublicKeyError

from .curves import CurveParams

__all__ = [
    "derive_private_key",
    "generate_private_key",
    "modexp",
    "sha256",
    "sign_digest",
    "verify_raw",
]

modexp = pow
"""Modular exponentiation, modexp(base, exponent, modulus)."""


def sha256(data: bytes) -> Bytes32:
    """Hash data with SHA-256."""
    return Bytes32(hashlib.sha256(data).digest())


def generate_private_key(curve: CurveParams) -> ec.EllipticCurvePrivateKey:
    """Generate a fresh random private key on the curve."""
    return ec.generate_private_key(curve.ec_curve())


def derive_private_key(curve: CurveParams, scalar: bytes) -> ec.EllipticCurvePrivateKey:
    """
    Load a private key from its raw 32-byte scalar.

    Args:
        curve: Curve the key lives on.
        scalar: Big-endian private scalar.

    Returns:
        The private key.

    Raises:
        ValueError: If the scalar is not 32 bytes or not in [1, n-1].
    """
    if len(scalar) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(scalar)}")
    return ec.derive_private_key(int.from_bytes(scalar, "big"), curve.ec_curve())


def sign_digest(
    curve: CurveParams, private_key: ec.EllipticCurvePrivateKey, digest: bytes
) -> Bytes64:
    """
    Sign a SHA-256 digest, returning a compact low-S signature.

    Nonces are derived deterministically (RFC 6979). The S value is always
    folded into the lower half of the group order, so signatures produced
    here verify under the strictest malleability policy.

    Args:
        curve: Curve of the private key.
        private_key: Signing key.
        digest: 32-byte message digest.

    Returns:
        64-byte signature (r || s).
    """
    der_signature = private_key.sign(
        digest, ec.ECDSA(Prehashed(hashes.SHA256()), deterministic_signing=True)
    )

    r, s = decode_dss_signature(der_signature)
    if s > curve.half_order:
        s = curve.n - s

    return Bytes64(r.to_bytes(32, "big") + s.to_bytes(32, "big"))


def verify_raw(curve: CurveParams, public_key: bytes, digest: bytes, r: int, s: int) -> bool:
    """
    Check the ECDSA verification equation.

    Args:
        curve: Curve of the public key.
        public_key: 65-byte uncompressed point.
        digest: 32-byte message digest.
        r: Signature r component.
        s: Signature s component.

    Returns:
        True if (r, s) is a valid signature of the digest, False otherwise.

    Raises:
        InvalidPublicKeyError: If the point is not a valid public key.
    """
    try:
        key = ec.EllipticCurvePublicKey.from_encoded_point(curve.ec_curve(), public_key)
    except ValueError as e:
        raise InvalidPublicKeyError(f"Invalid public key: {e}") from e

    try:
        key.verify(encode_dss_signature(r, s), digest, ec.ECDSA(Prehashed(hashes.SHA256())))
        return True
    except InvalidSignature:
        return False
