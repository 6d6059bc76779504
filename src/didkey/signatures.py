"""
ECDSA signature format checks and verification.

SIGNATURE MALLEABILITY
----------------------
A single ECDSA signature has several byte strings that verify:

1. Alternate serialisations. The same (r, s) can be written as compact
   64-byte r || s or as variable-length ASN.1 DER. A verifier that accepts
   both accepts two "different" signatures for one signing event.

2. The mirrored S. If (r, s) verifies then so does (r, n - s). The low-S
   convention keeps only the member of the pair with s <= n/2.

Both are closed by default here:

- Non-compact input is an error (InvalidSignatureFormatError) unless
  malleable signatures are explicitly allowed.
- High-S input is governed by a HighSPolicy. REJECT fails such signatures;
  NORMALIZE mirrors S back to the low half and checks the result.

When malleable signatures are allowed, non-compact input is not an error
but still does not verify (only 64-byte r || s is ever parsed), and high-S
input is normalised.

VERIFICATION STEPS
------------------
1. digest = SHA-256(message)
2. decompress the public key (failure: InvalidPublicKeyError)
3. enforce the compact format if malleability is disallowed
4. parse r, s; out-of-range values verify as False
5. apply the high-S policy
6. delegate the verification equation to the engine
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Final

from didkey import config
from didkey.types import (
    Bytes64,
    DIDKeyError,
    InvalidPublicKeyError,
    InvalidSignatureFormatError,
    StrictBaseModel,
)

from . import engine
from .curves import K256, P256, CurveParams
from .point_codec import PointCodec, codec_for

__all__ = [
    "CanonicalSignature",
    "HighSPolicy",
    "SignatureFormat",
    "SignatureGuard",
    "VerifyOptions",
    "P256_GUARD",
    "K256_GUARD",
    "guard_for",
]

logger = logging.getLogger(__name__)

COMPACT_SIGNATURE_LENGTH: Final = 64
"""Compact signature: 32-byte r followed by 32-byte s."""


class SignatureFormat(Enum):
    """Serialisation of a signature as classified by its bytes."""

    COMPACT = auto()
    """Exactly 64 bytes of big-endian r || s."""

    NON_COMPACT = auto()
    """Anything else, including DER."""


class HighSPolicy(Enum):
    """How a signature with s > n/2 is treated when malleability is disallowed."""

    REJECT = "reject"
    """High-S input fails verification."""

    NORMALIZE = "normalize"
    """High-S input is mirrored to n - s and then verified."""


class VerifyOptions(StrictBaseModel):
    """Options for signature verification."""

    allow_malleable_signatures: bool = False
    """Accept non-compact encodings and high-S values without error."""

    high_s_policy: HighSPolicy | None = None
    """Per-call high-S policy. None falls back to the DIDKEY_HIGH_S_POLICY setting."""

    def resolved_high_s_policy(self) -> HighSPolicy:
        """The policy in effect for this call."""
        if self.high_s_policy is not None:
            return self.high_s_policy
        return HighSPolicy(config.HIGH_S_POLICY)


DEFAULT_OPTIONS: Final = VerifyOptions()
"""Strict verification: compact signatures only, high-S per configuration."""


@dataclass(frozen=True, slots=True)
class CanonicalSignature:
    """
    A compact signature split into its integer components.

    Attributes:
        r: The r component.
        s: The s component.
        is_low_s: Whether s is in the lower half of the group order.
    """

    r: int
    s: int
    is_low_s: bool

    def normalized(self, curve: CurveParams) -> CanonicalSignature:
        """Return the low-S member of the (r, s) / (r, n - s) pair."""
        if self.is_low_s:
            return self
        return CanonicalSignature(r=self.r, s=curve.n - self.s, is_low_s=True)

    def to_compact(self) -> Bytes64:
        """Serialise as 64-byte r || s."""
        return Bytes64(self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big"))


@dataclass(frozen=True, slots=True)
class SignatureGuard:
    """
    Signature checks and verification for one curve.

    Attributes:
        curve: Domain parameters of the curve.
    """

    curve: CurveParams

    @property
    def point_codec(self) -> PointCodec:
        """Codec used to decompress public keys."""
        return codec_for(self.curve)

    def classify(self, signature: bytes) -> SignatureFormat:
        """
        Classify a signature as compact or not.

        A signature is compact only when it is exactly 64 bytes and writing
        its parsed (r, s) back out reproduces the input byte-for-byte.
        """
        if len(signature) != COMPACT_SIGNATURE_LENGTH:
            return SignatureFormat.NON_COMPACT

        reserialized = self._split(signature).to_compact()
        if reserialized != bytes(signature):
            return SignatureFormat.NON_COMPACT
        return SignatureFormat.COMPACT

    def is_compact(self, signature: bytes) -> bool:
        """Whether the signature is in compact format."""
        return self.classify(signature) is SignatureFormat.COMPACT

    def canonicalize(self, signature: bytes) -> CanonicalSignature:
        """
        Split a compact signature into (r, s) and flag its S half.

        Args:
            signature: 64-byte r || s.

        Returns:
            The parsed signature.

        Raises:
            InvalidSignatureFormatError: If the signature is not 64 bytes.
        """
        if len(signature) != COMPACT_SIGNATURE_LENGTH:
            raise InvalidSignatureFormatError(
                f"Compact signature must be {COMPACT_SIGNATURE_LENGTH} bytes, got {len(signature)}"
            )
        return self._split(signature)

    def verify(
        self,
        public_key: bytes,
        message: bytes,
        signature: bytes,
        options: VerifyOptions | None = None,
    ) -> bool:
        """
        Verify a signature over a message.

        Args:
            public_key: 33-byte compressed public key.
            message: The signed message (hashed here with SHA-256).
            signature: The signature bytes.
            options: Malleability options. Defaults to strict.

        Returns:
            True if the signature is valid, False if it is well-formed but wrong.

        Raises:
            InvalidPublicKeyError: If the public key cannot be decompressed.
            InvalidSignatureFormatError: If the signature is not compact and
                malleable signatures are disallowed.
        """
        options = options or DEFAULT_OPTIONS
        digest = engine.sha256(message)

        try:
            uncompressed = self.point_codec.decompress(public_key)
        except DIDKeyError as e:
            raise InvalidPublicKeyError(f"Invalid public key: {e.message}") from e

        if not options.allow_malleable_signatures and not self.is_compact(signature):
            raise InvalidSignatureFormatError()

        if len(signature) != COMPACT_SIGNATURE_LENGTH:
            logger.debug("Rejecting %d-byte signature: only compact form verifies", len(signature))
            return False

        parsed = self._split(signature)
        if not (0 < parsed.r < self.curve.n and 0 < parsed.s < self.curve.n):
            logger.debug("Rejecting signature with r or s outside [1, n-1]")
            return False

        if not parsed.is_low_s:
            if (
                not options.allow_malleable_signatures
                and options.resolved_high_s_policy() is HighSPolicy.REJECT
            ):
                logger.debug("Rejecting high-S signature on %s", self.curve.curve_id.value)
                return False
            parsed = parsed.normalized(self.curve)

        return engine.verify_raw(self.curve, uncompressed, digest, parsed.r, parsed.s)

    def _split(self, signature: bytes) -> CanonicalSignature:
        """Parse 64 bytes into (r, s) without range checks."""
        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:64], "big")
        return CanonicalSignature(r=r, s=s, is_low_s=s <= self.curve.half_order)


P256_GUARD: Final = SignatureGuard(P256)
"""Signature guard for NIST P-256."""

K256_GUARD: Final = SignatureGuard(K256)
"""Signature guard for secp256k1."""

_GUARDS: Final = {guard.curve.curve_id: guard for guard in (P256_GUARD, K256_GUARD)}


def guard_for(curve: CurveParams) -> SignatureGuard:
    """Return the signature guard of a registered curve."""
    return _GUARDS[curve.curve_id]
