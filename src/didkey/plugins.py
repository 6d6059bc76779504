"""
Per-curve did:key plugins.

A plugin bundles everything curve-specific behind one interface: its
did:key prefix, its JWT algorithm, point compression, and signature
verification. The set is closed: P-256 and secp256k1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Protocol

from didkey.types import Bytes33, Bytes65, InvalidEllipticCurveDIDError, UnsupportedAlgorithmError

from . import multikey
from .curves import K256, P256, CurveParams
from .did_key import DID_KEY_PREFIX
from .point_codec import codec_for
from .signatures import VerifyOptions, guard_for

__all__ = [
    "DIDKeyPlugin",
    "EllipticCurvePlugin",
    "K256_PLUGIN",
    "P256_PLUGIN",
    "PLUGINS",
    "plugin_for",
    "verify_did_signature",
]

logger = logging.getLogger(__name__)


class DIDKeyPlugin(Protocol):
    """Curve-specific did:key operations."""

    @property
    def prefix(self) -> bytes:
        """Multicodec prefix of keys on this curve."""
        ...

    @property
    def jwt_algorithm(self) -> str:
        """JWT algorithm name of this curve."""
        ...

    def verify_signature(
        self,
        did: str,
        message: bytes,
        signature: bytes,
        options: VerifyOptions | None = None,
    ) -> bool:
        """Verify a signature made by the key a did:key names."""
        ...

    def compress(self, public_key: bytes) -> Bytes33:
        """Compress a 65-byte public key."""
        ...

    def decompress(self, public_key: bytes) -> Bytes65:
        """Decompress a 33-byte public key."""
        ...


def verify_did_signature(
    curve: CurveParams,
    did: str,
    message: bytes,
    signature: bytes,
    options: VerifyOptions | None = None,
) -> bool:
    """
    Verify a signature against a did:key that must belong to `curve`.

    Args:
        curve: Curve the did:key is required to use.
        did: The signer's did:key.
        message: The signed message.
        signature: The signature bytes.
        options: Malleability options.

    Returns:
        True if the signature is valid, otherwise False.

    Raises:
        InvalidEllipticCurveDIDError: If the did:key is for another curve
            or is not a did:key of a registered curve at all.
    """
    if not did.startswith(DID_KEY_PREFIX):
        raise InvalidEllipticCurveDIDError(did)

    prefixed = multikey.decode(did[len(DID_KEY_PREFIX) :])
    if not prefixed.startswith(curve.prefix):
        logger.debug("did:key does not carry the %s prefix", curve.jwt_algorithm)
        raise InvalidEllipticCurveDIDError(did)

    key = prefixed[len(curve.prefix) :]
    return guard_for(curve).verify(key, message, signature, options)


@dataclass(frozen=True, slots=True)
class EllipticCurvePlugin:
    """
    did:key plugin backed by a registered curve.

    Attributes:
        curve: Domain parameters of the curve.
    """

    curve: CurveParams

    @property
    def prefix(self) -> bytes:
        """Multicodec prefix of keys on this curve."""
        return self.curve.prefix

    @property
    def jwt_algorithm(self) -> str:
        """JWT algorithm name of this curve."""
        return self.curve.jwt_algorithm

    def verify_signature(
        self,
        did: str,
        message: bytes,
        signature: bytes,
        options: VerifyOptions | None = None,
    ) -> bool:
        """Verify a signature made by the key a did:key names."""
        return verify_did_signature(self.curve, did, message, signature, options)

    def compress(self, public_key: bytes) -> Bytes33:
        """Compress a 65-byte public key."""
        return codec_for(self.curve).compress(public_key)

    def decompress(self, public_key: bytes) -> Bytes65:
        """Decompress a 33-byte public key."""
        return codec_for(self.curve).decompress(public_key)


P256_PLUGIN: Final = EllipticCurvePlugin(P256)
"""did:key plugin for NIST P-256 ("ES256")."""

K256_PLUGIN: Final = EllipticCurvePlugin(K256)
"""did:key plugin for secp256k1 ("ES256K")."""

PLUGINS: Final[tuple[DIDKeyPlugin, ...]] = (P256_PLUGIN, K256_PLUGIN)
"""All registered plugins."""


def plugin_for(jwt_algorithm: str) -> DIDKeyPlugin:
    """
    Find the plugin for a JWT algorithm.

    Raises:
        UnsupportedAlgorithmError: If no plugin handles the algorithm.
    """
    for plugin in PLUGINS:
        if plugin.jwt_algorithm == jwt_algorithm:
            return plugin
    raise UnsupportedAlgorithmError(jwt_algorithm)
