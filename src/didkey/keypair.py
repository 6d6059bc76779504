"""
Signing keypairs for P-256 and secp256k1.

A keypair signs SHA-256 digests of messages and names itself with a
did:key. Signatures are always compact (r || s) and low-S, so anything a
keypair signs verifies under the default, strict verification options.

The private scalar can be exported only if the keypair was created or
imported as exportable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from typing_extensions import Self

from didkey.types import Bytes32, Bytes33, Bytes64, PrivateKeyNotExportableError

from . import engine
from .curves import K256, P256, CurveParams
from .did_key import format_did_key
from .multibase import MultibaseEncoding, bytes_to_multibase

__all__ = [
    "EllipticCurveKeypair",
    "K256Keypair",
    "P256Keypair",
]


@dataclass(frozen=True, slots=True)
class EllipticCurveKeypair:
    """
    ECDSA keypair on a registered curve.

    Subclasses set:
      - `CURVE`: the curve the keypair lives on.

    Attributes:
        private_key: The private key.
        exportable: Whether `export` may return the private scalar.
    """

    CURVE: ClassVar[CurveParams]
    """Curve of the keypair (overridden by subclasses)."""

    private_key: ec.EllipticCurvePrivateKey = field(repr=False)
    exportable: bool = False

    @classmethod
    def create(cls, exportable: bool = False) -> Self:
        """
        Generate a new random keypair.

        Args:
            exportable: Whether the private key may be exported later.

        Returns:
            A fresh keypair.
        """
        return cls(private_key=engine.generate_private_key(cls.CURVE), exportable=exportable)

    @classmethod
    def import_key(cls, private_key: bytes | str, exportable: bool = False) -> Self:
        """
        Load a keypair from an existing private scalar.

        Args:
            private_key: 32-byte scalar, or its hex encoding.
            exportable: Whether the private key may be exported later.

        Returns:
            The keypair.

        Raises:
            ValueError: If the key is not a valid 32-byte scalar for the curve.
        """
        scalar = Bytes32(private_key)
        return cls(
            private_key=engine.derive_private_key(cls.CURVE, scalar),
            exportable=exportable,
        )

    @property
    def jwt_algorithm(self) -> str:
        """JWT algorithm name of this keypair."""
        return self.CURVE.jwt_algorithm

    def public_key_bytes(self) -> Bytes33:
        """
        Return the compressed public key (33 bytes).

        Returns:
            0x02 or 0x03 followed by the 32-byte x coordinate.
        """
        return Bytes33(
            self.private_key.public_key().public_bytes(
                encoding=serialization.Encoding.X962,
                format=serialization.PublicFormat.CompressedPoint,
            )
        )

    def public_key_string(
        self, encoding: MultibaseEncoding = MultibaseEncoding.BASE64URLPAD
    ) -> str:
        """Return the compressed public key as a multibase string."""
        return bytes_to_multibase(self.public_key_bytes(), encoding)

    def did(self) -> str:
        """Return the did:key naming this keypair's public key."""
        return format_did_key(self.jwt_algorithm, self.public_key_bytes())

    def sign(self, message: bytes) -> Bytes64:
        """
        Sign a message with ECDSA-SHA256.

        Args:
            message: Data to sign.

        Returns:
            64-byte compact low-S signature.
        """
        digest = engine.sha256(message)
        return engine.sign_digest(self.CURVE, self.private_key, digest)

    async def sign_async(self, message: bytes) -> Bytes64:
        """Awaitable form of `sign` with identical results."""
        return self.sign(message)

    def export(self) -> Bytes32:
        """
        Return the raw 32-byte private scalar.

        Raises:
            PrivateKeyNotExportableError: If the keypair is not exportable.
        """
        if not self.exportable:
            raise PrivateKeyNotExportableError()
        return Bytes32.from_int(self.private_key.private_numbers().private_value)


@dataclass(frozen=True, slots=True)
class P256Keypair(EllipticCurveKeypair):
    """NIST P-256 keypair ("ES256")."""

    CURVE: ClassVar[CurveParams] = P256


@dataclass(frozen=True, slots=True)
class K256Keypair(EllipticCurveKeypair):
    """secp256k1 keypair ("ES256K")."""

    CURVE: ClassVar[CurveParams] = K256
