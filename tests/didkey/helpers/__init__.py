"""Shared test vectors and builders for did:key tests."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from didkey.curves import CurveParams


def b64decode_unpadded(text: str) -> bytes:
    """Decode standard base64 that may have had its padding stripped."""
    return base64.b64decode(text + "=" * (-len(text) % 4))


@dataclass(frozen=True)
class SignatureVector:
    """One signature conformance fixture."""

    algorithm: str
    did: str
    public_multibase_key: str
    base64_message: str
    base64_signature: str
    is_valid: bool
    tags: tuple[str, ...] = field(default=())

    @property
    def message(self) -> bytes:
        """Decoded message bytes."""
        return b64decode_unpadded(self.base64_message)

    @property
    def signature(self) -> bytes:
        """Decoded signature bytes."""
        return b64decode_unpadded(self.base64_signature)


P256_DID = "did:key:zDnaembgSGUhZULN2Caob4HLJPaxBh92N7rtH21TErzqf8HQo"
"""P-256 did:key used by the valid and high-S fixtures."""

P256_MULTIBASE_KEY = "zxdM8dSstjrpZaRUwBmDvjGXweKuEMVN95A9oJBFjkWMh"
"""Bare multibase key of P256_DID (no multicodec prefix)."""

P256_UNCOMPRESSED_HEX = (
    "043a8273eece6b0d82e95c3506617db5000e14ff0023325d0bb0274918bc6a6cdc"
    "d5d4c2b6cd48ca52c5650fb2d80047738c7b8627cd6a7035ad780f153669fad5"
)
"""Uncompressed form of the P256_DID key."""

K256_DID = "did:key:zQ3shqwJEJyMBsBXCWyCBpUBMqxcon9oHB7mCvx4sSpMdLJwc"
"""secp256k1 did:key used by the valid and high-S fixtures."""

K256_MULTIBASE_KEY = "z25z9DTpsiYYJKGsWmSPJK2NFN8PcJtZig12K59UgW7q5t"
"""Bare multibase key of K256_DID (no multicodec prefix)."""

K256_UNCOMPRESSED_HEX = (
    "04a7d7fbf04846fa1fcff728ba594f3c5819345e88908e874b537ba5a65d1fc3bb"
    "aa30396dcd3e1dfa4fbb6c04c2732cda43776b2ecd5a2f83a9b2a8d54c93c5ef"
)
"""Uncompressed form of the K256_DID key."""

MESSAGE_B64 = "oWVoZWxsb2V3b3JsZA"
"""CBOR map {"hello": "world"}."""

VALID_P256 = SignatureVector(
    algorithm="ES256",
    did=P256_DID,
    public_multibase_key=P256_MULTIBASE_KEY,
    base64_message=MESSAGE_B64,
    base64_signature=(
        "2vZNsG3UKvvO/CDlrdvyZRISOFylinBh0Jupc6KcWoJ"
        "WExHptCfduPleDbG3rko3YZnn9Lw0IjpixVmexJDegg"
    ),
    is_valid=True,
)

VALID_K256 = SignatureVector(
    algorithm="ES256K",
    did=K256_DID,
    public_multibase_key=K256_MULTIBASE_KEY,
    base64_message=MESSAGE_B64,
    base64_signature=(
        "5WpdIuEUUfVUYaozsi8G0B3cWO09cgZbIIwg1t2YKdU"
        "n/FEznOndsz/qgiYb89zwxYCbB71f7yQK5Lr7NasfoA"
    ),
    is_valid=True,
)

HIGH_S_P256 = SignatureVector(
    algorithm="ES256",
    did=P256_DID,
    public_multibase_key=P256_MULTIBASE_KEY,
    base64_message=MESSAGE_B64,
    base64_signature=(
        "2vZNsG3UKvvO/CDlrdvyZRISOFylinBh0Jupc6KcWoK"
        "p7O4VS9giSAah8k5IUbXIW00SuOrjfEqQ9HEkN9JGzw"
    ),
    is_valid=False,
    tags=("high-s",),
)

HIGH_S_K256 = SignatureVector(
    algorithm="ES256K",
    did=K256_DID,
    public_multibase_key=K256_MULTIBASE_KEY,
    base64_message=MESSAGE_B64,
    base64_signature=(
        "5WpdIuEUUfVUYaozsi8G0B3cWO09cgZbIIwg1t2YKdX"
        "YA67MYxYiTMAVfdnkDCMN9S5B3vHosRe07aORmoshoQ"
    ),
    is_valid=False,
    tags=("high-s",),
)

DER_P256 = SignatureVector(
    algorithm="ES256",
    did="did:key:zDnaeT6hL2RnTdUhAPLij1QBkhYZnmuKyM7puQLW1tkF4Zkt8",
    public_multibase_key="ze8N2PPxnu19hmBQ58t5P3E9Yj6CqakJmTVCaKvf9Byq2",
    base64_message=MESSAGE_B64,
    base64_signature=(
        "MEQCIFxYelWJ9lNcAVt+jK0y/T+DC/X4ohFZ+m8f9SEItkY"
        "1AiACX7eXz5sgtaRrz/SdPR8kprnbHMQVde0T2R8yOTBweA"
    ),
    is_valid=False,
    tags=("der-encoded",),
)

DER_K256 = SignatureVector(
    algorithm="ES256K",
    did="did:key:zQ3shnriYMXc8wvkbJqfNWh5GXn2bVAeqTC92YuNbek4npqGF",
    public_multibase_key="z22uZXWP8fdHXi4jyx8cCDiBf9qQTsAe6VcycoMQPfcMQX",
    base64_message=MESSAGE_B64,
    base64_signature=(
        "MEUCIQCWumUqJqOCqInXF7AzhIRg2MhwRz2rWZcOEsOjPmN"
        "ItgIgXJH7RnqfYY6M0eg33wU0sFYDlprwdOcpRn78Sz5ePgk"
    ),
    is_valid=False,
    tags=("der-encoded",),
)

SIGNATURE_VECTORS: tuple[SignatureVector, ...] = (
    VALID_P256,
    VALID_K256,
    HIGH_S_P256,
    HIGH_S_K256,
    DER_P256,
    DER_K256,
)
"""All signature fixtures."""


def uncompressed_public_key(curve: CurveParams, scalar: int) -> bytes:
    """Derive the 65-byte public key of a private scalar."""
    private_key = ec.derive_private_key(scalar, curve.ec_curve())
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )


def mirror_s(curve: CurveParams, signature: bytes) -> bytes:
    """Replace s with n - s in a compact signature."""
    r = signature[:32]
    s = int.from_bytes(signature[32:], "big")
    return r + (curve.n - s).to_bytes(32, "big")
