"""
did:key identifiers and ECDSA signature verification for P-256 and secp256k1.

Typical use::

    from didkey import P256Keypair, verify_signature

    keypair = P256Keypair.create()
    signature = keypair.sign(b"hello")
    assert verify_signature(keypair.did(), b"hello", signature)
"""

from .curves import CURVES, K256, P256, CurveId, CurveParams, lookup_by_algorithm, lookup_by_prefix
from .did_key import DID_KEY_PREFIX, ParsedDIDKey, format_did_key, parse_did_key
from .keypair import EllipticCurveKeypair, K256Keypair, P256Keypair
from .multibase import Base58, MultibaseEncoding, bytes_to_multibase, multibase_to_bytes
from .plugins import K256_PLUGIN, P256_PLUGIN, PLUGINS, DIDKeyPlugin, plugin_for
from .point_codec import K256_CODEC, P256_CODEC, PointCodec, codec_for
from .signatures import (
    K256_GUARD,
    P256_GUARD,
    CanonicalSignature,
    HighSPolicy,
    SignatureFormat,
    SignatureGuard,
    VerifyOptions,
    guard_for,
)
from .verifier import verify_signature, verify_signature_utf8

__all__ = [
    # Curves
    "CURVES",
    "P256",
    "K256",
    "CurveId",
    "CurveParams",
    "lookup_by_algorithm",
    "lookup_by_prefix",
    # Encodings
    "Base58",
    "MultibaseEncoding",
    "bytes_to_multibase",
    "multibase_to_bytes",
    "DID_KEY_PREFIX",
    "ParsedDIDKey",
    "format_did_key",
    "parse_did_key",
    # Points
    "PointCodec",
    "P256_CODEC",
    "K256_CODEC",
    "codec_for",
    # Signatures
    "CanonicalSignature",
    "HighSPolicy",
    "SignatureFormat",
    "SignatureGuard",
    "VerifyOptions",
    "P256_GUARD",
    "K256_GUARD",
    "guard_for",
    # Plugins and keypairs
    "DIDKeyPlugin",
    "PLUGINS",
    "P256_PLUGIN",
    "K256_PLUGIN",
    "plugin_for",
    "EllipticCurveKeypair",
    "P256Keypair",
    "K256Keypair",
    # Verification
    "verify_signature",
    "verify_signature_utf8",
]
