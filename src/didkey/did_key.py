"""
did:key identifiers for P-256 and secp256k1 public keys.

Format::

    did:key:z<base58btc(varint(multicodec) || compressed_key)>

Examples::

    did:key:zDnae...   P-256      (prefix 80 24)
    did:key:zQ3s...    secp256k1  (prefix e7 01)

Parsing stops at the compressed key. Whether the key is actually a point
on the curve is decided later, when it is decompressed for verification.

References:
    - https://w3c-ccg.github.io/did-method-key/
"""

from __future__ import annotations

from typing import Final

from didkey.types import Bytes33, InvalidDIDSyntaxError, InvalidKeyLengthError, StrictBaseModel

from . import multikey
from .curves import COMPRESSED_KEY_LENGTH, UNCOMPRESSED_KEY_LENGTH, lookup_by_algorithm
from .point_codec import codec_for

__all__ = [
    "DID_KEY_PREFIX",
    "ParsedDIDKey",
    "format_did_key",
    "parse_did_key",
]

DID_KEY_PREFIX: Final = "did:key:"
"""Literal scheme and method prefix of every did:key."""


class ParsedDIDKey(StrictBaseModel):
    """The algorithm and key carried by a did:key."""

    jwt_algorithm: str
    """JWT algorithm name, ES256 or ES256K."""

    key_bytes: Bytes33
    """33-byte compressed public key."""


def parse_did_key(did: str) -> ParsedDIDKey:
    """
    Parse a did:key into its algorithm and compressed key.

    Args:
        did: The did:key string.

    Returns:
        The parsed algorithm and key bytes.

    Raises:
        InvalidDIDSyntaxError: If the string does not start with "did:key:".
        DecodingError: If the multibase part is malformed.
        UnsupportedKeyTypeError: If the multicodec prefix is unknown.
        InvalidKeyLengthError: If the key is not 33 bytes.
    """
    if not did.startswith(DID_KEY_PREFIX):
        raise InvalidDIDSyntaxError(did)

    prefixed = multikey.decode(did[len(DID_KEY_PREFIX) :])
    curve, key = multikey.split_prefix(prefixed)
    return ParsedDIDKey(jwt_algorithm=curve.jwt_algorithm, key_bytes=key)


def format_did_key(jwt_algorithm: str, key_bytes: bytes) -> str:
    """
    Format a public key as a did:key.

    Uncompressed keys are compressed first, so the result is the same
    whichever form the caller holds.

    Args:
        jwt_algorithm: "ES256" or "ES256K".
        key_bytes: 33-byte compressed or 65-byte uncompressed public key.

    Returns:
        The did:key string.

    Raises:
        UnsupportedAlgorithmError: If the algorithm is unknown.
        InvalidKeyLengthError: If the key is neither 33 nor 65 bytes.
        InvalidKeyFormatError: If a 65-byte key does not start with 0x04.
    """
    curve = lookup_by_algorithm(jwt_algorithm)

    if len(key_bytes) == UNCOMPRESSED_KEY_LENGTH:
        key_bytes = codec_for(curve).compress(key_bytes)
    elif len(key_bytes) != COMPRESSED_KEY_LENGTH:
        raise InvalidKeyLengthError(expected=COMPRESSED_KEY_LENGTH, actual=len(key_bytes))

    return DID_KEY_PREFIX + multikey.encode(curve, key_bytes)
