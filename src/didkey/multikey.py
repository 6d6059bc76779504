"""
Multikey encoding: a public key tagged with its multicodec type.

Wire format::

    multikey  = varint(multicodec) || compressed_key (33 bytes)
    multibase = "z" || base58btc(multikey)

The prefix is matched byte-for-byte against the registered curves. A key
whose prefix is an alternative (non-minimal) varint spelling of a known
code is not that key type.
"""

from __future__ import annotations

from didkey.types import Bytes33, DecodingError, InvalidKeyLengthError, UnsupportedMultibaseError

from .curves import COMPRESSED_KEY_LENGTH, CurveParams, lookup_by_prefix
from .multibase import Base58, MultibaseEncoding
from .varint import decode_varint, encode_varint

__all__ = [
    "decode",
    "encode",
    "split_prefix",
]


def decode(multibase: str) -> bytes:
    """
    Decode a base58btc multibase string to raw multikey bytes.

    Args:
        multibase: String starting with 'z'.

    Returns:
        Prefixed key bytes.

    Raises:
        UnsupportedMultibaseError: If the sigil is not 'z'.
        DecodingError: If the string is empty or not valid base58.
    """
    if not multibase:
        raise DecodingError("Empty multibase string")
    if multibase[0] != MultibaseEncoding.BASE58BTC.sigil:
        raise UnsupportedMultibaseError(multibase[0])
    return Base58.decode(multibase[1:])


def split_prefix(multikey: bytes) -> tuple[CurveParams, Bytes33]:
    """
    Separate the multicodec prefix from the key bytes.

    Args:
        multikey: Output of `decode`.

    Returns:
        Tuple of (curve, compressed key).

    Raises:
        DecodingError: If the varint is truncated or malformed.
        UnsupportedKeyTypeError: If the prefix matches no registered curve.
        InvalidKeyLengthError: If the remaining bytes are not a 33-byte key.
    """
    code, consumed = decode_varint(multikey)

    # Match the canonical spelling of the code, then confirm the input used it.
    prefix = encode_varint(code)
    if prefix != multikey[:consumed]:
        raise DecodingError("Multicodec prefix is not minimally encoded")
    curve = lookup_by_prefix(prefix)

    key = multikey[consumed:]
    if len(key) != COMPRESSED_KEY_LENGTH:
        raise InvalidKeyLengthError(expected=COMPRESSED_KEY_LENGTH, actual=len(key))

    return curve, Bytes33(key)


def encode(curve: CurveParams, compressed_key: bytes) -> str:
    """
    Encode a compressed key as a base58btc multibase multikey.

    Args:
        curve: Curve the key belongs to.
        compressed_key: 33-byte compressed SEC1 point.

    Returns:
        Multibase string starting with 'z'.

    Raises:
        InvalidKeyLengthError: If the key is not 33 bytes.
    """
    if len(compressed_key) != COMPRESSED_KEY_LENGTH:
        raise InvalidKeyLengthError(expected=COMPRESSED_KEY_LENGTH, actual=len(compressed_key))
    return MultibaseEncoding.BASE58BTC.sigil + Base58.encode(curve.prefix + bytes(compressed_key))
