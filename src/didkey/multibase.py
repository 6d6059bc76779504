"""
Multibase text encodings.

A multibase string is a payload in some text encoding preceded by a single
character (the sigil) naming that encoding::

    z3mJr7AoUXx2Wqd    base58btc
    f68656c6c6f        base16 (lowercase)
    uaGVsbG8           base64url, no padding

did:key only ever uses base58btc ('z'). The other encodings exist so that
public keys can be rendered for display and transport in the forms callers
commonly ask for.

References:
    - https://github.com/multiformats/multibase
    - https://datatracker.ietf.org/doc/html/draft-multiformats-multibase
"""

from __future__ import annotations

import base64
import binascii
from enum import Enum
from typing import Final

from didkey.types import DecodingError, UnsupportedMultibaseError

__all__ = [
    "Base58",
    "MultibaseEncoding",
    "bytes_to_multibase",
    "decode_base64",
    "multibase_to_bytes",
]


class Base58:
    """
    Base58 encoding/decoding (Bitcoin-style alphabet).

    Base58 excludes visually ambiguous characters (0, O, I, l) making it
    suitable for human-readable identifiers like did:key.

    The alphabet is: 123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz
    """

    ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
    """Base58 alphabet (Bitcoin style, excludes 0, O, I, l)."""

    @classmethod
    def encode(cls, data: bytes) -> str:
        """
        Encode bytes as Base58 string.

        Leading zero bytes become leading '1' characters.

        Args:
            data: Bytes to encode.

        Returns:
            Base58-encoded string.
        """
        leading_zeros = len(data) - len(data.lstrip(b"\x00"))

        num = int.from_bytes(data, "big")
        result: list[str] = []

        while num > 0:
            num, remainder = divmod(num, 58)
            result.append(cls.ALPHABET[remainder])

        result.extend([cls.ALPHABET[0]] * leading_zeros)
        return "".join(reversed(result))

    @classmethod
    def decode(cls, s: str) -> bytes:
        """
        Decode Base58 string to bytes.

        Leading '1' characters become leading zero bytes.

        Args:
            s: Base58-encoded string.

        Returns:
            Decoded bytes.

        Raises:
            DecodingError: If string contains characters outside the alphabet.
        """
        leading_ones = len(s) - len(s.lstrip(cls.ALPHABET[0]))

        num = 0
        for char in s:
            index = cls.ALPHABET.find(char)
            if index < 0:
                raise DecodingError(f"Invalid Base58 character: {char!r}")
            num = num * 58 + index

        if num == 0:
            result = b""
        else:
            result = num.to_bytes((num.bit_length() + 7) // 8, "big")

        return b"\x00" * leading_ones + result


class MultibaseEncoding(Enum):
    """Supported multibase encodings, valued by their sigil."""

    BASE58BTC = "z"
    """Bitcoin base58. The only encoding permitted inside did:key."""

    BASE16 = "f"
    """Lowercase hexadecimal."""

    BASE64 = "m"
    """RFC 4648 base64, no padding."""

    BASE64PAD = "M"
    """RFC 4648 base64 with padding."""

    BASE64URL = "u"
    """RFC 4648 URL-safe base64, no padding."""

    BASE64URLPAD = "U"
    """RFC 4648 URL-safe base64 with padding."""

    @property
    def sigil(self) -> str:
        """The leading character that names this encoding."""
        return self.value


def decode_base64(payload: str, *, urlsafe: bool, padded: bool | None = None) -> bytes:
    """
    Strictly decode RFC 4648 base64.

    Args:
        payload: Encoded text.
        urlsafe: Use the '-_' alphabet instead of '+/'.
        padded: True requires padding, False forbids it, None accepts either.

    Returns:
        The decoded bytes.

    Raises:
        DecodingError: If the payload uses the other alphabet, has the wrong
            padding, or is not base64 at all.
    """
    unpadded = payload.rstrip("=")
    padding = len(payload) - len(unpadded)
    expected_padding = -len(unpadded) % 4

    if padded is False and padding:
        raise DecodingError("Unexpected base64 padding")
    if padded is True and padding != expected_padding:
        raise DecodingError("Missing or malformed base64 padding")
    if padding and padding != expected_padding:
        raise DecodingError("Malformed base64 padding")

    # b64decode maps altchars onto '+/' and then accepts both alphabets.
    foreign = "+/" if urlsafe else "-_"
    if any(char in foreign for char in unpadded):
        alphabet = "base64url" if urlsafe else "base64"
        raise DecodingError(f"Character outside the {alphabet} alphabet")

    altchars = b"-_" if urlsafe else None
    try:
        return base64.b64decode(unpadded + "=" * expected_padding, altchars=altchars, validate=True)
    except binascii.Error as e:
        raise DecodingError(f"Invalid base64 payload: {e}") from e


def bytes_to_multibase(data: bytes, encoding: MultibaseEncoding) -> str:
    """
    Encode bytes as a multibase string.

    Args:
        data: Raw bytes to encode.
        encoding: Target encoding.

    Returns:
        The sigil followed by the encoded payload.
    """
    match encoding:
        case MultibaseEncoding.BASE58BTC:
            payload = Base58.encode(data)
        case MultibaseEncoding.BASE16:
            payload = data.hex()
        case MultibaseEncoding.BASE64:
            payload = base64.b64encode(data).decode("ascii").rstrip("=")
        case MultibaseEncoding.BASE64PAD:
            payload = base64.b64encode(data).decode("ascii")
        case MultibaseEncoding.BASE64URL:
            payload = base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
        case MultibaseEncoding.BASE64URLPAD:
            payload = base64.urlsafe_b64encode(data).decode("ascii")
    return encoding.sigil + payload


def multibase_to_bytes(text: str) -> bytes:
    """
    Decode a multibase string of any supported encoding.

    Args:
        text: Sigil followed by payload.

    Returns:
        The decoded bytes.

    Raises:
        DecodingError: If the string is empty or the payload is malformed.
        UnsupportedMultibaseError: If the sigil names no supported encoding.
    """
    if not text:
        raise DecodingError("Empty multibase string")

    sigil, payload = text[0], text[1:]
    try:
        encoding = MultibaseEncoding(sigil)
    except ValueError as e:
        raise UnsupportedMultibaseError(sigil) from e

    match encoding:
        case MultibaseEncoding.BASE58BTC:
            return Base58.decode(payload)
        case MultibaseEncoding.BASE16:
            try:
                return bytes.fromhex(payload)
            except ValueError as e:
                raise DecodingError(f"Invalid base16 payload: {e}") from e
        case MultibaseEncoding.BASE64:
            return decode_base64(payload, urlsafe=False, padded=False)
        case MultibaseEncoding.BASE64PAD:
            return decode_base64(payload, urlsafe=False, padded=True)
        case MultibaseEncoding.BASE64URL:
            return decode_base64(payload, urlsafe=True, padded=False)
        case MultibaseEncoding.BASE64URLPAD:
            return decode_base64(payload, urlsafe=True, padded=True)
