"""
Verify signatures against a did:key.

This is the entry point most callers need: give it the signer's did:key,
the message and the signature, and it resolves the curve from the did:key
and runs that curve's checks.
"""

from __future__ import annotations

import logging

from didkey.types import DecodingError, InvalidEncodingError, MismatchedAlgorithmError

from .did_key import parse_did_key
from .multibase import decode_base64
from .plugins import plugin_for
from .signatures import VerifyOptions

__all__ = [
    "verify_signature",
    "verify_signature_utf8",
]

logger = logging.getLogger(__name__)


def verify_signature(
    did_key: str,
    data: bytes,
    signature: bytes,
    options: VerifyOptions | None = None,
    jwt_algorithm: str | None = None,
) -> bool:
    """
    Verify a signature using the public key embedded in a did:key.

    Args:
        did_key: The signer's did:key.
        data: The original message that was signed.
        signature: The signature bytes.
        options: Malleability options. Defaults to strict.
        jwt_algorithm: Algorithm the caller expects the key to use, if any.

    Returns:
        True if the signature is valid, False if it is well-formed but wrong.

    Raises:
        InvalidDIDSyntaxError: If `did_key` is not a did:key.
        UnsupportedKeyTypeError: If the key type is not supported.
        MismatchedAlgorithmError: If `jwt_algorithm` differs from the key's.
        InvalidPublicKeyError: If the embedded key is not a curve point.
        InvalidSignatureFormatError: If the signature is not compact and
            malleable signatures are disallowed.
    """
    parsed = parse_did_key(did_key)

    if jwt_algorithm is not None and jwt_algorithm != parsed.jwt_algorithm:
        raise MismatchedAlgorithmError(expected=jwt_algorithm, actual=parsed.jwt_algorithm)

    plugin = plugin_for(parsed.jwt_algorithm)
    valid = plugin.verify_signature(did_key, data, signature, options)

    logger.debug("%s signature from %s valid: %s", parsed.jwt_algorithm, did_key[:24], valid)
    return valid


def verify_signature_utf8(
    did_key: str,
    data: str,
    signature: str,
    options: VerifyOptions | None = None,
) -> bool:
    """
    Verify a signature given as text.

    Args:
        did_key: The signer's did:key.
        data: The original message as a string, signed as its UTF-8 bytes.
        signature: Base64url signature, with or without padding.
        options: Malleability options. Defaults to strict.

    Returns:
        True if the signature is valid, otherwise False.

    Raises:
        InvalidEncodingError: If the data is not encodable as UTF-8 or the
            signature is not base64url.
    """
    try:
        data_bytes = data.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidEncodingError("Invalid UTF-8 string") from e

    try:
        signature_bytes = decode_base64(signature, urlsafe=True)
    except DecodingError as e:
        raise InvalidEncodingError("Invalid Base64URL signature") from e

    return verify_signature(did_key, data_bytes, signature_bytes, options)
