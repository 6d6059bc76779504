"""Exception hierarchy for did:key decoding, point encoding and signature checks."""

from __future__ import annotations


class DIDKeyError(Exception):
    """
    Base exception for all did:key errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class DecodingError(DIDKeyError):
    """Raised when a multibase string, base58 payload or varint is malformed."""


class UnsupportedMultibaseError(DecodingError):
    """
    Raised when a multibase string carries an unknown or disallowed sigil.

    Attributes:
        sigil: The leading character that named the base.
    """

    def __init__(self, sigil: str) -> None:
        self.sigil = sigil
        super().__init__(f"Unsupported multibase encoding: {sigil!r}")


class UnsupportedKeyTypeError(DIDKeyError):
    """
    Raised when a multicodec prefix matches no registered curve.

    Attributes:
        prefix: The prefix bytes that were read.
    """

    def __init__(self, prefix: bytes) -> None:
        self.prefix = prefix
        super().__init__(f"Unsupported key type with multicodec prefix 0x{prefix.hex()}")


class UnsupportedAlgorithmError(DIDKeyError):
    """
    Raised when a JWT algorithm name matches no registered curve.

    Attributes:
        algorithm: The algorithm name that was requested.
    """

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Unsupported signature algorithm: {algorithm}")


class InvalidKeyLengthError(DIDKeyError):
    """
    Raised when key bytes have the wrong length for their encoding.

    Attributes:
        expected: The required length in bytes.
        actual: The length that was received.
    """

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid key length: expected {expected} bytes, got {actual}")


class InvalidKeyFormatError(DIDKeyError):
    """Raised when a SEC1 point has an unexpected leading byte."""


class KeyDecodingFailedError(DIDKeyError):
    """Raised when a compressed point does not decode to a point on the curve."""


class InvalidPublicKeyError(DIDKeyError):
    """Raised when a public key cannot be used for verification."""

    def __init__(self, message: str = "Invalid public key") -> None:
        super().__init__(message)


class InvalidSignatureFormatError(DIDKeyError):
    """Raised when a signature is not in compact form and malleable signatures are disallowed."""

    def __init__(self, message: str = "Signature is not in compact format") -> None:
        super().__init__(message)


class MismatchedAlgorithmError(DIDKeyError):
    """
    Raised when a did:key resolves to a different algorithm than the caller expected.

    Attributes:
        expected: The algorithm the caller asked for.
        actual: The algorithm encoded in the did:key.
    """

    def __init__(self, *, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected key algorithm {expected}, got {actual}")


class InvalidDIDSyntaxError(DIDKeyError):
    """
    Raised when a string is not a did:key identifier.

    Attributes:
        did: The offending string.
    """

    def __init__(self, did: str) -> None:
        self.did = did
        super().__init__(f"Incorrect prefix for did:key: {did}")


class InvalidEllipticCurveDIDError(DIDKeyError):
    """
    Raised when a did:key is handed to the plugin of a different curve.

    Attributes:
        did: The offending did:key.
    """

    def __init__(self, did: str) -> None:
        self.did = did
        super().__init__(f"Not a valid did:key for this curve: {did}")


class InvalidEncodingError(DIDKeyError):
    """Raised when textual input (UTF-8 data, base64url signature) cannot be decoded."""


class PrivateKeyNotExportableError(DIDKeyError):
    """Raised when exporting a keypair that was created as non-exportable."""

    def __init__(self) -> None:
        super().__init__("Private key is not exportable")
