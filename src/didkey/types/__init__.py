"""Reusable type definitions for the did:key package."""

from .base import StrictBaseModel
from .byte_arrays import BaseBytes, Bytes32, Bytes33, Bytes64, Bytes65
from .exceptions import (
    DecodingError,
    DIDKeyError,
    InvalidDIDSyntaxError,
    InvalidEllipticCurveDIDError,
    InvalidEncodingError,
    InvalidKeyFormatError,
    InvalidKeyLengthError,
    InvalidPublicKeyError,
    InvalidSignatureFormatError,
    KeyDecodingFailedError,
    MismatchedAlgorithmError,
    PrivateKeyNotExportableError,
    UnsupportedAlgorithmError,
    UnsupportedKeyTypeError,
    UnsupportedMultibaseError,
)

__all__ = [
    # Core types
    "BaseBytes",
    "Bytes32",
    "Bytes33",
    "Bytes64",
    "Bytes65",
    "StrictBaseModel",
    # Exceptions
    "DIDKeyError",
    "DecodingError",
    "UnsupportedMultibaseError",
    "UnsupportedKeyTypeError",
    "UnsupportedAlgorithmError",
    "InvalidKeyLengthError",
    "InvalidKeyFormatError",
    "KeyDecodingFailedError",
    "InvalidPublicKeyError",
    "InvalidSignatureFormatError",
    "MismatchedAlgorithmError",
    "InvalidDIDSyntaxError",
    "InvalidEllipticCurveDIDError",
    "InvalidEncodingError",
    "PrivateKeyNotExportableError",
]
