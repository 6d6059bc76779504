"""Tests for did:key parsing and formatting."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from didkey.did_key import DID_KEY_PREFIX, ParsedDIDKey, format_did_key, parse_did_key
from didkey.types import (
    Bytes33,
    DecodingError,
    InvalidDIDSyntaxError,
    InvalidKeyFormatError,
    InvalidKeyLengthError,
    UnsupportedAlgorithmError,
    UnsupportedKeyTypeError,
    UnsupportedMultibaseError,
)
from tests.didkey.helpers import (
    DER_K256,
    DER_P256,
    K256_DID,
    K256_UNCOMPRESSED_HEX,
    P256_DID,
    P256_UNCOMPRESSED_HEX,
)

P256_KEY = bytes.fromhex("033a8273eece6b0d82e95c3506617db5000e14ff0023325d0bb0274918bc6a6cdc")
K256_KEY = bytes.fromhex("03a7d7fbf04846fa1fcff728ba594f3c5819345e88908e874b537ba5a65d1fc3bb")


class TestParse:
    """Tests for parse_did_key."""

    def test_p256(self) -> None:
        """A zDnae... identifier is an ES256 key."""
        assert parse_did_key(P256_DID) == ParsedDIDKey(jwt_algorithm="ES256", key_bytes=P256_KEY)

    def test_k256(self) -> None:
        """A zQ3s... identifier is an ES256K key."""
        assert parse_did_key(K256_DID) == ParsedDIDKey(jwt_algorithm="ES256K", key_bytes=K256_KEY)

    @pytest.mark.parametrize(
        ("did", "algorithm"), [(DER_P256.did, "ES256"), (DER_K256.did, "ES256K")]
    )
    def test_other_fixtures(self, did: str, algorithm: str) -> None:
        """Every fixture did:key parses."""
        assert parse_did_key(did).jwt_algorithm == algorithm

    @pytest.mark.parametrize(
        "did",
        ["", "did:web:example.com", "DID:KEY:zDnae", "did:key", P256_DID.removeprefix("did:key:")],
    )
    def test_wrong_scheme(self, did: str) -> None:
        """Anything not starting with did:key: is a syntax error."""
        with pytest.raises(InvalidDIDSyntaxError, match="Incorrect prefix"):
            parse_did_key(did)

    def test_empty_method_specific_id(self) -> None:
        """did:key: alone carries no multibase string."""
        with pytest.raises(DecodingError):
            parse_did_key(DID_KEY_PREFIX)

    def test_non_base58_multibase(self) -> None:
        """did:key only allows the z sigil."""
        with pytest.raises(UnsupportedMultibaseError):
            parse_did_key("did:key:f8024" + P256_KEY.hex())

    def test_invalid_base58(self) -> None:
        """Characters outside the alphabet fail decoding."""
        with pytest.raises(DecodingError):
            parse_did_key("did:key:zDnae0OIl")

    def test_ed25519_unsupported(self) -> None:
        """Ed25519 did:keys are not handled here."""
        did = "did:key:z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK"
        with pytest.raises(UnsupportedKeyTypeError):
            parse_did_key(did)


class TestParsedDIDKey:
    """Tests for the parsed did:key record."""

    def test_key_is_typed(self) -> None:
        """Raw key bytes are validated into a 33-byte value."""
        parsed = ParsedDIDKey(jwt_algorithm="ES256", key_bytes=P256_KEY)
        assert isinstance(parsed.key_bytes, Bytes33)
        assert isinstance(parse_did_key(P256_DID).key_bytes, Bytes33)

    @pytest.mark.parametrize("length", [32, 34, 65])
    def test_key_length_enforced(self, length: int) -> None:
        """Keys of any other length are refused."""
        with pytest.raises(ValidationError):
            ParsedDIDKey(jwt_algorithm="ES256", key_bytes=b"\x02" * length)

    def test_dump_hex(self) -> None:
        """The key serialises as hex."""
        dumped = parse_did_key(K256_DID).model_dump()
        assert dumped == {"jwt_algorithm": "ES256K", "key_bytes": K256_KEY.hex()}

    def test_frozen(self) -> None:
        """Parsed records are immutable."""
        parsed = parse_did_key(P256_DID)
        with pytest.raises(ValidationError):
            parsed.jwt_algorithm = "ES256K"  # type: ignore[misc]


class TestFormat:
    """Tests for format_did_key."""

    @pytest.mark.parametrize(
        ("algorithm", "key", "did"), [("ES256", P256_KEY, P256_DID), ("ES256K", K256_KEY, K256_DID)]
    )
    def test_compressed(self, algorithm: str, key: bytes, did: str) -> None:
        """Compressed keys format to the fixture identifiers."""
        assert format_did_key(algorithm, key) == did

    @pytest.mark.parametrize(
        ("algorithm", "key_hex", "did"),
        [("ES256", P256_UNCOMPRESSED_HEX, P256_DID), ("ES256K", K256_UNCOMPRESSED_HEX, K256_DID)],
    )
    def test_uncompressed(self, algorithm: str, key_hex: str, did: str) -> None:
        """Uncompressed keys are compressed first."""
        assert format_did_key(algorithm, bytes.fromhex(key_hex)) == did

    def test_round_trip(self) -> None:
        """Parsing a formatted did:key restores algorithm and key."""
        parsed = parse_did_key(format_did_key("ES256K", K256_KEY))
        assert (parsed.jwt_algorithm, parsed.key_bytes) == ("ES256K", K256_KEY)

    def test_unknown_algorithm(self) -> None:
        """Only ES256 and ES256K format."""
        with pytest.raises(UnsupportedAlgorithmError):
            format_did_key("EdDSA", P256_KEY)

    @pytest.mark.parametrize("length", [0, 32, 64, 66])
    def test_wrong_length(self, length: int) -> None:
        """Keys of neither SEC1 size are rejected."""
        with pytest.raises(InvalidKeyLengthError):
            format_did_key("ES256", b"\x02" * length)

    def test_uncompressed_wrong_tag(self) -> None:
        """A 65-byte key must start with 0x04."""
        with pytest.raises(InvalidKeyFormatError):
            format_did_key("ES256", b"\x03" + bytes.fromhex(P256_UNCOMPRESSED_HEX)[1:])
