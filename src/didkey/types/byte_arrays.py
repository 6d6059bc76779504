"""
Fixed-length byte types.

Every key, digest and signature in this package has a length fixed by its
curve encoding. These types make that length part of the value:

- Bytes32: SHA-256 digests, private scalars, field coordinates.
- Bytes33: SEC1 compressed points (prefix byte + x).
- Bytes64: compact ECDSA signatures (r || s).
- Bytes65: SEC1 uncompressed points (0x04 + x + y).
"""

from __future__ import annotations

from typing import Any, ClassVar, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a variety of inputs to raw bytes.

    Accepts:
      - `bytes` / `bytearray` / `memoryview` (returned as immutable `bytes`)
      - Hex strings, with or without a '0x' prefix (e.g. "0xdeadbeef" or "deadbeef")

    Raises:
      ValueError if a string is not hex, TypeError for any other input type.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        # bytes.fromhex handles empty string and validates hex characters
        return bytes.fromhex(value.removeprefix("0x"))
    raise TypeError(f"Cannot convert {type(value).__name__} to bytes")


class BaseBytes(bytes):
    """
    A base class for fixed-length byte types that inherits from `bytes`.

    Subclasses set:
      - `LENGTH`: exact number of bytes the instance must contain.

    Instances are immutable byte objects with strict length checking.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new Bytes instance.

        Args:
            value: Any value coercible to bytes (see `_coerce_to_bytes`).

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = _coerce_to_bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    @classmethod
    def from_int(cls, value: int) -> Self:
        """
        Encode a non-negative integer big-endian, zero-padded to `LENGTH`.

        Raises:
            OverflowError: If the integer does not fit in `LENGTH` bytes.
        """
        return cls(value.to_bytes(cls.LENGTH, "big"))

    def to_int(self) -> int:
        """Interpret the bytes as a big-endian unsigned integer."""
        return int.from_bytes(self, "big")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        1. If the input is already an instance of the class, accept it.
        2. Otherwise, validate the input has exactly LENGTH bytes and instantiate the class.
        3. For serialization (e.g., to JSON), convert to hex string.
        """
        from_bytes_validator = core_schema.no_info_plain_validator_function(cls)

        python_schema = core_schema.chain_schema(
            [
                core_schema.bytes_schema(min_length=cls.LENGTH, max_length=cls.LENGTH),
                from_bytes_validator,
            ]
        )

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                python_schema,
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.hex()),
        )

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        tname = type(self).__name__
        return f"{tname}({self.hex()})"

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)


class Bytes32(BaseBytes):
    """Fixed-size byte array of exactly 32 bytes."""

    LENGTH = 32


class Bytes33(BaseBytes):
    """Fixed-size byte array of exactly 33 bytes (compressed point)."""

    LENGTH = 33


class Bytes64(BaseBytes):
    """Fixed-size byte array of exactly 64 bytes (compact signature)."""

    LENGTH = 64


class Bytes65(BaseBytes):
    """Fixed-size byte array of exactly 65 bytes (uncompressed point)."""

    LENGTH = 65
