"""Textual principal identifiers used for ledgers, archives and account owners."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Self
import zlib

MAX_PRINCIPAL_BYTES = 29
_CHECKSUM_BYTES = 4
_GROUP_SIZE = 5


class PrincipalError(ValueError):
    """Raised when text cannot be parsed as a principal."""


@dataclass(frozen=True, slots=True)
class Principal:
    """An opaque identifier with a checksummed base32 text form.

    The text form is ``crc32(raw) || raw`` encoded as lowercase base32 without
    padding, split into dash-separated groups of five characters. Parsing
    accepts any letter case.
    """

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) > MAX_PRINCIPAL_BYTES:
            raise PrincipalError(
                f"Principal is {len(self.raw)} bytes, "
                f"at most {MAX_PRINCIPAL_BYTES} allowed"
            )

    @classmethod
    def from_text(cls, text: str) -> Self:
        compact = text.replace("-", "").upper()
        padding = "=" * (-len(compact) % 8)
        try:
            decoded = base64.b32decode(compact + padding)
        except ValueError as e:
            raise PrincipalError(f"Cannot parse principal from {text!r}: {e}") from e

        if len(decoded) < _CHECKSUM_BYTES:
            raise PrincipalError(f"Cannot parse principal from {text!r}: too short")

        checksum, raw = decoded[:_CHECKSUM_BYTES], decoded[_CHECKSUM_BYTES:]
        if int.from_bytes(checksum, "big") != zlib.crc32(raw):
            raise PrincipalError(f"Cannot parse principal from {text!r}: bad checksum")

        principal = cls(raw)
        if principal.to_text() != text.lower():
            raise PrincipalError(
                f"Cannot parse principal from {text!r}: "
                f"not in canonical form (expected {principal.to_text()!r})"
            )
        return principal

    def to_text(self) -> str:
        checksum = zlib.crc32(self.raw).to_bytes(_CHECKSUM_BYTES, "big")
        encoded = base64.b32encode(checksum + self.raw).decode("ascii")
        encoded = encoded.rstrip("=").lower()
        return "-".join(
            encoded[i : i + _GROUP_SIZE] for i in range(0, len(encoded), _GROUP_SIZE)
        )

    def __str__(self) -> str:
        return self.to_text()
