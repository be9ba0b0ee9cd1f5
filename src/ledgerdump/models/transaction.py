"""Canonical ledger transaction types.

Every record fetched from the ledger is converted into exactly one of
``Burn``, ``Mint`` or ``Transfer`` before it is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

SUBACCOUNT_LENGTH = 32

_DEFAULT_SUBACCOUNT = bytes(SUBACCOUNT_LENGTH)


@dataclass(frozen=True, slots=True, eq=False)
class Account:
    """A ledger holder: owner principal text plus optional 32-byte subaccount."""

    owner: str
    subaccount: bytes | None = None

    def __post_init__(self) -> None:
        if self.subaccount is not None and len(self.subaccount) != SUBACCOUNT_LENGTH:
            raise ValueError(
                f"Subaccount must be {SUBACCOUNT_LENGTH} bytes, "
                f"got {len(self.subaccount)}"
            )

    @property
    def effective_subaccount(self) -> bytes:
        # An absent subaccount is the default (all-zero) one.
        return self.subaccount if self.subaccount is not None else _DEFAULT_SUBACCOUNT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return (
            self.owner == other.owner
            and self.effective_subaccount == other.effective_subaccount
        )

    def __hash__(self) -> int:
        return hash((self.owner, self.effective_subaccount))


def _check_common(timestamp: int, amount: int, created_at_time: int | None) -> None:
    if timestamp < 0:
        raise ValueError(f"timestamp must be non-negative, got {timestamp}")
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    if created_at_time is not None and created_at_time < 0:
        raise ValueError(
            f"created_at_time must be non-negative, got {created_at_time}"
        )


@dataclass(frozen=True, slots=True)
class Burn:
    kind: ClassVar[str] = "burn"

    timestamp: int
    from_: Account
    amount: int
    memo: bytes | None = None
    created_at_time: int | None = None

    def __post_init__(self) -> None:
        _check_common(self.timestamp, self.amount, self.created_at_time)


@dataclass(frozen=True, slots=True)
class Mint:
    kind: ClassVar[str] = "mint"

    timestamp: int
    to: Account
    amount: int
    memo: bytes | None = None
    created_at_time: int | None = None

    def __post_init__(self) -> None:
        _check_common(self.timestamp, self.amount, self.created_at_time)


@dataclass(frozen=True, slots=True)
class Transfer:
    kind: ClassVar[str] = "transfer"

    timestamp: int
    from_: Account
    to: Account
    amount: int
    fee: int | None = None
    memo: bytes | None = None
    created_at_time: int | None = None

    def __post_init__(self) -> None:
        _check_common(self.timestamp, self.amount, self.created_at_time)
        if self.fee is not None and self.fee < 0:
            raise ValueError(f"fee must be non-negative, got {self.fee}")


Transaction = Burn | Mint | Transfer
