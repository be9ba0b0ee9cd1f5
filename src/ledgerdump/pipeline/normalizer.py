"""Conversion of raw ledger records into canonical transactions."""

from __future__ import annotations

from collections.abc import Callable

from ledgerdump.infra.clients.ledger import RawTransaction
from ledgerdump.models.transaction import Burn, Mint, Transaction, Transfer


class NormalizationError(Exception):
    """A single raw record could not be converted into a transaction."""


class UnknownKindError(NormalizationError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown kind {kind}")
        self.kind = kind


class MissingPayloadError(NormalizationError):
    """The record's kind names a payload the record does not carry."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Transaction of kind {kind} has no {kind} payload")
        self.kind = kind


class InvalidPayloadError(NormalizationError):
    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"Invalid {kind} payload: {reason}")
        self.kind = kind


def _mint(raw: RawTransaction) -> Mint:
    if raw.mint is None:
        raise MissingPayloadError("mint")
    mint = raw.mint
    return Mint(
        timestamp=raw.timestamp,
        to=mint.to.to_account(),
        amount=mint.amount,
        memo=mint.memo,
        created_at_time=mint.created_at_time,
    )


def _burn(raw: RawTransaction) -> Burn:
    if raw.burn is None:
        raise MissingPayloadError("burn")
    burn = raw.burn
    return Burn(
        timestamp=raw.timestamp,
        from_=burn.from_.to_account(),
        amount=burn.amount,
        memo=burn.memo,
        created_at_time=burn.created_at_time,
    )


def _transfer(raw: RawTransaction) -> Transfer:
    if raw.transfer is None:
        raise MissingPayloadError("transfer")
    transfer = raw.transfer
    return Transfer(
        timestamp=raw.timestamp,
        from_=transfer.from_.to_account(),
        to=transfer.to.to_account(),
        amount=transfer.amount,
        fee=transfer.fee,
        memo=transfer.memo,
        created_at_time=transfer.created_at_time,
    )


_EXTRACTORS: dict[str, Callable[[RawTransaction], Transaction]] = {
    Mint.kind: _mint,
    Burn.kind: _burn,
    Transfer.kind: _transfer,
}


def normalize(raw: RawTransaction) -> Transaction:
    """Convert one raw ledger record into a ``Burn``, ``Mint`` or ``Transfer``.

    Only the payload named by ``raw.kind`` is read; the others are ignored.

    Raises:
        UnknownKindError: If ``raw.kind`` is not one of the three known kinds.
        MissingPayloadError: If the payload for ``raw.kind`` is absent.
        InvalidPayloadError: If the payload violates a transaction invariant
            (for example a negative amount).
    """
    extract = _EXTRACTORS.get(raw.kind)
    if extract is None:
        raise UnknownKindError(raw.kind)
    try:
        return extract(raw)
    except ValueError as e:
        raise InvalidPayloadError(raw.kind, str(e)) from e
