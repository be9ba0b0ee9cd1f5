"""Row rendering for canonical transactions.

Rows are pipe-delimited with a fixed column order (see ``HEADER``). Byte
fields are rendered as uppercase hex and nanosecond timestamps as RFC 3339
UTC strings truncated to milliseconds, e.g. ``2022-12-01T09:30:00.123+00:00``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from ledgerdump.models.transaction import (
    Account,
    Burn,
    Mint,
    Transaction,
    Transfer,
)

DELIMITER = "|"
COLUMNS = (
    "block index",
    "kind",
    "datetime",
    "from",
    "to",
    "amount",
    "fee",
    "memo",
    "created_at_time",
)
HEADER = DELIMITER.join(COLUMNS)

_NANOS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def bytes_to_hex(data: bytes) -> str:
    return data.hex().upper()


def memo_to_str(memo: bytes) -> str:
    return bytes_to_hex(memo)


def account_to_str(account: Account) -> str:
    # Owner and subaccount are always space-separated, so a missing
    # subaccount leaves a trailing space.
    subaccount = (
        bytes_to_hex(account.subaccount) if account.subaccount is not None else ""
    )
    return f"{account.owner} {subaccount}"


def timestamp_to_utc(timestamp: int) -> str:
    """Render nanoseconds since the epoch as RFC 3339 UTC with milliseconds."""
    seconds, nanos = divmod(timestamp, _NANOS_PER_SECOND)
    moment = _EPOCH + timedelta(seconds=seconds, microseconds=nanos // 1_000)
    return moment.isoformat(timespec="milliseconds")


def _from_column(tx: Transaction) -> str:
    if isinstance(tx, Mint):
        return ""
    return account_to_str(tx.from_)


def _to_column(tx: Transaction) -> str:
    if isinstance(tx, Burn):
        return ""
    return account_to_str(tx.to)


def _fee_column(tx: Transaction) -> str:
    if isinstance(tx, Transfer) and tx.fee is not None:
        return str(tx.fee)
    return ""


def format_row(index: int, tx: Transaction) -> str:
    """Render ``tx`` at ledger position ``index`` as one delimited row."""
    columns = [
        str(index),
        tx.kind,
        timestamp_to_utc(tx.timestamp),
        _from_column(tx),
        _to_column(tx),
        str(tx.amount),
        _fee_column(tx),
        memo_to_str(tx.memo) if tx.memo is not None else "",
        (
            timestamp_to_utc(tx.created_at_time)
            if tx.created_at_time is not None
            else ""
        ),
    ]
    return DELIMITER.join(columns)
