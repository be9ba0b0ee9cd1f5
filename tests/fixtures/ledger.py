"""Builders for raw ledger records and an in-memory ledger client."""

from __future__ import annotations

from typing import Any

from ledgerdump.infra.clients.ledger import (
    GetTransactionsResponse,
    RawTransaction,
    TransactionRange,
)

LEDGER_ID = "zfcdd-tqaaa-aaaaq-aaaga-cai"
ARCHIVE_ID = "aaaaa-aa"
ALICE = "2vxsx-fae"
BOB = "aaaaa-aa"


def account(owner: str = ALICE, subaccount: str | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"owner": owner}
    if subaccount is not None:
        data["subaccount"] = subaccount
    return data


def mint_record(
    *,
    timestamp: int = 1_000_000_000,
    to: dict[str, Any] | None = None,
    amount: int = 100,
    memo: str | None = None,
    created_at_time: int | None = None,
) -> dict[str, Any]:
    return {
        "kind": "mint",
        "timestamp": timestamp,
        "mint": {
            "to": to or account(),
            "amount": amount,
            "memo": memo,
            "created_at_time": created_at_time,
        },
    }


def burn_record(
    *,
    timestamp: int = 1_000_000_000,
    from_: dict[str, Any] | None = None,
    amount: int = 100,
) -> dict[str, Any]:
    return {
        "kind": "burn",
        "timestamp": timestamp,
        "burn": {"from": from_ or account(), "amount": amount},
    }


def transfer_record(
    *,
    timestamp: int = 1_000_000_000,
    from_: dict[str, Any] | None = None,
    to: dict[str, Any] | None = None,
    amount: int = 100,
    fee: int | None = 10,
    memo: str | None = None,
    created_at_time: int | None = None,
) -> dict[str, Any]:
    return {
        "kind": "transfer",
        "timestamp": timestamp,
        "transfer": {
            "from": from_ or account(ALICE),
            "to": to or account(BOB),
            "amount": amount,
            "fee": fee,
            "memo": memo,
            "created_at_time": created_at_time,
        },
    }


def raw(record: dict[str, Any]) -> RawTransaction:
    return RawTransaction.parse(record)


def archived_range(
    start: int, length: int, *, canister_id: str = ARCHIVE_ID
) -> dict[str, Any]:
    return {
        "callback": {"canister_id": canister_id, "method": "get_transactions"},
        "start": start,
        "length": length,
    }


class FakeLedgerClient:
    """In-memory LedgerClient that records every query it receives."""

    def __init__(
        self,
        *,
        primary: dict[str, Any],
        archives: dict[tuple[str, int], dict[str, Any]] | None = None,
    ) -> None:
        self._primary = primary
        self._archives = archives or {}
        self.calls: list[tuple[str, str, int, int]] = []

    def get_transactions(
        self, canister_id: str, *, start: int, length: int
    ) -> GetTransactionsResponse:
        self.calls.append((canister_id, "get_transactions", start, length))
        return GetTransactionsResponse.parse(self._primary)

    def get_archived_transactions(
        self, canister_id: str, method: str, *, start: int, length: int
    ) -> TransactionRange:
        self.calls.append((canister_id, method, start, length))
        return TransactionRange.parse(self._archives[(canister_id, start)])
