"""Ledger transport clients."""

from ledgerdump.infra.clients.ledger import (
    ArchivedRange,
    GetTransactionsResponse,
    HttpLedgerClient,
    LedgerClient,
    LedgerClientError,
    LedgerDecodeError,
    RawTransaction,
    TransactionRange,
)

__all__ = [
    "ArchivedRange",
    "GetTransactionsResponse",
    "HttpLedgerClient",
    "LedgerClient",
    "LedgerClientError",
    "LedgerDecodeError",
    "RawTransaction",
    "TransactionRange",
]
