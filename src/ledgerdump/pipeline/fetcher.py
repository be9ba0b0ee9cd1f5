"""Paginated transaction fetch that follows archive delegations."""

from __future__ import annotations

from collections.abc import Iterator

import loguru
from loguru import logger

from ledgerdump.infra.clients.ledger import (
    GET_TRANSACTIONS_METHOD,
    ArchivedRange,
    GetTransactionsResponse,
    LedgerClient,
    LedgerClientError,
    RawTransaction,
)

# Minimal window used when only the declared log length is needed.
_LENGTH_PROBE = 1


class NestedDelegationError(LedgerClientError):
    """An archive response delegated part of its range again."""


class FetcherLogger:
    """Handles all logging for the fetch pipeline."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def query_start(
        self, canister_id: str, method: str, start: int, length: int
    ) -> None:
        self._logger.bind(
            canister_id=canister_id, method=method, start=start, length=length
        ).debug(
            "Querying {}.{} (start={}, length={})", canister_id, method, start, length
        )

    def primary_received(
        self, log_length: int, own_count: int, archived_count: int
    ) -> None:
        self._logger.bind(
            log_length=log_length, own=own_count, archived=archived_count
        ).info(
            "Ledger reports {} transactions; {} in response, {} archived range(s)",
            log_length,
            own_count,
            archived_count,
        )

    def archive_received(self, canister_id: str, method: str, count: int) -> None:
        self._logger.bind(canister_id=canister_id, method=method, count=count).debug(
            "Archive {}.{} returned {} transactions", canister_id, method, count
        )


def get_length(client: LedgerClient, ledger_id: str) -> int:
    """Return the ledger's declared total number of transactions."""
    response = client.get_transactions(ledger_id, start=0, length=_LENGTH_PROBE)
    return response.log_length


def _fetch_archived(
    client: LedgerClient, archived: ArchivedRange, log: FetcherLogger
) -> list[RawTransaction]:
    canister_id = archived.callback.canister_id
    method = archived.callback.method
    log.query_start(canister_id, method, archived.start, archived.length)
    response = client.get_archived_transactions(
        canister_id, method, start=archived.start, length=archived.length
    )
    if response.archived_transactions:
        raise NestedDelegationError(
            f"Archive {canister_id}.{method} delegated "
            f"{len(response.archived_transactions)} range(s) further; "
            "nested delegation is not supported"
        )
    log.archive_received(canister_id, method, len(response.transactions))
    return response.transactions


def _iter_range(
    client: LedgerClient,
    response: GetTransactionsResponse,
    start: int,
    log: FetcherLogger,
) -> Iterator[tuple[int, RawTransaction]]:
    index = start
    for archived in response.archived_transactions:
        for raw in _fetch_archived(client, archived, log):
            yield index, raw
            index += 1

    for raw in response.transactions:
        yield index, raw
        index += 1


def open_range(
    client: LedgerClient,
    ledger_id: str,
    start: int,
    length: int,
    *,
    log: FetcherLogger | None = None,
) -> Iterator[tuple[int, RawTransaction]]:
    """Query the ledger now and return an iterator over the requested window.

    The primary query runs before this returns, so its failure surfaces
    immediately; archive queries run lazily as the iterator is consumed.
    """
    log = log or FetcherLogger()
    log.query_start(ledger_id, GET_TRANSACTIONS_METHOD, start, length)
    response = client.get_transactions(ledger_id, start=start, length=length)
    log.primary_received(
        response.log_length,
        len(response.transactions),
        len(response.archived_transactions),
    )
    return _iter_range(client, response, start, log)


def fetch_range(
    client: LedgerClient,
    ledger_id: str,
    start: int,
    length: int,
    *,
    log: FetcherLogger | None = None,
) -> Iterator[tuple[int, RawTransaction]]:
    """Lazily yield ``(index, raw_transaction)`` for the requested window.

    Archived ranges are fetched in the order the ledger lists them and are
    yielded before the ledger's own slice. Indices start at ``start`` and
    advance by one per record regardless of where it came from. Any client
    error aborts the iteration.

    Raises:
        LedgerClientError: If the primary or any archive query fails.
        NestedDelegationError: If an archive response delegates again.
    """
    yield from open_range(client, ledger_id, start, length, log=log)
