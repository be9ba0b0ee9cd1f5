"""Transaction report: fetch, normalize and render rows in ledger order."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import loguru
from loguru import logger

from ledgerdump.infra.clients.ledger import LedgerClient
from ledgerdump.pipeline.fetcher import FetcherLogger, open_range
from ledgerdump.pipeline.formatter import HEADER, format_row
from ledgerdump.pipeline.normalizer import NormalizationError, normalize


@dataclass(frozen=True, slots=True)
class ReportSummary:
    """Counts for a completed transaction report."""

    rows_written: int
    rejected: int
    # Index of the last record consumed, None when the ledger returned nothing.
    last_index: int | None


class ReportLogger:
    """Handles all logging for transaction reports."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def record_rejected(self, index: int, error: NormalizationError) -> None:
        """Log a record that was skipped; goes to the diagnostic channel."""
        self._logger.bind(index=index, error_type=type(error).__name__).error(
            "Error on tx {}: {}", index, error
        )

    def report_complete(self, summary: ReportSummary, requested: int) -> None:
        self._logger.bind(
            rows=summary.rows_written,
            rejected=summary.rejected,
            requested=requested,
        ).info(
            "Report complete: {} rows written, {} rejected ({} requested)",
            summary.rows_written,
            summary.rejected,
            requested,
        )


def write_transactions(
    client: LedgerClient,
    ledger_id: str,
    *,
    start: int,
    length: int,
    emit: Callable[[str], None],
    report_logger: ReportLogger | None = None,
    fetcher_logger: FetcherLogger | None = None,
) -> ReportSummary:
    """Emit the header and one row per transaction in ``[start, start+length)``.

    The header is emitted once the ledger has answered the primary query.
    Records that fail normalization are logged and skipped; their index is
    still consumed so later rows keep their true ledger position. Fetch
    failures propagate and abort the report.

    Args:
        client: Ledger transport
        ledger_id: Principal text of the ledger canister
        start: First ledger index to report
        length: Number of transactions requested
        emit: Sink for the header and each row (e.g. ``typer.echo``)

    Returns:
        ReportSummary with counts of written and rejected records
    """
    report_logger = report_logger or ReportLogger()
    rows_written = 0
    rejected = 0
    last_index: int | None = None

    records = open_range(client, ledger_id, start, length, log=fetcher_logger)
    emit(HEADER)
    for index, raw in records:
        last_index = index
        try:
            tx = normalize(raw)
        except NormalizationError as e:
            report_logger.record_rejected(index, e)
            rejected += 1
            continue
        emit(format_row(index, tx))
        rows_written += 1

    summary = ReportSummary(
        rows_written=rows_written, rejected=rejected, last_index=last_index
    )
    report_logger.report_complete(summary, length)
    return summary
