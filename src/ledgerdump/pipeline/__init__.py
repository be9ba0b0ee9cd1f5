"""Fetch -> normalize -> format pipeline for ledger transactions."""

from ledgerdump.pipeline.fetcher import (
    NestedDelegationError,
    fetch_range,
    get_length,
    open_range,
)
from ledgerdump.pipeline.formatter import (
    HEADER,
    account_to_str,
    format_row,
    memo_to_str,
    timestamp_to_utc,
)
from ledgerdump.pipeline.normalizer import (
    InvalidPayloadError,
    MissingPayloadError,
    NormalizationError,
    UnknownKindError,
    normalize,
)
from ledgerdump.pipeline.report import ReportSummary, write_transactions

__all__ = [
    "HEADER",
    "InvalidPayloadError",
    "MissingPayloadError",
    "NestedDelegationError",
    "NormalizationError",
    "ReportSummary",
    "UnknownKindError",
    "account_to_str",
    "fetch_range",
    "format_row",
    "get_length",
    "memo_to_str",
    "normalize",
    "open_range",
    "timestamp_to_utc",
    "write_transactions",
]
