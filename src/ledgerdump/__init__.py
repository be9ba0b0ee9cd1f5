"""Read-only transaction reporting client for ICRC-1 style ledgers."""

__version__ = "0.1.0"
