from __future__ import annotations

from dataclasses import dataclass
import math
import os

from ledgerdump.core.principal import Principal, PrincipalError

DEFAULT_LEDGER_ID = "zfcdd-tqaaa-aaaaq-aaaga-cai"
DEFAULT_URL = "https://ic0.app"
DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(ValueError):
    """Missing or invalid ledgerdump configuration."""


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Target ledger and endpoint settings resolved at process startup."""

    ledger_id: Principal
    url: str = DEFAULT_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def parse_ledger_id(value: str) -> Principal:
    try:
        return Principal.from_text(value.strip())
    except PrincipalError as e:
        raise ConfigError(str(e)) from e


def parse_timeout(value: str | float) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout {value!r}: expected seconds") from e
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"Invalid timeout {value!r}: must be a positive number")
    return timeout


def load_ledger_config_from_env(
    *,
    ledger_id: str | None = None,
    url: str | None = None,
    timeout_seconds: float | None = None,
) -> LedgerConfig:
    """Load ledger config from env, letting explicit arguments take precedence.

    Env vars (all optional):
    - LEDGERDUMP_LEDGER_ID (defaults to the SNS-1 ledger)
    - LEDGERDUMP_URL (defaults to https://ic0.app)
    - LEDGERDUMP_TIMEOUT in seconds (defaults to 30)
    """
    ledger_id_value = ledger_id or os.environ.get(
        "LEDGERDUMP_LEDGER_ID", DEFAULT_LEDGER_ID
    )
    url_value = (url or os.environ.get("LEDGERDUMP_URL", DEFAULT_URL)).strip()
    if not url_value:
        raise ConfigError("LEDGERDUMP_URL must not be empty")

    timeout_value: str | float = (
        timeout_seconds
        if timeout_seconds is not None
        else os.environ.get("LEDGERDUMP_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
    )

    return LedgerConfig(
        ledger_id=parse_ledger_id(ledger_id_value),
        url=url_value,
        timeout_seconds=parse_timeout(timeout_value),
    )
