from ledgerdump.core.config import (
    ConfigError,
    LedgerConfig,
    load_ledger_config_from_env,
)
from ledgerdump.core.principal import Principal, PrincipalError

__all__ = [
    "ConfigError",
    "LedgerConfig",
    "Principal",
    "PrincipalError",
    "load_ledger_config_from_env",
]
