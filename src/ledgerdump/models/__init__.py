from ledgerdump.models.transaction import (
    SUBACCOUNT_LENGTH,
    Account,
    Burn,
    Mint,
    Transaction,
    Transfer,
)

__all__ = [
    "SUBACCOUNT_LENGTH",
    "Account",
    "Burn",
    "Mint",
    "Transaction",
    "Transfer",
]
