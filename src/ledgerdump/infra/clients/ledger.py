from __future__ import annotations

import http.client
import json
from typing import Annotated, Any, Protocol, Self, TypeVar, cast
import urllib.error
import urllib.parse
import urllib.request

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    NonNegativeInt,
    ValidationError,
)

from ledgerdump.core.config import LedgerConfig
from ledgerdump.models.transaction import SUBACCOUNT_LENGTH, Account

GET_TRANSACTIONS_METHOD = "get_transactions"


class LedgerClientError(Exception):
    """Base error for ledger query failures."""


class LedgerDecodeError(LedgerClientError):
    """A ledger response could not be decoded into the expected shape."""


def _decode_blob(value: Any) -> Any:
    """Accept byte fields as a hex string or a list of byte values."""
    if isinstance(value, str):
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise ValueError(f"invalid hex blob: {e}") from e
    if isinstance(value, list):
        try:
            return bytes(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid byte list: {e}") from e
    return value


Blob = Annotated[bytes, BeforeValidator(_decode_blob)]
Subaccount = Annotated[
    Blob, Field(min_length=SUBACCOUNT_LENGTH, max_length=SUBACCOUNT_LENGTH)
]


class LedgerBaseModel(BaseModel):
    """Shared base for ledger response models with a short parse alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def parse(cls, data: Any) -> Self:
        return cls.model_validate(data)


ModelT = TypeVar("ModelT", bound=LedgerBaseModel)


class AccountModel(LedgerBaseModel):
    owner: str
    subaccount: Subaccount | None = None

    def to_account(self) -> Account:
        return Account(owner=self.owner, subaccount=self.subaccount)


class MintModel(LedgerBaseModel):
    to: AccountModel
    amount: NonNegativeInt
    memo: Blob | None = None
    created_at_time: NonNegativeInt | None = None


class BurnModel(LedgerBaseModel):
    from_: AccountModel = Field(alias="from")
    amount: NonNegativeInt
    memo: Blob | None = None
    created_at_time: NonNegativeInt | None = None


class TransferModel(LedgerBaseModel):
    from_: AccountModel = Field(alias="from")
    to: AccountModel
    amount: NonNegativeInt
    fee: NonNegativeInt | None = None
    memo: Blob | None = None
    created_at_time: NonNegativeInt | None = None


class RawTransaction(LedgerBaseModel):
    """A transaction as the ledger returns it: a kind plus optional payloads."""

    kind: str
    timestamp: NonNegativeInt
    mint: MintModel | None = None
    burn: BurnModel | None = None
    transfer: TransferModel | None = None


class ArchiveCallback(LedgerBaseModel):
    canister_id: str
    method: str


class ArchivedRange(LedgerBaseModel):
    """A sub-range of the requested window that lives in an archive canister."""

    callback: ArchiveCallback
    start: NonNegativeInt
    length: NonNegativeInt


class GetTransactionsResponse(LedgerBaseModel):
    log_length: NonNegativeInt
    first_index: NonNegativeInt = 0
    transactions: list[RawTransaction] = Field(default_factory=list)
    archived_transactions: list[ArchivedRange] = Field(default_factory=list)


class TransactionRange(LedgerBaseModel):
    transactions: list[RawTransaction] = Field(default_factory=list)
    # Archives never delegate further; kept so nested delegation can be detected.
    archived_transactions: list[ArchivedRange] = Field(default_factory=list)


class LedgerClient(Protocol):
    """Query capability the fetch pipeline needs from a ledger transport."""

    def get_transactions(
        self, canister_id: str, *, start: int, length: int
    ) -> GetTransactionsResponse: ...

    def get_archived_transactions(
        self, canister_id: str, method: str, *, start: int, length: int
    ) -> TransactionRange: ...


class HttpLedgerClient:
    """Ledger client that sends JSON query calls to an HTTP gateway.

    Each call is a POST of ``{"start": ..., "length": ...}`` to
    ``<base_url>/api/canister/<canister_id>/query/<method>``; the gateway
    returns the decoded response record as JSON.
    """

    def __init__(self, *, base_url: str, timeout_seconds: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config: LedgerConfig) -> HttpLedgerClient:
        return cls(base_url=config.url, timeout_seconds=config.timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _query_url(self, canister_id: str, method: str) -> str:
        return (
            f"{self._base_url}/api/canister/"
            f"{urllib.parse.quote(canister_id, safe='')}/query/"
            f"{urllib.parse.quote(method, safe='')}"
        )

    def _parse_json_response(self, target: str, body: str) -> dict[str, Any]:
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError as e:
            raise LedgerDecodeError(
                f"Error while decoding response of {target}: {e}"
            ) from e
        if not isinstance(parsed, dict):
            raise LedgerDecodeError(
                f"Error while decoding response of {target}: expected a JSON object"
            )
        return cast(dict[str, Any], parsed)

    def _post(
        self, canister_id: str, method: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        target = f"{canister_id}.{method}"
        req = urllib.request.Request(  # noqa: S310
            self._query_url(canister_id, method),
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            method="POST",
        )

        try:
            with urllib.request.urlopen(  # noqa: S310 - external HTTPS
                req, timeout=self._timeout_seconds
            ) as resp:
                raw_body = resp.read()
        except urllib.error.HTTPError as e:  # pragma: no cover - network-dependent
            err_body = e.read().decode("utf-8", "ignore")
            raise LedgerClientError(
                f"Error while calling {target}: HTTP {e.code}: {err_body}"
            ) from e
        except urllib.error.URLError as e:  # pragma: no cover - network-dependent
            raise LedgerClientError(f"Error while calling {target}: {e.reason}") from e
        except TimeoutError as e:  # pragma: no cover - network-dependent
            raise LedgerClientError(f"Error while calling {target}: timed out") from e
        except (OSError, http.client.HTTPException) as e:
            raise LedgerClientError(f"Error while calling {target}: {e!r}") from e

        try:
            body = raw_body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LedgerDecodeError(
                f"Error while decoding response of {target}: {e}"
            ) from e
        return self._parse_json_response(target, body)

    def _decode(
        self, model: type[ModelT], target: str, data: dict[str, Any]
    ) -> ModelT:
        try:
            return model.parse(data)
        except ValidationError as e:
            raise LedgerDecodeError(
                f"Error while decoding response of {target}: {e}"
            ) from e

    def get_transactions(
        self, canister_id: str, *, start: int, length: int
    ) -> GetTransactionsResponse:
        """Query the ledger's own ``get_transactions`` endpoint."""
        data = self._post(
            canister_id,
            GET_TRANSACTIONS_METHOD,
            {"start": start, "length": length},
        )
        return self._decode(
            GetTransactionsResponse,
            f"{canister_id}.{GET_TRANSACTIONS_METHOD}",
            data,
        )

    def get_archived_transactions(
        self, canister_id: str, method: str, *, start: int, length: int
    ) -> TransactionRange:
        """Query an archive callback named by an archived range."""
        data = self._post(canister_id, method, {"start": start, "length": length})
        return self._decode(TransactionRange, f"{canister_id}.{method}", data)
