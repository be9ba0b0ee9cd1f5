from __future__ import annotations

import sys

from dotenv import load_dotenv
from loguru import logger
import typer

from ledgerdump.core.config import (
    DEFAULT_LEDGER_ID,
    DEFAULT_URL,
    ConfigError,
    LedgerConfig,
    load_ledger_config_from_env,
)
from ledgerdump.infra.clients.ledger import HttpLedgerClient, LedgerClientError
from ledgerdump.pipeline.fetcher import get_length
from ledgerdump.pipeline.report import write_transactions

# Load environment variables from .env
load_dotenv(override=False)

app = typer.Typer(
    help="Dump the transaction log of an ICRC-1 ledger.",
    no_args_is_help=True,
)


def _configure_logging(*, verbose: bool) -> None:
    # stdout carries the report; diagnostics go to stderr only.
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} [{level}] {message}",
        level="DEBUG" if verbose else "WARNING",
    )


def _config(ctx: typer.Context) -> LedgerConfig:
    config = ctx.obj
    if not isinstance(config, LedgerConfig):
        raise RuntimeError("CLI callback did not initialize the ledger config")
    return config


@app.callback()
def main_callback(
    ctx: typer.Context,
    ledger_id: str | None = typer.Option(
        None,
        "--ledger-id",
        help=(
            "Ledger canister id "
            f"[env LEDGERDUMP_LEDGER_ID, default {DEFAULT_LEDGER_ID}]"
        ),
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help=f"Ledger gateway URL [env LEDGERDUMP_URL, default {DEFAULT_URL}]",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Per-request timeout in seconds [env LEDGERDUMP_TIMEOUT, default 30]",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log fetch progress to stderr."
    ),
) -> None:
    """Resolve configuration shared by all commands."""
    _configure_logging(verbose=verbose)
    try:
        ctx.obj = load_ledger_config_from_env(
            ledger_id=ledger_id, url=url, timeout_seconds=timeout
        )
    except ConfigError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(2) from None


def _print_length(config: LedgerConfig) -> None:
    client = HttpLedgerClient.from_config(config)
    try:
        log_length = get_length(client, config.ledger_id.to_text())
    except LedgerClientError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from None
    typer.echo(str(log_length))


def _print_transactions(config: LedgerConfig, *, start: int, length: int) -> None:
    client = HttpLedgerClient.from_config(config)
    try:
        write_transactions(
            client,
            config.ledger_id.to_text(),
            start=start,
            length=length,
            emit=typer.echo,
        )
    except LedgerClientError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from None


@app.command("length")
def length_cmd(ctx: typer.Context) -> None:
    """Print the total number of transactions in the ledger."""
    _print_length(_config(ctx))


@app.command("transactions")
def transactions_cmd(
    ctx: typer.Context,
    start: int = typer.Option(..., "--start", "-s", min=0, help="First block index"),
    length: int = typer.Option(
        ..., "--length", "-l", min=0, help="Number of transactions to fetch"
    ),
) -> None:
    """
    Print a header and one pipe-delimited row per transaction.

    Records that cannot be decoded are reported on stderr and skipped.
    """
    _print_transactions(_config(ctx), start=start, length=length)


@app.command("get-length", hidden=True)
def get_length_cmd(ctx: typer.Context) -> None:
    """Alias for ``length``."""
    _print_length(_config(ctx))


@app.command("get-transactions", hidden=True)
def get_transactions_cmd(
    ctx: typer.Context,
    start: int = typer.Option(..., "--start", "-s", min=0),
    length: int = typer.Option(..., "--length", "-l", min=0),
) -> None:
    """Alias for ``transactions``."""
    _print_transactions(_config(ctx), start=start, length=length)


def main() -> None:
    app()
