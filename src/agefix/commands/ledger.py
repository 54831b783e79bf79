"""
Ledger commands - one per LedgerClient operation.

deploy, query and estimate-gas take method arguments as a JSON array.
execute and deploy need AGEFIX_PRIVATE_KEY (environment or ~/.agefix/.env).
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from .common import args_option, echo_fields, get_client, parse_args, run


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@args_option
@click.pass_context
def deploy(ctx: click.Context, source: Path, args_json: str) -> None:
    """Deploy the AGXCL contract in SOURCE."""
    args = parse_args(args_json)
    code = source.read_text(encoding="utf-8")
    result = run(get_client(ctx).deploy(code, args))
    echo_fields(
        "Contract deployed!",
        [
            ("Address", result.contract_address),
            ("TX", result.transaction_hash),
            ("Block", result.block_number),
        ],
    )


@click.command()
@click.argument("address")
@click.argument("method")
@args_option
@click.pass_context
def query(ctx: click.Context, address: str, method: str, args_json: str) -> None:
    """Call read-only METHOD on the contract at ADDRESS."""
    args = parse_args(args_json)
    result = run(get_client(ctx).query(address, method, args))
    if not result.success:
        click.secho(f"Query failed: {result.error}", fg="red", err=True)
        sys.exit(1)
    click.echo(json.dumps(result.data, default=str))


@click.command()
@click.argument("address")
@click.argument("method")
@args_option
@click.option("--value", default="0", show_default=True, help="AGX amount to send (decimal)")
@click.option(
    "--idempotency-key",
    default=None,
    help="Reuse the key of a timed-out attempt to resubmit it safely",
)
@click.pass_context
def execute(
    ctx: click.Context,
    address: str,
    method: str,
    args_json: str,
    value: str,
    idempotency_key: Optional[str],
) -> None:
    """Execute state-changing METHOD on the contract at ADDRESS."""
    args = parse_args(args_json)
    result = run(
        get_client(ctx).execute(address, method, args, value=value, idempotency_key=idempotency_key)
    )
    echo_fields(
        "Transaction confirmed!",
        [
            ("TX", result.tx_hash),
            ("Block", result.block_number),
            ("Gas used", result.gas_used),
        ],
    )


@click.command()
@click.argument("tx_hash")
@click.pass_context
def receipt(ctx: click.Context, tx_hash: str) -> None:
    """Show the receipt of transaction TX_HASH."""
    result = run(get_client(ctx).get_receipt(tx_hash))
    echo_fields(
        "Receipt",
        [
            ("TX", result.tx_hash),
            ("Status", result.status),
            ("Block", "-" if result.block_number is None else result.block_number),
            ("Gas used", "-" if result.gas_used is None else result.gas_used),
            ("Logs", len(result.logs)),
        ],
    )


@click.command()
@click.argument("address")
@click.pass_context
def balance(ctx: click.Context, address: str) -> None:
    """Show the AGX balance of ADDRESS."""
    amount = run(get_client(ctx).get_balance(address))
    click.echo(f"{amount} AGX")


@click.command("estimate-gas")
@click.argument("address")
@click.argument("method")
@args_option
@click.pass_context
def estimate_gas(ctx: click.Context, address: str, method: str, args_json: str) -> None:
    """Estimate gas for calling METHOD on the contract at ADDRESS."""
    args = parse_args(args_json)
    estimate = run(get_client(ctx).estimate_gas(address, method, args))
    click.echo(str(estimate))
