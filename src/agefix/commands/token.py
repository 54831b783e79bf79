"""
Token commands - deploy and operate the fungible token contract.

\b
Examples:
  agefix token deploy --name Health --symbol HLT --supply 1000000
  agefix token balance --token 0xabc... 0xdef...
  agefix token transfer --token 0xabc... --to 0xdef... --amount 100
"""

from __future__ import annotations

import click

from ..contracts import TokenHelper
from .common import echo_fields, get_client, run

token_option = click.option(
    "--token", "token_address", required=True, envvar="AGEFIX_TOKEN_ADDRESS",
    help="Token contract address",
)


@click.group()
def token() -> None:
    """Fungible token operations."""


@token.command("deploy")
@click.option("--name", required=True, help="Token name")
@click.option("--symbol", required=True, help="Token symbol")
@click.option("--supply", required=True, help="Initial supply (integer)")
@click.pass_context
def token_deploy(ctx: click.Context, name: str, symbol: str, supply: str) -> None:
    """Deploy a new token contract."""
    helper = TokenHelper(get_client(ctx))
    deployment = run(helper.deploy(name, symbol, supply))
    echo_fields(
        f"{symbol} deployed!",
        [("Address", deployment.contract_address), ("TX", deployment.transaction_hash)],
    )


@token.command("balance")
@token_option
@click.argument("owner")
@click.pass_context
def token_balance(ctx: click.Context, token_address: str, owner: str) -> None:
    """Show the token balance of OWNER."""
    helper = TokenHelper(get_client(ctx), token_address)
    click.echo(run(helper.balance_of(owner)))


@token.command("transfer")
@token_option
@click.option("--to", "recipient", required=True, help="Recipient address")
@click.option("--amount", required=True, help="Amount (decimal string)")
@click.pass_context
def token_transfer(ctx: click.Context, token_address: str, recipient: str, amount: str) -> None:
    """Transfer tokens to a recipient."""
    helper = TokenHelper(get_client(ctx), token_address)
    result = run(helper.transfer(recipient, amount))
    echo_fields("Transfer confirmed!", [("TX", result.tx_hash), ("Block", result.block_number)])


@token.command("approve")
@token_option
@click.option("--spender", required=True, help="Spender address")
@click.option("--amount", required=True, help="Allowance (decimal string)")
@click.pass_context
def token_approve(ctx: click.Context, token_address: str, spender: str, amount: str) -> None:
    """Approve a spender to use tokens."""
    helper = TokenHelper(get_client(ctx), token_address)
    result = run(helper.approve(spender, amount))
    echo_fields("Approval confirmed!", [("TX", result.tx_hash), ("Block", result.block_number)])
