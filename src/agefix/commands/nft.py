"""NFT commands - deploy, mint and look up owners."""

from __future__ import annotations

import click

from ..contracts import NFTHelper
from .common import echo_fields, get_client, run

nft_option = click.option(
    "--nft", "nft_address", required=True, envvar="AGEFIX_NFT_ADDRESS",
    help="NFT contract address",
)


@click.group()
def nft() -> None:
    """NFT operations."""


@nft.command("deploy")
@click.option("--name", required=True, help="Collection name")
@click.option("--symbol", required=True, help="Collection symbol")
@click.pass_context
def nft_deploy(ctx: click.Context, name: str, symbol: str) -> None:
    """Deploy a new NFT contract."""
    helper = NFTHelper(get_client(ctx))
    deployment = run(helper.deploy(name, symbol))
    echo_fields(
        f"{symbol} deployed!",
        [("Address", deployment.contract_address), ("TX", deployment.transaction_hash)],
    )


@nft.command("mint")
@nft_option
@click.option("--to", "recipient", required=True, help="Recipient address")
@click.option("--uri", required=True, help="Token metadata URI")
@click.pass_context
def nft_mint(ctx: click.Context, nft_address: str, recipient: str, uri: str) -> None:
    """Mint a token to a recipient."""
    helper = NFTHelper(get_client(ctx), nft_address)
    result = run(helper.mint(recipient, uri))
    echo_fields("Mint confirmed!", [("TX", result.tx_hash), ("Block", result.block_number)])


@nft.command("owner")
@nft_option
@click.argument("token_id", type=int)
@click.pass_context
def nft_owner(ctx: click.Context, nft_address: str, token_id: int) -> None:
    """Show the owner of TOKEN_ID."""
    helper = NFTHelper(get_client(ctx), nft_address)
    click.echo(run(helper.owner_of(token_id)))
