"""
AgeFix CLI

Command-line interface for the AgeFix AGXCL ledger client.

Reads need only an endpoint and chain id. Writes (deploy, execute,
token transfer/approve, nft mint) need a signing key: run
'agefix keygen' or set AGEFIX_PRIVATE_KEY in ~/.agefix/.env.

Commands:
  deploy        - Deploy an AGXCL contract from a source file
  query         - Call a read-only contract method
  execute       - Execute a state-changing contract method
  receipt       - Show a transaction receipt
  balance       - Show an account's AGX balance
  estimate-gas  - Estimate gas for a contract call
  token         - Fungible token helper
  nft           - NFT helper
  keygen        - Create a signing key
  whoami        - Show the configured account address
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from typing import Optional

import click

from . import __version__
from .config import ClientConfig
from .credentials import AGEFIX_ENV, generate_key, get_address, load_credential, save_credential
from .errors import ConfigError


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=__version__, prog_name="agefix")
@click.option("--rpc-url", envvar="AGEFIX_RPC_URL", default=None, help="Ledger RPC endpoint")
@click.option("--chain-id", envvar="AGEFIX_CHAIN_ID", default=None, help="Chain identifier")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: Optional[str],
    chain_id: Optional[str],
    timeout: Optional[float],
    verbose: bool,
) -> None:
    """AgeFix - AGXCL ledger client."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = ClientConfig.from_env()
        overrides = {
            key: value
            for key, value in (("endpoint", rpc_url), ("chain_id", chain_id), ("timeout", timeout))
            if value is not None
        }
        config = dataclasses.replace(config, **overrides)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# ============ Ledger Commands ============

from .commands.ledger import balance, deploy, estimate_gas, execute, query, receipt
from .commands.nft import nft
from .commands.token import token

cli.add_command(deploy)
cli.add_command(query)
cli.add_command(execute)
cli.add_command(receipt)
cli.add_command(balance)
cli.add_command(estimate_gas)
cli.add_command(token)
cli.add_command(nft)


# ============ Identity ============


@cli.command()
@click.option("--force", is_flag=True, help="Replace an existing key")
def keygen(force: bool) -> None:
    """Create a signing key in ~/.agefix/.env."""
    if load_credential() and not force:
        click.echo("A key is already configured. Use --force to replace it.")
        sys.exit(1)

    private_key, address = generate_key()
    path = save_credential(private_key)
    click.echo(f"Address: {address}")
    click.echo(f"Key saved to {path}")


@cli.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the configured account address."""
    config: ClientConfig = ctx.obj["config"]
    if not config.credential:
        click.echo("No key configured.")
        click.echo(f"Run 'agefix keygen' or set AGEFIX_PRIVATE_KEY in {AGEFIX_ENV}.")
        sys.exit(1)

    try:
        address = get_address(config.credential)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)

    click.echo(f"Address:  {address}")
    click.echo(f"Endpoint: {config.endpoint}")
    click.echo(f"Chain:    {config.chain_id}")


# ============ Entry Points ============


def main() -> None:
    """AgeFix CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
