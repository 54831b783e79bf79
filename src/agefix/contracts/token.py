"""
TokenHelper - deploy and drive the fungible AGXCL token contract.

Amounts go out and come back as decimal strings.
"""

from __future__ import annotations

from typing import Any

from ..models import Address, Amount, DeploymentResult, TransactionResult
from .base import ContractHelper
from .templates import token_source


class TokenHelper(ContractHelper):
    kind = "Token"

    async def deploy(self, name: str, symbol: str, total_supply: str | int) -> DeploymentResult:
        """Deploy a new token contract and bind this helper to it."""
        return await self._deploy(token_source(name, symbol, total_supply))

    async def balance_of(self, owner: str) -> str:
        """Token balance of ``owner`` as a decimal string."""
        self._require_address()
        return await self._read_amount("balanceOf", [Address(owner)])

    async def transfer(self, to: str, amount: Any) -> TransactionResult:
        address = self._require_address()
        return await self._client.execute(address, "transfer", [Address(to), Amount.of(amount)])

    async def approve(self, spender: str, amount: Any) -> TransactionResult:
        address = self._require_address()
        return await self._client.execute(address, "approve", [Address(spender), Amount.of(amount)])

    async def transfer_from(self, owner: str, to: str, amount: Any) -> TransactionResult:
        """Move ``amount`` from ``owner`` to ``to`` against a prior approval."""
        address = self._require_address()
        return await self._client.execute(
            address, "transferFrom", [Address(owner), Address(to), Amount.of(amount)]
        )
