from __future__ import annotations

from ..models import Address, DeploymentResult, TransactionResult
from .base import ContractHelper
from .templates import nft_source


class NFTHelper(ContractHelper):
    """Deploy and drive the AGXCL NFT contract."""

    kind = "NFT"

    async def deploy(self, name: str, symbol: str) -> DeploymentResult:
        return await self._deploy(nft_source(name, symbol))

    async def mint(self, to: str, uri: str) -> TransactionResult:
        address = self._require_address()
        return await self._client.execute(address, "mint", [Address(to), uri])

    async def owner_of(self, token_id: int) -> str:
        data = await self._read("ownerOf", [token_id])
        return "" if data is None else str(data)

    async def token_uri(self, token_id: int) -> str:
        data = await self._read("tokenURI", [token_id])
        return "" if data is None else str(data)

    async def balance_of(self, owner: str) -> str:
        self._require_address()
        return await self._read_amount("balanceOf", [Address(owner)])
