from __future__ import annotations

from typing import Any, Optional, Sequence

from ..client import LedgerClient
from ..errors import NotDeployedError, QueryError
from ..models import DeploymentResult, LedgerValue
from ..utils import decimal_string


class ContractHelper:
    """Binds a LedgerClient to one contract address.

    The address comes either from the constructor or from ``_deploy``;
    every other call fails with NotDeployedError until one is known.
    """

    kind = "Contract"

    def __init__(self, client: LedgerClient, address: Optional[str] = None) -> None:
        self._client = client
        self._address = address

    @property
    def client(self) -> LedgerClient:
        return self._client

    @property
    def address(self) -> Optional[str]:
        return self._address

    def _require_address(self) -> str:
        if not self._address:
            raise NotDeployedError(self.kind)
        return self._address

    async def _deploy(self, source: str) -> DeploymentResult:
        deployment = await self._client.deploy(source)
        self._address = deployment.contract_address
        return deployment

    async def _read(self, method: str, args: Sequence[LedgerValue]) -> Any:
        address = self._require_address()
        result = await self._client.query(address, method, args)
        if not result.success:
            raise QueryError(result.error or "unknown error")
        return result.data

    async def _read_amount(self, method: str, args: Sequence[LedgerValue]) -> str:
        data = await self._read(method, args)
        try:
            return decimal_string(0 if data is None else data)
        except (TypeError, ValueError) as exc:
            raise QueryError(f"{method} returned a malformed amount: {exc}") from exc
