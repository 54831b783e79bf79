"""
LedgerClient - request/response contract with the AgeFix ledger service.

Reads (query, balance, receipt, gas estimate) need only the chain id.
Writes (deploy, execute) also carry the signing credential and an
idempotency key, and fail before any request when no credential is
configured.

Every call is a single round trip. Nothing is retried: a write that
times out may or may not have been applied, so resubmit it with the
same idempotency key and let the service deduplicate.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

from .config import ClientConfig
from .errors import (
    BalanceLookupError,
    DeploymentError,
    ExecutionError,
    GasEstimateError,
    MissingCredentialError,
    ReceiptLookupError,
    TransportError,
)
from .models import (
    Amount,
    DeploymentResult,
    LedgerValue,
    QueryResult,
    Receipt,
    TransactionResult,
    amount_field,
    encode_args,
    int_field,
)
from .transport import HttpTransport, HttpxTransport
from .utils import uuidv7

logger = logging.getLogger(__name__)


class LedgerClient:
    """Async client for one ledger endpoint and chain.

    Args:
        config: Endpoint, chain id, optional credential and timeout.
        transport: Injectable HTTP transport. Defaults to HttpxTransport
            bound to ``config.endpoint``.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport or HttpxTransport(config.endpoint, timeout=config.timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    # -----------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------

    async def deploy(
        self,
        contract_source: str,
        constructor_args: Optional[Sequence[LedgerValue]] = None,
        idempotency_key: Optional[str] = None,
    ) -> DeploymentResult:
        """
        Deploy a new AGXCL contract.

        Args:
            contract_source: AGXCL contract source code
            constructor_args: Constructor arguments
            idempotency_key: Reuse the key of an earlier attempt when
                resubmitting after a timeout (default: fresh UUIDv7)

        Returns:
            DeploymentResult with the new contract address

        Raises:
            MissingCredentialError: No credential configured (no request sent)
            DeploymentError: Transport or remote failure
        """
        credential = self._require_credential("contract deployment")
        key = idempotency_key or str(uuidv7())
        payload = {
            "code": contract_source,
            "args": encode_args(constructor_args),
            "chainId": self._config.chain_id,
            "privateKey": credential,
            "idempotencyKey": key,
        }

        logger.debug("Submitting deployment (idempotency key %s)", key)
        try:
            response = await self._transport.post_json("/deploy", payload)
            result = DeploymentResult.from_response(response)
        except (TransportError, ValueError) as exc:
            logger.info("Deployment failed (idempotency key %s): %s", key, exc)
            raise DeploymentError(str(exc)) from exc

        logger.info(
            "Deployed contract %s in block %d (tx %s)",
            result.contract_address,
            result.block_number,
            result.transaction_hash,
        )
        return result

    async def execute(
        self,
        contract_address: str,
        method: str,
        args: Optional[Sequence[LedgerValue]] = None,
        value: Any = "0",
        idempotency_key: Optional[str] = None,
    ) -> TransactionResult:
        """
        Execute a state-changing contract method.

        Args:
            contract_address: Address of a deployed contract
            method: Method name
            args: Method arguments
            value: AGX amount to send, as int, Decimal or decimal string
            idempotency_key: Reuse the key of an earlier attempt when
                resubmitting after a timeout (default: fresh UUIDv7)

        Returns:
            TransactionResult of the confirmed transaction

        Raises:
            MissingCredentialError: No credential configured (no request sent)
            ExecutionError: Transport or remote failure
        """
        credential = self._require_credential("transactions")
        key = idempotency_key or str(uuidv7())
        payload = {
            "contractAddress": contract_address,
            "method": method,
            "args": encode_args(args),
            "value": Amount.of(value).value,
            "chainId": self._config.chain_id,
            "privateKey": credential,
            "idempotencyKey": key,
        }

        logger.debug("Submitting %s.%s (idempotency key %s)", contract_address, method, key)
        try:
            response = await self._transport.post_json("/execute", payload)
            result = TransactionResult.from_response(response)
        except (TransportError, ValueError) as exc:
            logger.info("%s.%s failed (idempotency key %s): %s", contract_address, method, key, exc)
            raise ExecutionError(str(exc)) from exc

        logger.info(
            "Confirmed %s.%s in block %d (tx %s, gas %d)",
            contract_address,
            method,
            result.block_number,
            result.tx_hash,
            result.gas_used,
        )
        return result

    # -----------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------

    async def query(
        self,
        contract_address: str,
        method: str,
        args: Optional[Sequence[LedgerValue]] = None,
    ) -> QueryResult:
        """
        Call a read-only contract method.

        Never raises for transport or remote failures; they come back as
        ``QueryResult(success=False, error=...)`` so callers can probe
        speculatively.
        """
        payload = {
            "contractAddress": contract_address,
            "method": method,
            "args": encode_args(args),
            "chainId": self._config.chain_id,
        }

        try:
            response = await self._transport.post_json("/query", payload)
        except TransportError as exc:
            logger.debug("Query %s.%s failed: %s", contract_address, method, exc)
            return QueryResult.failed(str(exc))

        return QueryResult.ok(response.get("result"))

    async def get_receipt(self, tx_hash: str) -> Receipt:
        """
        Look up the receipt of a finalized transaction.

        Raises:
            ReceiptLookupError: Unknown hash or transport failure
        """
        try:
            response = await self._transport.get_json(f"/tx/{quote(tx_hash, safe='')}")
            return Receipt.from_response(response, tx_hash)
        except (TransportError, ValueError) as exc:
            raise ReceiptLookupError(str(exc)) from exc

    async def get_balance(self, address: str) -> str:
        """
        Get the AGX balance of an account.

        Returns:
            Balance as a decimal string

        Raises:
            BalanceLookupError: Transport failure or a malformed balance
        """
        try:
            response = await self._transport.get_json(f"/balance/{quote(address, safe='')}")
            return amount_field(response, "balance")
        except (TransportError, ValueError, TypeError) as exc:
            raise BalanceLookupError(str(exc)) from exc

    async def estimate_gas(
        self,
        contract_address: str,
        method: str,
        args: Optional[Sequence[LedgerValue]] = None,
    ) -> int:
        """
        Ask the service to estimate the gas cost of a prospective call.

        Raises:
            GasEstimateError: Transport failure or a malformed estimate
        """
        payload = {
            "contractAddress": contract_address,
            "method": method,
            "args": encode_args(args),
            "chainId": self._config.chain_id,
        }

        try:
            response = await self._transport.post_json("/estimateGas", payload)
            return int_field(response, "gasEstimate")
        except (TransportError, ValueError, TypeError) as exc:
            raise GasEstimateError(str(exc)) from exc

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    def _require_credential(self, operation: str) -> str:
        if not self._config.credential:
            raise MissingCredentialError(operation)
        return self._config.credential
