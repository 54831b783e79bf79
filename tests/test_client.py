"""
Tests for LedgerClient against a fake transport - no network.

Covers credential gating (zero requests without a key), in-band query
failures, operation-prefixed errors, request payload shapes and the
decimal-string amount contract.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from agefix.client import LedgerClient
from agefix.config import ClientConfig
from agefix.errors import (
    BalanceLookupError,
    DeploymentError,
    ExecutionError,
    GasEstimateError,
    MissingCredentialError,
    ReceiptLookupError,
    TransportError,
)
from agefix.models import Address, Amount, QueryResult, TransactionResult

from conftest import ErrorTransport, FakeTransport

TOKEN_SOURCE = "contract Token { }"

DEPLOY_OK = {"contractAddress": "0xabc", "txHash": "0x1", "blockNumber": 10}
EXECUTE_OK = {"txHash": "0x2", "blockNumber": 11, "gasUsed": 21000}


# ---------------------------------------------------------------------------
# Scenario: deploy then execute against the returned address
# ---------------------------------------------------------------------------


class TestDeployThenExecute:
    @pytest.mark.asyncio
    async def test_scenario(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/deploy": DEPLOY_OK, "/execute": EXECUTE_OK, "/query": {"result": "100"}}

        deployment = await client.deploy(TOKEN_SOURCE, [])
        assert deployment.contract_address == "0xabc"
        assert deployment.transaction_hash == "0x1"
        assert deployment.block_number == 10

        result = await client.execute(deployment.contract_address, "transfer", ["0xdef", "100"])
        assert result == TransactionResult(tx_hash="0x2", block_number=11, gas_used=21000, success=True)

        balance = await client.query(deployment.contract_address, "balanceOf", ["0xdef"])
        assert balance == QueryResult.ok("100")

        _, _, execute_payload = transport.calls[1]
        assert execute_payload["contractAddress"] == "0xabc"
        _, query_path, query_payload = transport.calls[2]
        assert query_path == "/query"
        assert query_payload["contractAddress"] == "0xabc"

    @pytest.mark.asyncio
    async def test_deploy_payload(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/deploy": DEPLOY_OK}
        await client.deploy(TOKEN_SOURCE, ["Health", 18])

        method, path, payload = transport.calls[0]
        assert (method, path) == ("POST", "/deploy")
        assert payload["code"] == TOKEN_SOURCE
        assert payload["args"] == ["Health", 18]
        assert payload["chainId"] == "agefix-mainnet-1"
        assert payload["privateKey"] == "k1"
        assert payload["idempotencyKey"]

    @pytest.mark.asyncio
    async def test_execute_payload(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/execute": EXECUTE_OK}
        await client.execute("0xabc", "transfer", [Address("0xdef"), Amount.of(100)], value=5)

        _, path, payload = transport.calls[0]
        assert path == "/execute"
        assert payload == {
            "contractAddress": "0xabc",
            "method": "transfer",
            "args": ["0xdef", "100"],
            "value": "5",
            "chainId": "agefix-mainnet-1",
            "privateKey": "k1",
            "idempotencyKey": payload["idempotencyKey"],
        }

    @pytest.mark.asyncio
    async def test_execute_value_defaults_to_zero_string(
        self, client: LedgerClient, transport: FakeTransport
    ) -> None:
        transport.responses = {"/execute": EXECUTE_OK}
        await client.execute("0xabc", "ping")
        payload = transport.calls[0][2]
        assert payload["value"] == "0"
        assert payload["args"] == []


# ---------------------------------------------------------------------------
# Idempotency keys
# ---------------------------------------------------------------------------


class TestIdempotencyKey:
    @pytest.mark.asyncio
    async def test_fresh_key_per_write(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/execute": EXECUTE_OK}
        await client.execute("0xabc", "transfer", ["0xdef", "1"])
        await client.execute("0xabc", "transfer", ["0xdef", "1"])
        keys = [call[2]["idempotencyKey"] for call in transport.calls]
        assert keys[0] != keys[1]

    @pytest.mark.asyncio
    async def test_caller_key_is_forwarded(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/execute": EXECUTE_OK, "/deploy": DEPLOY_OK}
        await client.execute("0xabc", "transfer", ["0xdef", "1"], idempotency_key="retry-1")
        await client.deploy(TOKEN_SOURCE, idempotency_key="retry-2")
        assert transport.calls[0][2]["idempotencyKey"] == "retry-1"
        assert transport.calls[1][2]["idempotencyKey"] == "retry-2"


# ---------------------------------------------------------------------------
# Credential gating
# ---------------------------------------------------------------------------


class TestMissingCredential:
    @pytest.mark.asyncio
    async def test_execute_without_credential_sends_nothing(
        self, readonly_config: ClientConfig
    ) -> None:
        transport = FakeTransport({"/execute": EXECUTE_OK})
        client = LedgerClient(readonly_config, transport=transport)

        with pytest.raises(MissingCredentialError):
            await client.execute("0xabc", "transfer", ["0xdef", "100"])
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_deploy_without_credential_sends_nothing(
        self, readonly_config: ClientConfig
    ) -> None:
        transport = FakeTransport({"/deploy": DEPLOY_OK})
        client = LedgerClient(readonly_config, transport=transport)

        with pytest.raises(MissingCredentialError):
            await client.deploy(TOKEN_SOURCE, [])
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_empty_credential_counts_as_missing(self) -> None:
        transport = FakeTransport()
        client = LedgerClient(
            ClientConfig(endpoint="https://rpc.test", credential=""), transport=transport
        )
        with pytest.raises(MissingCredentialError):
            await client.execute("0xabc", "transfer")
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_reads_need_no_credential(self, readonly_config: ClientConfig) -> None:
        transport = FakeTransport(
            {
                "/query": {"result": "100"},
                "/balance/0xdef": {"balance": "42"},
                "/estimateGas": {"gasEstimate": 21000},
                "/tx/0x2": {"txHash": "0x2", "blockNumber": 11, "gasUsed": 21000, "status": "success"},
            }
        )
        client = LedgerClient(readonly_config, transport=transport)

        assert (await client.query("0xabc", "balanceOf", ["0xdef"])).success
        assert await client.get_balance("0xdef") == "42"
        assert await client.estimate_gas("0xabc", "transfer", ["0xdef", "1"]) == 21000
        assert (await client.get_receipt("0x2")).block_number == 11
        assert all("privateKey" not in (call[2] or {}) for call in transport.calls)


# ---------------------------------------------------------------------------
# Query: failures are values, never raised
# ---------------------------------------------------------------------------


class TestQuery:
    @pytest.mark.asyncio
    async def test_success(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/query": {"result": "100"}}
        result = await client.query("0xabc", "balanceOf", ["0xdef"])
        assert result == QueryResult(success=True, data="100", error=None)

        _, path, payload = transport.calls[0]
        assert path == "/query"
        assert payload == {
            "contractAddress": "0xabc",
            "method": "balanceOf",
            "args": ["0xdef"],
            "chainId": "agefix-mainnet-1",
        }

    @pytest.mark.asyncio
    async def test_transport_error_is_in_band(self, config: ClientConfig) -> None:
        client = LedgerClient(config, transport=ErrorTransport(TransportError("method not found")))
        result = await client.query("0xabc", "balanceOf", ["0xdef"])
        assert result == QueryResult(success=False, data=None, error="method not found")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [
            TransportError("Request timed out after 30.0s"),
            TransportError("contract not found", status_code=404),
            TransportError("HTTP 500", status_code=500),
        ],
    )
    async def test_never_raises(self, config: ClientConfig, exc: TransportError) -> None:
        client = LedgerClient(config, transport=ErrorTransport(exc))
        result = await client.query("0xabc", "maybeExists")
        assert result.success is False
        assert result.data is None
        assert result.error == str(exc)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("endpoint", ["http://[::1", "http://a\x00b"])
    async def test_malformed_endpoint_is_in_band(self, endpoint: str) -> None:
        client = LedgerClient(ClientConfig(endpoint=endpoint, credential="k1"))

        result = await client.query("0xabc", "balanceOf", ["0xdef"])
        assert result.success is False
        assert result.error.startswith("Request failed: ")

        with pytest.raises(ExecutionError, match="Transaction execution failed: Request failed: "):
            await client.execute("0xabc", "transfer")
        with pytest.raises(BalanceLookupError):
            await client.get_balance("0xdef")

    @pytest.mark.asyncio
    async def test_float_argument_is_rejected(self, client: LedgerClient, transport: FakeTransport) -> None:
        with pytest.raises(TypeError):
            await client.query("0xabc", "balanceOf", [1.5])
        assert transport.calls == []


# ---------------------------------------------------------------------------
# Write failures propagate with operation prefixes
# ---------------------------------------------------------------------------


class TestWriteErrors:
    @pytest.mark.asyncio
    async def test_deployment_error(self, config: ClientConfig) -> None:
        transport = ErrorTransport(TransportError("insufficient funds for gas", status_code=400))
        client = LedgerClient(config, transport=transport)

        with pytest.raises(DeploymentError) as exc_info:
            await client.deploy(TOKEN_SOURCE)
        assert str(exc_info.value) == "Contract deployment failed: insufficient funds for gas"
        assert exc_info.value.cause == "insufficient funds for gas"
        assert isinstance(exc_info.value.__cause__, TransportError)
        assert transport.calls == ["/deploy"]

    @pytest.mark.asyncio
    async def test_execution_error_single_attempt(self, config: ClientConfig) -> None:
        transport = ErrorTransport(TransportError("Request timed out after 30.0s"))
        client = LedgerClient(config, transport=transport)

        with pytest.raises(ExecutionError) as exc_info:
            await client.execute("0xabc", "transfer", ["0xdef", "100"])
        assert str(exc_info.value).startswith("Transaction execution failed: ")
        assert "timed out" in str(exc_info.value)
        assert transport.calls == ["/execute"]

    @pytest.mark.asyncio
    async def test_malformed_execute_response(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/execute": {"blockNumber": 11}}
        with pytest.raises(ExecutionError, match="txHash"):
            await client.execute("0xabc", "transfer")

    @pytest.mark.asyncio
    async def test_float_value_rejected_before_request(
        self, client: LedgerClient, transport: FakeTransport
    ) -> None:
        with pytest.raises(TypeError):
            await client.execute("0xabc", "deposit", value=0.1)
        assert transport.calls == []


# ---------------------------------------------------------------------------
# Receipts, balances, gas
# ---------------------------------------------------------------------------


class TestReceipt:
    @pytest.mark.asyncio
    async def test_found(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {
            "/tx/0x2": {
                "txHash": "0x2",
                "blockNumber": 11,
                "gasUsed": 21000,
                "status": "SUCCESS",
                "logs": [{"event": "Transfer"}],
                "from": "0x123",
            }
        }
        receipt = await client.get_receipt("0x2")
        assert receipt.tx_hash == "0x2"
        assert receipt.status == "success"
        assert receipt.succeeded
        assert receipt.logs == [{"event": "Transfer"}]
        assert receipt.raw["from"] == "0x123"
        assert transport.calls == [("GET", "/tx/0x2", None)]

    @pytest.mark.asyncio
    async def test_found_without_gas_data(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/tx/0x3": {"txHash": "0x3", "status": "pending"}}
        receipt = await client.get_receipt("0x3")
        assert receipt.block_number is None
        assert receipt.gas_used is None
        assert receipt.status == "pending"
        assert not receipt.succeeded

    @pytest.mark.asyncio
    async def test_unknown_hash(self, client: LedgerClient) -> None:
        with pytest.raises(ReceiptLookupError) as exc_info:
            await client.get_receipt("0xdead")
        assert str(exc_info.value).startswith("Failed to get transaction receipt: ")


class TestBalance:
    @pytest.mark.asyncio
    async def test_string_balance(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/balance/0xdef": {"balance": "1000000000000000000000000"}}
        balance = await client.get_balance("0xdef")
        assert balance == "1000000000000000000000000"
        assert isinstance(balance, str)

    @pytest.mark.asyncio
    async def test_numeric_balances_become_strings(
        self, client: LedgerClient, transport: FakeTransport
    ) -> None:
        transport.responses = {"/balance/0xa": {"balance": 42}, "/balance/0xb": {"balance": Decimal("0.50")}}
        assert await client.get_balance("0xa") == "42"
        assert await client.get_balance("0xb") == "0.5"

    @pytest.mark.asyncio
    async def test_float_balance_is_rejected(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/balance/0xdef": {"balance": 1.5}}
        with pytest.raises(BalanceLookupError):
            await client.get_balance("0xdef")

    @pytest.mark.asyncio
    async def test_missing_balance(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/balance/0xdef": {}}
        with pytest.raises(BalanceLookupError, match="Failed to get balance: "):
            await client.get_balance("0xdef")


class TestEstimateGas:
    @pytest.mark.asyncio
    async def test_estimate(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/estimateGas": {"gasEstimate": 52000}}
        assert await client.estimate_gas("0xabc", "transfer", ["0xdef", "1"]) == 52000

        _, path, payload = transport.calls[0]
        assert path == "/estimateGas"
        assert "privateKey" not in payload
        assert payload["chainId"] == "agefix-mainnet-1"

    @pytest.mark.asyncio
    async def test_hex_estimate(self, client: LedgerClient, transport: FakeTransport) -> None:
        transport.responses = {"/estimateGas": {"gasEstimate": "0x5208"}}
        assert await client.estimate_gas("0xabc", "transfer") == 21000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("estimate", [Decimal("21000.9"), 21000.9, True, None])
    async def test_malformed_estimate(
        self, client: LedgerClient, transport: FakeTransport, estimate
    ) -> None:
        transport.responses = {"/estimateGas": {"gasEstimate": estimate}}
        with pytest.raises(GasEstimateError, match="gasEstimate"):
            await client.estimate_gas("0xabc", "transfer")

    @pytest.mark.asyncio
    async def test_failure(self, config: ClientConfig) -> None:
        client = LedgerClient(config, transport=ErrorTransport(TransportError("execution reverted")))
        with pytest.raises(GasEstimateError, match="Failed to estimate gas: execution reverted"):
            await client.estimate_gas("0xabc", "transfer")
