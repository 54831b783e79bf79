from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterator, Optional

import pytest

from agefix.client import LedgerClient
from agefix.config import ClientConfig
from agefix.errors import TransportError


class FakeTransport:
    """Returns canned responses per path and records every call."""

    def __init__(self, responses: Optional[dict[str, Any]] = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, str, Optional[dict[str, Any]]]] = []

    async def post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("POST", path, payload))
        return self._respond(path)

    async def get_json(self, path: str) -> dict[str, Any]:
        self.calls.append(("GET", path, None))
        return self._respond(path)

    def _respond(self, path: str) -> dict[str, Any]:
        response = self.responses.get(path)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise TransportError(f"no canned response for {path}", status_code=404)
        return response


class ErrorTransport:
    """Raises the given exception on every call."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc
        self.calls: list[str] = []

    async def post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(path)
        raise self._exc

    async def get_json(self, path: str) -> dict[str, Any]:
        self.calls.append(path)
        raise self._exc


_ENV_VARS = (
    "AGEFIX_RPC_URL",
    "AGEFIX_CHAIN_ID",
    "AGEFIX_PRIVATE_KEY",
    "AGEFIX_TIMEOUT",
    "AGEFIX_TOKEN_ADDRESS",
    "AGEFIX_NFT_ADDRESS",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Keep the user's ~/.agefix/.env and AGEFIX_* variables out of tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    env_path = tmp_path / ".agefix" / ".env"
    monkeypatch.setattr("agefix.credentials.AGEFIX_ENV", env_path)
    yield env_path
    # load_dotenv writes straight to os.environ
    for var in _ENV_VARS:
        os.environ.pop(var, None)


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(endpoint="https://rpc.test", chain_id="agefix-mainnet-1", credential="k1")


@pytest.fixture()
def readonly_config() -> ClientConfig:
    return ClientConfig(endpoint="https://rpc.test", chain_id="agefix-mainnet-1")


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def client(config: ClientConfig, transport: FakeTransport) -> LedgerClient:
    return LedgerClient(config, transport=transport)
