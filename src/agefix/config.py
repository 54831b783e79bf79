from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .credentials import CREDENTIAL_VAR, load_env_file
from .errors import ConfigError

DEFAULT_RPC_URL = "https://rpc.agefix.com"
DEFAULT_CHAIN_ID = "agefix-mainnet-1"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for a LedgerClient.

    Attributes:
        endpoint: Base URL of the ledger RPC service
        chain_id: Chain identifier sent with every request
        credential: Signing key; required for deploy/execute only
        timeout: Per-request bound in seconds
    """

    endpoint: str
    chain_id: str = DEFAULT_CHAIN_ID
    credential: Optional[str] = field(default=None, repr=False)
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ConfigError("endpoint must not be empty")
        if not self.chain_id:
            raise ConfigError("chain_id must not be empty")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")

    @property
    def has_credential(self) -> bool:
        return bool(self.credential)

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "ClientConfig":
        """Build a config from AGEFIX_* variables and ~/.agefix/.env."""
        load_env_file(env_path)

        raw_timeout = os.environ.get("AGEFIX_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"AGEFIX_TIMEOUT is not a number: {raw_timeout!r}") from None

        return cls(
            endpoint=os.environ.get("AGEFIX_RPC_URL", DEFAULT_RPC_URL),
            chain_id=os.environ.get("AGEFIX_CHAIN_ID", DEFAULT_CHAIN_ID),
            credential=os.environ.get(CREDENTIAL_VAR) or None,
            timeout=timeout,
        )
