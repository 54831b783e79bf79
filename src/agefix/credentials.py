"""
Signing credential management for the AgeFix client.

The credential is a secp256k1 private key in hex form. The ledger service
signs write transactions with it, so the client only stores it, sends it
with writes, and derives the account address from it for display.

Keys are stored in ~/.agefix/.env as AGEFIX_PRIVATE_KEY.
"""

from __future__ import annotations

import os
import secrets
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account


# Default config directory
AGEFIX_DIR = Path.home() / ".agefix"
AGEFIX_ENV = AGEFIX_DIR / ".env"

CREDENTIAL_VAR = "AGEFIX_PRIVATE_KEY"


def load_env_file(env_path: Optional[Path] = None) -> None:
    """Load ~/.agefix/.env into the process environment if it exists.

    Variables already set in the environment win over the file.
    """
    env_path = env_path or AGEFIX_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def generate_key() -> tuple[str, str]:
    """
    Generate a new secp256k1 keypair.

    Returns:
        Tuple of (private_key_hex, address)
    """
    private_key = "0x" + secrets.token_hex(32)
    account = Account.from_key(private_key)
    return private_key, account.address


def save_credential(private_key: str, env_path: Optional[Path] = None) -> Path:
    """
    Save the private key to the .env file, keeping other entries.

    Args:
        private_key: 0x-prefixed hex private key
        env_path: Path to .env file (default: ~/.agefix/.env)

    Returns:
        Path to the saved .env file
    """
    env_path = env_path or AGEFIX_ENV
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing = {}
    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                existing[k.strip()] = v.strip()

    existing[CREDENTIAL_VAR] = private_key

    lines = [f"{k}={v}" for k, v in existing.items()]
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    # Set secure permissions on Unix
    if os.name != "nt":
        env_path.chmod(0o600)

    return env_path


def load_credential(env_path: Optional[Path] = None) -> Optional[str]:
    """
    Load the private key from the environment or the .env file.

    Returns:
        The credential, or None when none is configured. Read-only use
        of the client does not need one.
    """
    load_env_file(env_path)
    credential = os.environ.get(CREDENTIAL_VAR)
    return credential or None


def get_address(private_key: str) -> str:
    """
    Derive the checksummed account address for a hex private key.

    Raises:
        ValueError: If the credential is not a valid secp256k1 key
    """
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key
    try:
        return Account.from_key(private_key).address
    except Exception as exc:
        raise ValueError(f"Credential is not a valid private key: {exc}") from exc
