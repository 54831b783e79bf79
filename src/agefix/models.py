from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence, Union

from .utils import decimal_string

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]+$")


@dataclass(frozen=True)
class Address:
    """A 0x-prefixed hex account or contract address."""

    value: str

    def __post_init__(self) -> None:
        if not _ADDRESS_RE.match(self.value):
            raise ValueError(f"Invalid address: {self.value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Amount:
    """A token amount, always carried as a decimal string."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", decimal_string(self.value))

    @classmethod
    def of(cls, value: Union[int, str, Decimal, "Amount"]) -> "Amount":
        if isinstance(value, Amount):
            return value
        return cls(value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.value


LedgerValue = Union[str, bool, int, Address, Amount]


def encode_value(value: LedgerValue) -> Any:
    """Convert a ledger value to its JSON wire form."""
    if isinstance(value, (Address, Amount)):
        return value.value
    if isinstance(value, float):
        raise TypeError(f"Floats are not ledger values, use Amount: {value!r}")
    if isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, Decimal):
        return decimal_string(value)
    raise TypeError(f"Unsupported ledger value: {type(value).__name__}")


def encode_args(args: Optional[Sequence[LedgerValue]]) -> list[Any]:
    if args is None:
        return []
    if isinstance(args, (str, bytes)):
        raise TypeError("Arguments must be a sequence of ledger values")
    return [encode_value(arg) for arg in args]


def amount_field(payload: Mapping[str, Any], key: str) -> str:
    """Read an amount field from a response as a decimal string."""
    if payload.get(key) is None:
        raise ValueError(f"Response missing '{key}'")
    return decimal_string(payload[key])


def int_field(payload: Mapping[str, Any], key: str) -> int:
    """Read an integer field; accepts ints, integral decimals and hex strings."""
    raw = payload.get(key)
    if raw is None:
        raise ValueError(f"Response missing '{key}'")
    if isinstance(raw, bool):
        raise ValueError(f"Field '{key}' is not an integer: {raw!r}")
    if isinstance(raw, str):
        return int(raw, 16) if raw.startswith("0x") else int(raw)
    if isinstance(raw, Decimal) and (not raw.is_finite() or raw != raw.to_integral_value()):
        raise ValueError(f"Field '{key}' is not an integer: {raw}")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"Field '{key}' is not an integer: {raw!r}")
    return int(raw)


def _optional_int_field(payload: Mapping[str, Any], key: str) -> Optional[int]:
    if payload.get(key) is None:
        return None
    return int_field(payload, key)


def _str_field(payload: Mapping[str, Any], key: str) -> str:
    raw = payload.get(key)
    if not raw:
        raise ValueError(f"Response missing '{key}'")
    return str(raw)


@dataclass(frozen=True)
class DeploymentResult:
    contract_address: str
    transaction_hash: str
    block_number: int

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "DeploymentResult":
        return cls(
            contract_address=_str_field(payload, "contractAddress"),
            transaction_hash=_str_field(payload, "txHash"),
            block_number=int_field(payload, "blockNumber"),
        )


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a read-only call. Failures are carried in-band."""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> "QueryResult":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: str) -> "QueryResult":
        return cls(success=False, data=None, error=error)


@dataclass(frozen=True)
class TransactionResult:
    tx_hash: str
    block_number: int
    gas_used: int
    success: bool = True

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "TransactionResult":
        return cls(
            tx_hash=_str_field(payload, "txHash"),
            block_number=int_field(payload, "blockNumber"),
            gas_used=int_field(payload, "gasUsed"),
            success=True,
        )


@dataclass(frozen=True)
class Receipt:
    """A finalized transaction record as reported by the ledger.

    ``raw`` keeps the full response so fields this client does not model
    stay reachable. ``block_number`` and ``gas_used`` are None when the
    ledger omits them.
    """

    tx_hash: str
    block_number: Optional[int]
    gas_used: Optional[int]
    status: str
    logs: list[Any] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any], tx_hash: str) -> "Receipt":
        status = payload.get("status", "unknown")
        if isinstance(status, bool):
            status = "success" if status else "failed"
        return cls(
            tx_hash=str(payload.get("txHash") or tx_hash),
            block_number=_optional_int_field(payload, "blockNumber"),
            gas_used=_optional_int_field(payload, "gasUsed"),
            status=str(status).lower(),
            logs=list(payload.get("logs") or []),
            raw=dict(payload),
        )

    @property
    def succeeded(self) -> bool:
        return self.status in ("success", "1", "0x1")


__all__ = [
    "Address",
    "Amount",
    "DeploymentResult",
    "LedgerValue",
    "QueryResult",
    "Receipt",
    "TransactionResult",
    "encode_args",
    "encode_value",
    "int_field",
]
