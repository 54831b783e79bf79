"""
Error taxonomy for the AgeFix client.

Local precondition failures (missing credential, helper without an
address) are raised before any request is made. Everything else is
raised after the single transport attempt completes and wraps the
transport's message with an operation-specific prefix.

``exit_code`` is the status the ``agefix`` CLI exits with.
"""

from __future__ import annotations


class AgefixError(RuntimeError):
    exit_code: int = 1


class ConfigError(AgefixError):
    exit_code = 2


class MissingCredentialError(AgefixError):
    exit_code = 3

    def __init__(self, operation: str) -> None:
        super().__init__(f"Private key required for {operation}")
        self.operation = operation


class TransportError(AgefixError):
    """HTTP-level failure: connection error, timeout or non-2xx response.

    ``status_code`` is None when no response was received.
    """

    exit_code = 4

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OperationError(AgefixError):
    exit_code = 5
    prefix: str = "Operation failed"

    def __init__(self, cause: str) -> None:
        super().__init__(f"{self.prefix}: {cause}")
        self.cause = cause


class DeploymentError(OperationError):
    prefix = "Contract deployment failed"


class ExecutionError(OperationError):
    prefix = "Transaction execution failed"


class ReceiptLookupError(OperationError):
    prefix = "Failed to get transaction receipt"


class BalanceLookupError(OperationError):
    prefix = "Failed to get balance"


class GasEstimateError(OperationError):
    prefix = "Failed to estimate gas"


class QueryError(OperationError):
    prefix = "Contract query failed"


class NotDeployedError(AgefixError):
    exit_code = 6

    def __init__(self, helper: str) -> None:
        super().__init__(f"{helper} contract not deployed")
        self.helper = helper


__all__ = [
    "AgefixError",
    "BalanceLookupError",
    "ConfigError",
    "DeploymentError",
    "ExecutionError",
    "GasEstimateError",
    "MissingCredentialError",
    "NotDeployedError",
    "OperationError",
    "QueryError",
    "ReceiptLookupError",
    "TransportError",
]
