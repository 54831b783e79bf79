__version__ = "1.0.0"

__all__ = [
    # Client
    "LedgerClient",
    "ClientConfig",
    # Transport
    "HttpTransport",
    "HttpxTransport",
    # Results and values
    "Address",
    "Amount",
    "DeploymentResult",
    "LedgerValue",
    "QueryResult",
    "Receipt",
    "TransactionResult",
    # Helpers
    "NFTHelper",
    "TokenHelper",
    "nft_source",
    "token_source",
    # Errors
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

from .client import LedgerClient
from .config import ClientConfig
from .contracts import NFTHelper, TokenHelper, nft_source, token_source
from .errors import (
    AgefixError,
    BalanceLookupError,
    ConfigError,
    DeploymentError,
    ExecutionError,
    GasEstimateError,
    MissingCredentialError,
    NotDeployedError,
    OperationError,
    QueryError,
    ReceiptLookupError,
    TransportError,
)
from .models import (
    Address,
    Amount,
    DeploymentResult,
    LedgerValue,
    QueryResult,
    Receipt,
    TransactionResult,
)
from .transport import HttpTransport, HttpxTransport
