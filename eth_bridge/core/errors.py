"""
Error Classification

Error types raised by the bridge flow. Every error carries a category so the
batch runner can summarise why wallets failed.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """Categories of errors for reporting."""

    CONFIG = "config"             # Key file / settings problems
    NETWORK = "network"           # Network/connectivity issues
    PROVIDER = "provider"         # No usable RPC endpoint
    TIMEOUT = "timeout"           # Operation timed out
    INSUFFICIENT_FUNDS = "insufficient_funds"  # Not enough balance
    QUOTE = "quote"               # Quote API failure
    EXECUTION = "execution"       # Signing/submission/revert failure
    HTTP = "http"                 # Non-success HTTP status
    RPC = "rpc"                   # JSON-RPC error object
    UNKNOWN = "unknown"           # Unclassified error


class BridgeError(Exception):
    """Base class for all bridge errors."""

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigLoadError(BridgeError):
    """Private key file could not be read."""

    category = ErrorCategory.CONFIG


class NoProviderAvailable(BridgeError):
    """No RPC candidate answered the liveness probe."""

    category = ErrorCategory.PROVIDER

    def __init__(self, chain_id: int, message: Optional[str] = None):
        super().__init__(
            message or f"No working RPC found for chain {chain_id}",
            details={"chain_id": chain_id},
        )
        self.chain_id = chain_id


class InsufficientBalance(BridgeError):
    """Wallet balance is below the requested bridge amount."""

    category = ErrorCategory.INSUFFICIENT_FUNDS

    def __init__(self, required: str, available: str):
        super().__init__(
            f"Insufficient balance. Required: {required} ETH, Available: {available} ETH",
            details={"required": required, "available": available},
        )
        self.required = required
        self.available = available


class QuoteFailed(BridgeError):
    category = ErrorCategory.QUOTE


class ExecutionFailed(BridgeError):
    category = ErrorCategory.EXECUTION


class StatusPollTimeout(BridgeError):
    """Status polling exhausted its attempt budget."""

    category = ErrorCategory.TIMEOUT

    def __init__(self, request_id: str, attempts: int, interval_seconds: float):
        minutes = attempts * interval_seconds / 60
        super().__init__(
            f"Bridge status check timed out after {minutes:g} minutes",
            details={"request_id": request_id, "attempts": attempts},
        )
        self.request_id = request_id
        self.attempts = attempts


class HttpError(BridgeError):
    """Non-success HTTP status from a Relay endpoint."""

    category = ErrorCategory.HTTP

    def __init__(self, status_code: int, url: str = "", body: str = ""):
        super().__init__(
            f"HTTP error! status: {status_code}",
            details={"url": url, "body": body[:500]},
        )
        self.status_code = status_code


class RpcError(BridgeError):
    """JSON-RPC response carried an error object."""

    category = ErrorCategory.RPC

    def __init__(self, method: str, error: Any):
        super().__init__(f"RPC error in {method}: {error}", details={"method": method, "error": error})
        self.method = method
        self.error = error


def classify_error(error: Exception) -> ErrorCategory:
    """
    Classify an exception for the end-of-run summary.

    Bridge errors carry their own category; anything else is matched on
    its message.
    """
    if isinstance(error, BridgeError):
        return error.category

    message = str(error).lower()

    network_patterns = [
        "connection",
        "network",
        "unreachable",
        "refused",
        "dns",
        "ssl",
    ]
    if any(p in message for p in network_patterns):
        return ErrorCategory.NETWORK

    if any(p in message for p in ("timeout", "timed out", "deadline")):
        return ErrorCategory.TIMEOUT

    if any(p in message for p in ("insufficient", "not enough", "exceeds balance")):
        return ErrorCategory.INSUFFICIENT_FUNDS

    return ErrorCategory.UNKNOWN
