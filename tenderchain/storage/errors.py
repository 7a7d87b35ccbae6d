"""Error types specific to the storage gateway layer.

Purpose:
- Provide typed exceptions thrown by ``StorageGatewayClient``.
- Expose HTTP-oriented context (status code, error body) for diagnosis.

Usage:
- Catch ``StorageContextError`` when the gateway refuses to open a storage
  context; that is the signal that payments have not been set up yet.
- Catch ``StorageError`` for everything else.
"""

from __future__ import annotations

from typing import Any, Optional


class StorageError(Exception):
    """Base error for storage gateway failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload from the gateway (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class StorageGatewayError(StorageError):
    """The gateway answered with a non-success status."""


class StorageNetworkError(StorageError):
    """The gateway could not be reached (connection refused, timeout, DNS)."""


class StorageContextError(StorageGatewayError):
    """Opening a storage context failed, usually because payments are not set up."""


class MissingPieceCidError(StorageError):
    """The gateway accepted the upload but returned no piece CID."""

    def __init__(self) -> None:
        super().__init__("Upload failed - no CID returned by the storage gateway")


class TransactionFailedError(StorageGatewayError):
    """A payment transaction submitted through the gateway did not confirm."""

    def __init__(self, tx_hash: str, status: str) -> None:
        super().__init__(f"Transaction {tx_hash} finished with status {status}", details={"status": status})
        self.tx_hash = tx_hash
