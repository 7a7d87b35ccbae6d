"""Client for the decentralized document storage gateway."""

from .client import StorageGatewayClient
from .errors import (
    MissingPieceCidError,
    StorageContextError,
    StorageError,
    StorageGatewayError,
    StorageNetworkError,
    TransactionFailedError,
)
from .models import NetworkInfo, StorageContext, TransactionReceipt, UploadResult

__all__ = [
    "MissingPieceCidError",
    "NetworkInfo",
    "StorageContext",
    "StorageContextError",
    "StorageError",
    "StorageGatewayClient",
    "StorageGatewayError",
    "StorageNetworkError",
    "TransactionFailedError",
    "TransactionReceipt",
    "UploadResult",
]
