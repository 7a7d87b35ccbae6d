"""Read-only access to the tender registry and bid submission contracts."""

from .base import BidReader, TenderRegistryReader
from .client import BidSubmissionClient, TenderRegistryClient, build_web3
from .errors import (
    ChainConnectionError,
    ChainError,
    ContractRevertError,
    InvalidBidIdError,
    InvalidTenderIdError,
)
from .models import BidInfo, BidStatus, TenderDetails, TenderInfo

__all__ = [
    "BidInfo",
    "BidReader",
    "BidStatus",
    "BidSubmissionClient",
    "ChainConnectionError",
    "ChainError",
    "ContractRevertError",
    "InvalidBidIdError",
    "InvalidTenderIdError",
    "TenderDetails",
    "TenderInfo",
    "TenderRegistryClient",
    "TenderRegistryReader",
    "build_web3",
]
