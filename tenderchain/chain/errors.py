"""Error types raised by the contract readers.

Purpose:
- Turn web3.py failures into a small hierarchy the service layer can branch on.
- Keep the contract function name and revert payload around for diagnosis.

Usage:
- Catch ``InvalidTenderIdError`` / ``InvalidBidIdError`` to answer 404.
- Catch ``ChainError`` for everything else that went wrong talking to the node.
"""

from __future__ import annotations

from typing import Any, Optional


class ChainError(Exception):
    """Base error for contract reads.

    Args:
        message: Human-readable error description.
        function: Contract function that was being called.
        details: Optional revert data or underlying error text.
    """

    def __init__(self, message: str, *, function: Optional[str] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.function = function
        self.details = details


class ChainConnectionError(ChainError):
    """The RPC node could not be reached or answered with a transport-level failure."""


class ContractRevertError(ChainError):
    """The contract call reverted."""


class InvalidTenderIdError(ContractRevertError):
    """The tender registry rejected the requested tender id."""

    def __init__(self, tender_id: int, *, details: Optional[Any] = None) -> None:
        super().__init__(f"InvalidTenderId: {tender_id}", function="getTenderDetails", details=details)
        self.tender_id = tender_id


class InvalidBidIdError(ContractRevertError):
    """The bid submission contract rejected the requested bid id."""

    def __init__(self, bid_id: int, *, details: Optional[Any] = None) -> None:
        super().__init__(f"InvalidBidId: {bid_id}", function="getBidInfo", details=details)
        self.bid_id = bid_id
