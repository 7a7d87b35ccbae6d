"""Reader interface contracts.

The service layer depends on these Protocols instead of the web3.py
implementations, so tests can swap in in-memory readers.

Contract guidelines
-------------------

- All methods are async and read-only.
- Reverts surface as ``ContractRevertError`` subclasses; an unknown id raises
  ``InvalidTenderIdError`` / ``InvalidBidIdError``.
- Transport failures surface as ``ChainConnectionError``.
"""

from __future__ import annotations

from typing import Protocol

from .models import BidInfo, TenderDetails, TenderInfo


class TenderRegistryReader(Protocol):
    """Read access to the tender registry contract."""

    async def get_tender_count(self) -> int:
        """Return the number of tenders ever created (ids run ``1..count``)."""
        ...

    async def get_tender_details(self, tender_id: int) -> TenderDetails:
        """
        Read the summary record of a tender.

        Args:
            tender_id: The 1-based tender identifier.
        """
        ...

    async def get_tender_info(self, tender_id: int) -> TenderInfo:
        """
        Read the full record of a tender, including its bid ids.

        Args:
            tender_id: The 1-based tender identifier.
        """
        ...

    async def has_role(self, role: str, account: str) -> bool:
        """
        Check an AccessControl role.

        Args:
            role: 0x-prefixed 32-byte role hash.
            account: Account address.
        """
        ...

    async def service_fee(self) -> int:
        """Return the fee in wei charged for creating a tender."""
        ...


class BidReader(Protocol):
    """Read access to the bid submission contract."""

    async def get_bid_info(self, bid_id: int) -> BidInfo:
        """
        Read a single bid.

        Args:
            bid_id: The bid identifier.
        """
        ...

    async def service_fee(self) -> int:
        """Return the fee in wei charged for submitting a bid."""
        ...
