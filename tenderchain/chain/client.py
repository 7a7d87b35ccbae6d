from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError, Web3Exception

from .abi import BID_SUBMISSION_ABI, TENDER_REGISTRY_ABI
from .errors import (
    ChainConnectionError,
    ChainError,
    ContractRevertError,
    InvalidBidIdError,
    InvalidTenderIdError,
)
from .models import BidInfo, TenderDetails, TenderInfo


def build_web3(rpc_url: str) -> AsyncWeb3:
    """Create an async web3 instance for the given JSON-RPC endpoint."""
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


def error_selector(signature: str) -> str:
    """Return the 4-byte selector of a custom error signature as ``0x``-prefixed hex."""
    return Web3.to_hex(Web3.keccak(text=signature)[:4])


def _revert_mentions(exc: ContractLogicError, name: str, selector: str) -> bool:
    if name in str(exc):
        return True
    data = getattr(exc, "data", None)
    if isinstance(data, (bytes, bytearray)):
        data = Web3.to_hex(data)
    return isinstance(data, str) and data.lower().startswith(selector.lower())


class _ContractReader:
    """
    Shared call plumbing for the read-only contract clients.

    Wraps ``contract.functions.<name>(*args).call()`` and translates web3.py
    failures: reverts become ``ContractRevertError`` (or the id-specific error
    built from ``invalid_error``); RPC errors, non-2xx node responses and
    timeouts become ``ChainConnectionError``.
    """

    _abi: list[dict[str, Any]] = []

    def __init__(self, w3: AsyncWeb3, address: str) -> None:
        self.address = Web3.to_checksum_address(address)
        self._contract = w3.eth.contract(address=self.address, abi=self._abi)
        self._logger = logging.getLogger(__name__)

    async def _call(
        self,
        function: str,
        *args: Any,
        invalid_error: Optional[tuple[str, Callable[[Any], ChainError]]] = None,
    ) -> Any:
        self._logger.debug("%s.%s: call %s%r", type(self).__name__, function, self.address, args)
        try:
            return await getattr(self._contract.functions, function)(*args).call()
        except ContractLogicError as e:
            if invalid_error is not None:
                name, build = invalid_error
                if _revert_mentions(e, name, error_selector(f"{name}()")):
                    raise build(getattr(e, "data", None)) from e
            raise ContractRevertError(
                f"{function} reverted: {e}", function=function, details=getattr(e, "data", None)
            ) from e
        except (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise ChainConnectionError(f"{function} failed: {e}", function=function, details=str(e)) from e


class TenderRegistryClient(_ContractReader):
    """web3.py reader for the tender registry contract."""

    _abi = TENDER_REGISTRY_ABI

    async def get_tender_count(self) -> int:
        return int(await self._call("getTenderCount"))

    async def get_tender_details(self, tender_id: int) -> TenderDetails:
        raw = await self._call(
            "getTenderDetails",
            tender_id,
            invalid_error=("InvalidTenderId", lambda data: InvalidTenderIdError(tender_id, details=data)),
        )
        return TenderDetails.from_tuple(raw)

    async def get_tender_info(self, tender_id: int) -> TenderInfo:
        raw = await self._call(
            "getTenderInfo",
            tender_id,
            invalid_error=("InvalidTenderId", lambda data: InvalidTenderIdError(tender_id, details=data)),
        )
        return TenderInfo.from_tuple(raw)

    async def has_role(self, role: str, account: str) -> bool:
        return bool(await self._call("hasRole", Web3.to_bytes(hexstr=role), Web3.to_checksum_address(account)))

    async def service_fee(self) -> int:
        return int(await self._call("serviceFee"))


class BidSubmissionClient(_ContractReader):
    """web3.py reader for the bid submission contract."""

    _abi = BID_SUBMISSION_ABI

    async def get_bid_info(self, bid_id: int) -> BidInfo:
        raw = await self._call(
            "getBidInfo",
            bid_id,
            invalid_error=("InvalidBidId", lambda data: InvalidBidIdError(bid_id, details=data)),
        )
        return BidInfo.from_tuple(raw)

    async def service_fee(self) -> int:
        return int(await self._call("serviceFee"))
