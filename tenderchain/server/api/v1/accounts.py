"""
Account and Network Endpoints.

Role lookups, service fees and network metadata the UI needs before it asks
the wallet to sign a contract write.
"""

import asyncio

from fastapi import APIRouter, HTTPException, status

from tenderchain.chain import ChainError
from tenderchain.core.logging_config import get_logger
from tenderchain.core.utils import (
    DEFAULT_ADMIN_ROLE,
    get_government_role_hash,
    get_network_name,
    is_valid_address,
    wei_to_eth,
)
from tenderchain.server.core.config import settings
from tenderchain.server.schemas import AccountRoles, FeeOut, FeesResponse, NetworkResponse
from tenderchain.server.services.deps import BidReaderDep, TenderRegistryDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/accounts/{address}/roles",
    response_model=AccountRoles,
    summary="Get Account Roles",
    description="Check whether an address may publish tenders (government) or manage roles (admin).",
    responses={
        400: {"description": "Invalid Ethereum address"},
        500: {"description": "Contract read failed"},
    },
)
async def get_account_roles(address: str, registry: TenderRegistryDep) -> AccountRoles:
    if not is_valid_address(address):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid Ethereum address")
    try:
        is_government, is_admin = await asyncio.gather(
            registry.has_role(get_government_role_hash(), address),
            registry.has_role(DEFAULT_ADMIN_ROLE, address),
        )
    except ChainError as e:
        logger.error(f"Error reading roles for {address}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch roles") from e
    return AccountRoles(address=address, is_government=is_government, is_admin=is_admin)


@router.get(
    "/fees",
    response_model=FeesResponse,
    summary="Get Service Fees",
    description="Fees (in wei and ether) attached to tender creation and bid submission.",
    responses={500: {"description": "Contract read failed"}},
)
async def get_fees(registry: TenderRegistryDep, bids: BidReaderDep) -> FeesResponse:
    try:
        tender_fee, bid_fee = await asyncio.gather(registry.service_fee(), bids.service_fee())
    except ChainError as e:
        logger.error(f"Error reading service fees: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch fees") from e
    return FeesResponse(
        tender_creation=FeeOut(wei=str(tender_fee), eth=wei_to_eth(tender_fee)),
        bid_submission=FeeOut(wei=str(bid_fee), eth=wei_to_eth(bid_fee)),
    )


@router.get(
    "/network",
    response_model=NetworkResponse,
    summary="Get Network",
    description="Chain and contract addresses this server reads from.",
)
async def get_network() -> NetworkResponse:
    chain = settings.chain
    return NetworkResponse(
        chain_id=chain.chain_id,
        name=get_network_name(chain.chain_id),
        tender_contract=chain.tender_contract_address,
        bid_contract=chain.bid_contract_address,
    )
