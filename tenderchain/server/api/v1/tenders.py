"""
Tender API Endpoints.

Read-side view of the tender registry contract: the cached listing, single
tender lookups and the bids attached to a tender. Tender creation is a
wallet-signed contract write issued by the browser; afterwards the UI posts
``invalidate-cache`` here so the new tender shows up immediately.
"""

import asyncio

from fastapi import APIRouter, HTTPException, status

from tenderchain.chain import ChainError, InvalidTenderIdError
from tenderchain.core.logging_config import get_logger
from tenderchain.core.utils import format_tender_description, is_future_date
from tenderchain.server.schemas import (
    ActionResponse,
    BidListResponse,
    BidOut,
    TenderAction,
    TenderDescriptionIn,
    TenderDescriptionOut,
    TenderInfoOut,
    TenderInfoResponse,
    TenderListResponse,
    TenderResponse,
    TenderSummary,
)
from tenderchain.server.services.deps import BidReaderDep, TenderCatalogDep, TenderRegistryDep
from tenderchain.server.services.tender_catalog import TenderCatalogUnavailableError

logger = get_logger(__name__)

router = APIRouter()

INVALIDATE_CACHE = "invalidate-cache"


def _check_tender_id(tender_id: int) -> None:
    if tender_id < 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid tender ID")


@router.get(
    "",
    response_model=TenderListResponse,
    response_model_exclude_none=True,
    summary="List Tenders",
    description="List every tender in the registry, served from a short-lived cache.",
    responses={
        200: {"description": "Tender listing (possibly stale, see `warning`)"},
        500: {"description": "The chain could not be read and nothing is cached"},
    },
)
async def list_tenders(catalog: TenderCatalogDep) -> TenderListResponse:
    """
    List all tenders.

    Fresh results are cached for a few minutes. When the RPC node fails or
    times out, the last successful listing is returned with a `warning`.
    """
    try:
        result = await catalog.list_tenders()
    except TenderCatalogUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch tenders. Please try again later.", "details": str(e)},
        ) from e

    return TenderListResponse(
        tenders=[TenderSummary.from_details(t.id, t.details) for t in result.tenders],
        cached=result.cached,
        warning=result.warning,
    )


@router.post(
    "",
    response_model=ActionResponse,
    summary="Tender Listing Actions",
    description="Run a maintenance action on the tender listing. Supported: `invalidate-cache`.",
    responses={400: {"description": "Unknown action"}},
)
async def tender_action(body: TenderAction, catalog: TenderCatalogDep) -> ActionResponse:
    if body.action == INVALIDATE_CACHE:
        catalog.invalidate()
        return ActionResponse(message="Cache invalidated")
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")


@router.post(
    "/encode-description",
    response_model=TenderDescriptionOut,
    summary="Encode Tender Description",
    description="Build the description string passed to `createTender`.",
    responses={400: {"description": "Deadline is malformed or not in the future"}},
)
async def encode_description(body: TenderDescriptionIn) -> TenderDescriptionOut:
    try:
        upcoming = is_future_date(body.deadline)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid deadline") from e
    if not upcoming:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Deadline must be in the future")
    return TenderDescriptionOut(
        encoded=format_tender_description(body.title, body.description, body.deadline, body.status)
    )


@router.get(
    "/{tender_id}",
    response_model=TenderResponse,
    summary="Get Tender",
    description="Read a single tender's summary record directly from the contract.",
    responses={
        400: {"description": "Invalid tender ID"},
        404: {"description": "Tender not found"},
        500: {"description": "Contract read failed"},
    },
)
async def get_tender(tender_id: int, registry: TenderRegistryDep) -> TenderResponse:
    _check_tender_id(tender_id)
    try:
        details = await registry.get_tender_details(tender_id)
    except InvalidTenderIdError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tender not found") from e
    except ChainError as e:
        logger.error(f"Error fetching tender {tender_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch tender"
        ) from e
    return TenderResponse(tender=TenderSummary.from_details(tender_id, details))


@router.get(
    "/{tender_id}/info",
    response_model=TenderInfoResponse,
    summary="Get Tender Record",
    description="Read the full tender record, including completion state, creator and bid ids.",
    responses={
        400: {"description": "Invalid tender ID"},
        404: {"description": "Tender not found"},
        500: {"description": "Contract read failed"},
    },
)
async def get_tender_info(tender_id: int, registry: TenderRegistryDep) -> TenderInfoResponse:
    _check_tender_id(tender_id)
    try:
        info = await registry.get_tender_info(tender_id)
    except InvalidTenderIdError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tender not found") from e
    except ChainError as e:
        logger.error(f"Error fetching tender record {tender_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch tender"
        ) from e
    return TenderInfoResponse(tender=TenderInfoOut.from_info(tender_id, info))


@router.get(
    "/{tender_id}/bids",
    response_model=BidListResponse,
    summary="List Tender Bids",
    description="Read every bid submitted to a tender. Bids that cannot be read are left out.",
    responses={
        400: {"description": "Invalid tender ID"},
        404: {"description": "Tender not found"},
        500: {"description": "Contract read failed"},
    },
)
async def list_tender_bids(
    tender_id: int, registry: TenderRegistryDep, bids: BidReaderDep
) -> BidListResponse:
    _check_tender_id(tender_id)
    try:
        info = await registry.get_tender_info(tender_id)
    except InvalidTenderIdError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tender not found") from e
    except ChainError as e:
        logger.error(f"Error fetching tender record {tender_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch tender"
        ) from e

    results = await asyncio.gather(*(bids.get_bid_info(b) for b in info.bid_ids), return_exceptions=True)

    found: list[BidOut] = []
    for bid_id, result in zip(info.bid_ids, results):
        if isinstance(result, ChainError):
            logger.warning(f"Skipping bid {bid_id} of tender {tender_id}: {result}")
            continue
        if isinstance(result, BaseException):
            raise result
        found.append(BidOut.from_info(bid_id, result))
    return BidListResponse(tender_id=tender_id, bids=found)
