"""
Bid API Endpoints.

Read access to individual bids on the bid submission contract. Submitting
and accepting bids are wallet-signed writes issued from the browser.
"""

from fastapi import APIRouter, HTTPException, status

from tenderchain.chain import ChainError, InvalidBidIdError
from tenderchain.core.logging_config import get_logger
from tenderchain.server.schemas import BidOut, BidResponse
from tenderchain.server.services.deps import BidReaderDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/{bid_id}",
    response_model=BidResponse,
    summary="Get Bid",
    description="Read a single bid from the bid submission contract.",
    response_description="The bid, with prices in wei and ether and a readable status label.",
    responses={
        400: {"description": "Invalid bid ID"},
        404: {"description": "Bid not found"},
        500: {"description": "Contract read failed"},
    },
)
async def get_bid(bid_id: int, bids: BidReaderDep) -> BidResponse:
    """
    Get a bid by ID.

    - **status**: `0` pending, `1` accepted, `2` rejected; `status_label` spells it out.
    - **proposal_cid**: storage CID of the vendor's proposal document.
    """
    if bid_id < 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid bid ID")
    try:
        bid = await bids.get_bid_info(bid_id)
    except InvalidBidIdError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bid not found") from e
    except ChainError as e:
        logger.error(f"Error fetching bid {bid_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch bid") from e
    return BidResponse(bid=BidOut.from_info(bid_id, bid))
