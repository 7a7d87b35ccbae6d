"""
API Schemas.

This module contains Pydantic models used for API request bodies and response validation.
These schemas define the interface contract between the web UI and the server.

Wei amounts are serialized as decimal strings: they routinely exceed the
range JavaScript numbers represent exactly.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tenderchain.chain import BidInfo, TenderDetails, TenderInfo
from tenderchain.core.utils import parse_tender_description, timestamp_to_iso, wei_to_eth


class TenderSummary(BaseModel):
    """A tender as shown in the listing and on the tender lookup endpoint."""

    id: int = Field(..., description="1-based tender identifier.", examples=[1])
    description: str = Field(..., description="Raw on-chain description string.")
    title: str = Field(default="", description="Title decoded from the description.")
    summary: str = Field(default="", description="Free-text description decoded from the description.")
    deadline: str = Field(default="", description="Deadline decoded from the description.")
    status: str = Field(default="", description="Status decoded from the description.")
    budget: str = Field(..., description="Budget in wei.", examples=["1000000000000000000"])
    budget_eth: str = Field(..., description="Budget in ether.", examples=["1"])
    requirements_cid: str = Field(..., description="Storage CID of the requirements document.")
    government: str = Field(..., description="Address of the publishing government account.")
    is_active: bool = Field(..., description="Whether the tender accepts bids.")

    @classmethod
    def from_details(cls, tender_id: int, details: TenderDetails) -> "TenderSummary":
        decoded = parse_tender_description(details.description)
        return cls(
            id=tender_id,
            description=details.description,
            title=decoded.title,
            summary=decoded.description,
            deadline=decoded.deadline,
            status=decoded.status,
            budget=str(details.budget),
            budget_eth=wei_to_eth(details.budget),
            requirements_cid=details.requirements_cid,
            government=details.government,
            is_active=details.is_active,
        )


class TenderListResponse(BaseModel):
    success: bool = True
    tenders: List[TenderSummary]
    cached: bool = Field(..., description="True when served from the in-process cache.")
    warning: Optional[str] = Field(default=None, description="Set when stale data is served after a failure.")


class TenderResponse(BaseModel):
    success: bool = True
    tender: TenderSummary


class TenderInfoOut(BaseModel):
    """Full tender record including its bids."""

    id: int
    description: str
    title: str = ""
    summary: str = ""
    deadline: str = ""
    status: str = ""
    budget: str
    budget_eth: str
    requirements_cid: str
    completed: bool
    bid_ids: List[int]
    creator: str
    created_at: int = Field(..., description="Unix timestamp (seconds).")
    created_at_iso: str

    @classmethod
    def from_info(cls, tender_id: int, info: TenderInfo) -> "TenderInfoOut":
        decoded = parse_tender_description(info.description)
        return cls(
            id=tender_id,
            description=info.description,
            title=decoded.title,
            summary=decoded.description,
            deadline=decoded.deadline,
            status=decoded.status,
            budget=str(info.budget),
            budget_eth=wei_to_eth(info.budget),
            requirements_cid=info.requirements_cid,
            completed=info.completed,
            bid_ids=list(info.bid_ids),
            creator=info.creator,
            created_at=info.created_at,
            created_at_iso=timestamp_to_iso(info.created_at),
        )


class TenderInfoResponse(BaseModel):
    success: bool = True
    tender: TenderInfoOut


class BidOut(BaseModel):
    id: int
    tender_id: int
    vendor: str
    price: str = Field(..., description="Bid price in wei.")
    price_eth: str
    description: str
    proposal_cid: str
    status: int = Field(..., description="0 pending, 1 accepted, 2 rejected.")
    status_label: str = Field(..., examples=["Pending", "Accepted", "Rejected", "Unknown"])
    submitted_at: int = Field(..., description="Unix timestamp (seconds).")

    @classmethod
    def from_info(cls, bid_id: int, bid: BidInfo) -> "BidOut":
        return cls(
            id=bid_id,
            tender_id=bid.tender_id,
            vendor=bid.vendor,
            price=str(bid.price),
            price_eth=wei_to_eth(bid.price),
            description=bid.description,
            proposal_cid=bid.proposal_cid,
            status=bid.status,
            status_label=bid.status_label,
            submitted_at=bid.submitted_at,
        )


class BidResponse(BaseModel):
    success: bool = True
    bid: BidOut


class BidListResponse(BaseModel):
    success: bool = True
    tender_id: int
    bids: List[BidOut]


class TenderAction(BaseModel):
    """Body of ``POST /tenders``."""

    action: Any = Field(default=None, examples=["invalidate-cache"])

    model_config = ConfigDict(json_schema_extra={"example": {"action": "invalidate-cache"}})


class ActionResponse(BaseModel):
    success: bool = True
    message: str


class UploadResponse(BaseModel):
    cid: str = Field(..., description="Piece CID of the stored document.")
    filename: str
    size: int
    type: str


class AccountRoles(BaseModel):
    address: str
    is_government: bool
    is_admin: bool


class FeeOut(BaseModel):
    wei: str
    eth: str


class FeesResponse(BaseModel):
    tender_creation: FeeOut
    bid_submission: FeeOut


class NetworkResponse(BaseModel):
    chain_id: int
    name: str
    tender_contract: str
    bid_contract: str


class TenderDescriptionIn(BaseModel):
    """Fields the UI encodes into the ``createTender`` description argument."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    deadline: str = Field(..., min_length=1, examples=["2026-12-31"])
    status: Literal["open", "closed", "awarded"] = "open"

    @field_validator("title", "description")
    @classmethod
    def no_separator(cls, v: str) -> str:
        if "|" in v:
            raise ValueError("must not contain '|', it separates the encoded fields")
        return v


class TenderDescriptionOut(BaseModel):
    encoded: str
