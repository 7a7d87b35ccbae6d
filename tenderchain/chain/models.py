"""Typed records for contract return values.

web3.py returns multi-output calls as plain tuples in ABI order. These models
name the fields once so the rest of the server never indexes into a tuple.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field


class BidStatus(IntEnum):
    pending = 0
    accepted = 1
    rejected = 2

    @classmethod
    def label_for(cls, value: int) -> str:
        try:
            return cls(value).name.capitalize()
        except ValueError:
            return "Unknown"


class TenderDetails(BaseModel):
    """Result of ``getTenderDetails(tenderId)``."""

    model_config = ConfigDict(frozen=True)

    description: str
    budget: int = Field(ge=0)
    requirements_cid: str
    government: str
    is_active: bool

    @classmethod
    def from_tuple(cls, raw: Sequence) -> "TenderDetails":
        description, budget, requirements_cid, government, is_active = raw
        return cls(
            description=description,
            budget=int(budget),
            requirements_cid=requirements_cid,
            government=government,
            is_active=bool(is_active),
        )


class TenderInfo(BaseModel):
    """Result of ``getTenderInfo(tenderId)``, the full tender record."""

    model_config = ConfigDict(frozen=True)

    description: str
    budget: int = Field(ge=0)
    requirements_cid: str
    completed: bool
    bid_ids: tuple[int, ...]
    creator: str
    created_at: int

    @classmethod
    def from_tuple(cls, raw: Sequence) -> "TenderInfo":
        description, budget, requirements_cid, completed, bid_ids, creator, created_at = raw
        return cls(
            description=description,
            budget=int(budget),
            requirements_cid=requirements_cid,
            completed=bool(completed),
            bid_ids=tuple(int(b) for b in bid_ids),
            creator=creator,
            created_at=int(created_at),
        )


class BidInfo(BaseModel):
    """Result of ``getBidInfo(bidId)``."""

    model_config = ConfigDict(frozen=True)

    tender_id: int
    vendor: str
    price: int = Field(ge=0)
    description: str
    proposal_cid: str
    status: int
    submitted_at: int

    @classmethod
    def from_tuple(cls, raw: Sequence) -> "BidInfo":
        tender_id, vendor, price, description, proposal_cid, status, submitted_at = raw
        return cls(
            tender_id=int(tender_id),
            vendor=vendor,
            price=int(price),
            description=description,
            proposal_cid=proposal_cid,
            status=int(status),
            submitted_at=int(submitted_at),
        )

    @property
    def status_label(self) -> str:
        return BidStatus.label_for(self.status)
