"""Wire models for the storage gateway API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StorageContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    storage_id: str = Field(alias="storageId")
    provider: Optional[str] = None


class UploadResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    commp: Optional[str] = None
    size: Optional[int] = None


class TransactionReceipt(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tx_hash: str = Field(alias="txHash")
    status: str = "submitted"


class NetworkInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    network: str
    service_address: str = Field(alias="serviceAddress")


class DepositRequest(BaseModel):
    amount: str = Field(description="Amount in token base units, as a decimal string")
    token: str = "USDFC"


class ApproveServiceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    service: str
    rate_allowance: str = Field(alias="rateAllowance")
    lockup_allowance: str = Field(alias="lockupAllowance")
