"""
Service Dependencies.

Provides process-wide instances of the contract readers, the tender catalog
and the document service for API endpoints. Tests replace them through
``app.dependency_overrides``.
"""

from typing import Annotated, Optional

from fastapi import Depends
from web3 import AsyncWeb3

from tenderchain.chain import (
    BidReader,
    BidSubmissionClient,
    TenderRegistryClient,
    TenderRegistryReader,
    build_web3,
)
from tenderchain.server.core.config import settings
from tenderchain.server.services.document_service import DocumentService
from tenderchain.server.services.tender_catalog import TenderCatalog
from tenderchain.storage import StorageGatewayClient

_web3: Optional[AsyncWeb3] = None
_tender_registry: Optional[TenderRegistryClient] = None
_bid_reader: Optional[BidSubmissionClient] = None
_catalog: Optional[TenderCatalog] = None
_document_service: Optional[DocumentService] = None


def _get_web3() -> AsyncWeb3:
    global _web3
    if _web3 is None:
        _web3 = build_web3(settings.chain.rpc_url)
    return _web3


def get_tender_registry() -> TenderRegistryReader:
    global _tender_registry
    if _tender_registry is None:
        _tender_registry = TenderRegistryClient(_get_web3(), settings.chain.tender_contract_address)
    return _tender_registry


def get_bid_reader() -> BidReader:
    global _bid_reader
    if _bid_reader is None:
        _bid_reader = BidSubmissionClient(_get_web3(), settings.chain.bid_contract_address)
    return _bid_reader


def get_tender_catalog() -> TenderCatalog:
    global _catalog
    if _catalog is None:
        cfg = settings.catalog
        _catalog = TenderCatalog(
            get_tender_registry(),
            ttl_seconds=cfg.ttl_seconds,
            batch_size=cfg.batch_size,
            count_timeout=cfg.count_timeout,
            fetch_timeout=cfg.fetch_timeout,
        )
    return _catalog


def get_document_service() -> DocumentService:
    global _document_service
    if _document_service is None:
        cfg = settings.storage
        client = StorageGatewayClient(cfg.gateway_url, auth_token=cfg.api_token, timeout=cfg.timeout)
        _document_service = DocumentService(
            client,
            service_address=cfg.service_address,
            payment_token=cfg.payment_token,
            deposit_amount=cfg.deposit_amount,
            rate_allowance=cfg.rate_allowance,
            lockup_allowance=cfg.lockup_allowance,
        )
    return _document_service


TenderRegistryDep = Annotated[TenderRegistryReader, Depends(get_tender_registry)]
BidReaderDep = Annotated[BidReader, Depends(get_bid_reader)]
TenderCatalogDep = Annotated[TenderCatalog, Depends(get_tender_catalog)]
DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]


async def close_services() -> None:
    """Release network clients held by the singletons."""
    global _document_service
    if _document_service is not None:
        await _document_service.aclose()
        _document_service = None
