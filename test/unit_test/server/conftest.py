from __future__ import annotations

import asyncio
from typing import AsyncGenerator, Callable, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tenderchain.chain import BidInfo, InvalidBidIdError, InvalidTenderIdError, TenderDetails, TenderInfo
from tenderchain.core.utils import DEFAULT_ADMIN_ROLE, GOVERNMENT_ROLE
from tenderchain.server.services.document_service import DocumentService
from tenderchain.server.services.tender_catalog import TenderCatalog
from tenderchain.storage import StorageGatewayClient

GOV_ADDRESS = "0x00000000000000000000000000000000000000aA"
VENDOR_ADDRESS = "0x00000000000000000000000000000000000000bB"


def make_details(n: int, *, active: bool = True) -> TenderDetails:
    return TenderDetails(
        description=f"Road repair {n}|Resurface segment {n}|Deadline: 2030-01-0{n % 9 + 1}|Status: open",
        budget=n * 10**18,
        requirements_cid=f"baga-req-{n}",
        government=GOV_ADDRESS,
        is_active=active,
    )


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTenderRegistry:
    """In-memory tender registry with failure and latency knobs."""

    def __init__(self, tenders: Optional[list[TenderDetails]] = None) -> None:
        self.tenders: list[TenderDetails] = list(tenders or [])
        self.infos: dict[int, TenderInfo] = {}
        self.roles: set[tuple[str, str]] = set()
        self.fee = 10**16
        self.count_override: Optional[int] = None
        self.count_error: Optional[Exception] = None
        self.count_delay = 0.0
        self.detail_errors: dict[int, Exception] = {}
        self.detail_delay = 0.0
        self.count_calls = 0
        self.detail_calls: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_tender_count(self) -> int:
        self.count_calls += 1
        if self.count_delay:
            await asyncio.sleep(self.count_delay)
        if self.count_error is not None:
            raise self.count_error
        return len(self.tenders) if self.count_override is None else self.count_override

    async def get_tender_details(self, tender_id: int) -> TenderDetails:
        self.detail_calls.append(tender_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.detail_delay)
            if tender_id in self.detail_errors:
                raise self.detail_errors[tender_id]
            if tender_id < 1 or tender_id > len(self.tenders):
                raise InvalidTenderIdError(tender_id)
            return self.tenders[tender_id - 1]
        finally:
            self.in_flight -= 1

    async def get_tender_info(self, tender_id: int) -> TenderInfo:
        if tender_id in self.detail_errors:
            raise self.detail_errors[tender_id]
        if tender_id not in self.infos:
            raise InvalidTenderIdError(tender_id)
        return self.infos[tender_id]

    async def has_role(self, role: str, account: str) -> bool:
        return (role, account.lower()) in self.roles

    async def service_fee(self) -> int:
        return self.fee

    def grant(self, role: str, account: str) -> None:
        self.roles.add((role, account.lower()))


class FakeBidReader:
    def __init__(self) -> None:
        self.bids: dict[int, BidInfo] = {}
        self.errors: dict[int, Exception] = {}
        self.fee = 5 * 10**15

    async def get_bid_info(self, bid_id: int) -> BidInfo:
        if bid_id in self.errors:
            raise self.errors[bid_id]
        if bid_id not in self.bids:
            raise InvalidBidIdError(bid_id)
        return self.bids[bid_id]

    async def service_fee(self) -> int:
        return self.fee


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry() -> FakeTenderRegistry:
    return FakeTenderRegistry([make_details(n) for n in range(1, 4)])


@pytest.fixture
def bid_reader() -> FakeBidReader:
    return FakeBidReader()


@pytest.fixture
def details_factory() -> Callable[..., TenderDetails]:
    return make_details


@pytest.fixture
def roles() -> dict[str, str]:
    return {"government": GOVERNMENT_ROLE, "admin": DEFAULT_ADMIN_ROLE}


@pytest.fixture
def catalog(registry: FakeTenderRegistry, clock: FakeClock) -> TenderCatalog:
    return TenderCatalog(registry, ttl_seconds=300, batch_size=10, count_timeout=1.0, fetch_timeout=2.0, clock=clock)


class StorageGatewayStub:
    """Request handler emulating the storage gateway for ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.payments_ready = True
        self.commp: Optional[str] = "baga6ea4seaqpiece"
        self.fail_paths: dict[str, int] = {}
        self.fail_bodies: dict[str, dict] = {}
        self.unreachable_paths: set[str] = set()
        self.requests: list[tuple[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))
        if path in self.unreachable_paths:
            raise httpx.ConnectError("connection refused", request=request)
        if path in self.fail_paths:
            body = self.fail_bodies.get(path, {"error": "forced failure"})
            return httpx.Response(self.fail_paths[path], json=body)
        if request.method == "GET" and path == "/network":
            return httpx.Response(200, json={"network": "calibration", "serviceAddress": "0xService"})
        if request.method == "POST" and path == "/storage":
            if not self.payments_ready:
                return httpx.Response(402, json={"error": "payments not configured"})
            return httpx.Response(200, json={"storageId": "ctx-1", "provider": "sp-1"})
        if request.method == "POST" and path == "/storage/ctx-1/upload":
            body = {"size": len(request.content)}
            if self.commp:
                body["commp"] = self.commp
            return httpx.Response(200, json=body)
        if request.method == "POST" and path == "/payments/deposit":
            return httpx.Response(200, json={"txHash": "0xdeposit"})
        if request.method == "POST" and path == "/payments/approve-service":
            self.payments_ready = True
            return httpx.Response(200, json={"txHash": "0xapprove"})
        if request.method == "GET" and path.startswith("/transactions/"):
            return httpx.Response(200, json={"txHash": path.rsplit("/", 1)[-1], "status": "confirmed"})
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def storage_stub() -> StorageGatewayStub:
    return StorageGatewayStub()


@pytest.fixture
def storage_client_factory(storage_stub: StorageGatewayStub) -> Callable[..., StorageGatewayClient]:
    def build(auth_token: Optional[str] = "test-token") -> StorageGatewayClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(storage_stub), base_url="http://mock")
        return StorageGatewayClient("http://mock", auth_token=auth_token, client=http)

    return build


@pytest.fixture
def document_service(storage_client_factory) -> DocumentService:
    return DocumentService(storage_client_factory())


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    catalog: TenderCatalog,
    registry: FakeTenderRegistry,
    bid_reader: FakeBidReader,
    document_service: DocumentService,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with in-memory contract readers and a stubbed storage gateway."""
    from tenderchain.server.main import app
    from tenderchain.server.services.deps import (
        get_bid_reader,
        get_document_service,
        get_tender_catalog,
        get_tender_registry,
    )

    app.dependency_overrides[get_tender_catalog] = lambda: catalog
    app.dependency_overrides[get_tender_registry] = lambda: registry
    app.dependency_overrides[get_bid_reader] = lambda: bid_reader
    app.dependency_overrides[get_document_service] = lambda: document_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
