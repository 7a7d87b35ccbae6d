"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenderchain import __version__
from tenderchain.core.logging_config import get_logger, setup_logging
from tenderchain.core.monitoring import initialize_logfire

from .api.v1 import accounts, bids, documents, health, tenders
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware
from .services.deps import close_services

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Logs the chain the server reads from on startup and releases the storage
    gateway client on shutdown.
    """
    chain = settings.chain
    logger.info(
        f"Starting up TenderChain Server (chain_id={chain.chain_id}, "
        f"tender_contract={chain.tender_contract_address}, bid_contract={chain.bid_contract_address})"
    )

    yield

    logger.info("Shutting down TenderChain Server...")
    await close_services()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    TenderChain Server API

    Backend for the government tender marketplace. Lists tenders and bids from the
    on-chain registry and stores tender and proposal documents on decentralized storage.
    """,
    version=__version__,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(tenders.router, prefix=f"{constant.API_V1_STR}/tenders", tags=["tenders"])
app.include_router(bids.router, prefix=f"{constant.API_V1_STR}/bids", tags=["bids"])
app.include_router(documents.router, prefix=constant.API_V1_STR, tags=["documents"])
app.include_router(accounts.router, prefix=constant.API_V1_STR, tags=["accounts"])
