"""
Unit tests for FastAPI application lifespan management.

Startup only logs the chain configuration; shutdown must release the storage
gateway client held by the service singletons.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from tenderchain.server.main import app, lifespan

pytestmark = pytest.mark.asyncio


async def test_shutdown_closes_services():
    with patch("tenderchain.server.main.close_services", new_callable=AsyncMock) as mock_close:
        async with lifespan(app):
            mock_close.assert_not_awaited()

    mock_close.assert_awaited_once()


async def test_startup_logs_chain_configuration():
    with patch("tenderchain.server.main.close_services", new_callable=AsyncMock), patch(
        "tenderchain.server.main.logger"
    ) as mock_logger:
        async with lifespan(FastAPI()):
            pass

    startup_message = mock_logger.info.call_args_list[0][0][0]
    assert "chain_id=" in startup_message
    assert "tender_contract=" in startup_message


async def test_close_services_releases_document_service():
    from tenderchain.server.services import deps

    service = AsyncMock()
    with patch.object(deps, "_document_service", service):
        await deps.close_services()
        assert deps._document_service is None

    service.aclose.assert_awaited_once()
