from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .errors import (
    StorageContextError,
    StorageGatewayError,
    StorageNetworkError,
    TransactionFailedError,
)
from .models import (
    ApproveServiceRequest,
    DepositRequest,
    NetworkInfo,
    StorageContext,
    TransactionReceipt,
    UploadResult,
)


class StorageGatewayClient:
    """
    Thin async HTTP client for the decentralized storage gateway.

    Responsibilities:
    - get_network
    - create_storage
    - upload
    - deposit / approve_service / wait_for_transaction (payment setup)

    The gateway holds the funded wallet; this client authenticates with a
    bearer token and never sees key material.
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth_token: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self, content_type: str = "application/json") -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": content_type}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text.strip()
        if isinstance(body, dict):
            reason = body.get("error") or body.get("message") or body.get("detail")
            if reason:
                return str(reason)
        return response.text.strip()

    async def _request(self, method: str, path: str, *, error_cls=StorageGatewayError, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = await self._client.request(method, url, **kwargs)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            reason = self._error_reason(e.response)
            message = f"Storage gateway {method} {path} failed: {e.response.status_code}"
            raise error_cls(
                f"{message} {reason}" if reason else message,
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.TransportError as e:
            raise StorageNetworkError(f"Storage gateway network error on {method} {path}: {e}") from e
        return r.json() if r.content else {}

    async def get_network(self) -> NetworkInfo:
        self._logger.debug("StorageGatewayClient.get_network: GET %s/network", self.base_url)
        data = await self._request("GET", "/network", headers=self._headers())
        return NetworkInfo.model_validate(data)

    async def create_storage(self) -> StorageContext:
        self._logger.debug("StorageGatewayClient.create_storage: POST %s/storage", self.base_url)
        try:
            data = await self._request("POST", "/storage", error_cls=StorageContextError, headers=self._headers())
        except StorageContextError as e:
            raise StorageContextError(
                f"createStorage failed: {e}", status_code=e.status_code, details=e.details
            ) from e
        context = StorageContext.model_validate(data)
        self._logger.debug("StorageGatewayClient.create_storage: storage_id=%s", context.storage_id)
        return context

    async def upload(self, storage_id: str, data: bytes) -> UploadResult:
        self._logger.debug(
            "StorageGatewayClient.upload: POST %s/storage/%s/upload bytes=%d", self.base_url, storage_id, len(data)
        )
        payload = await self._request(
            "POST",
            f"/storage/{storage_id}/upload",
            headers=self._headers("application/octet-stream"),
            content=data,
        )
        return UploadResult.model_validate(payload)

    async def deposit(self, amount: int, token: str = "USDFC") -> TransactionReceipt:
        body = DepositRequest(amount=str(amount), token=token)
        self._logger.debug("StorageGatewayClient.deposit: amount=%s token=%s", body.amount, token)
        data = await self._request("POST", "/payments/deposit", headers=self._headers(), json=body.model_dump())
        return TransactionReceipt.model_validate(data)

    async def approve_service(self, service: str, rate_allowance: int, lockup_allowance: int) -> TransactionReceipt:
        body = ApproveServiceRequest(
            service=service, rate_allowance=str(rate_allowance), lockup_allowance=str(lockup_allowance)
        )
        self._logger.debug("StorageGatewayClient.approve_service: service=%s", service)
        data = await self._request(
            "POST", "/payments/approve-service", headers=self._headers(), json=body.model_dump(by_alias=True)
        )
        return TransactionReceipt.model_validate(data)

    async def wait_for_transaction(self, tx_hash: str) -> TransactionReceipt:
        """Block until the gateway reports the transaction as final."""
        data = await self._request(
            "GET", f"/transactions/{tx_hash}", headers=self._headers(), params={"wait": "true"}
        )
        receipt = TransactionReceipt.model_validate(data)
        if receipt.status != "confirmed":
            raise TransactionFailedError(tx_hash, receipt.status)
        return receipt

    async def aclose(self) -> None:
        await self._client.aclose()
