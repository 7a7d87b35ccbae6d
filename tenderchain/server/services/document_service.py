"""
Document Upload Service.

Validates tender requirement documents and bid proposals, then stores them
through the storage gateway and returns the piece CID that the browser writes
into the contract.

The gateway refuses to open a storage context until the server wallet has
deposited payment tokens and approved the storage service. The first upload on
a fresh wallet therefore runs that one-time setup and retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tenderchain.core.logging_config import get_logger
from tenderchain.core.utils import (
    eth_to_wei,
    is_valid_file_size,
    is_valid_file_type,
)
from tenderchain.storage import (
    MissingPieceCidError,
    StorageContext,
    StorageContextError,
    StorageError,
    StorageGatewayClient,
)

logger = get_logger(__name__)

PAYMENT_SETUP_MESSAGE = (
    "Payment setup failed. Please ensure the storage wallet has sufficient FIL and USDFC tokens."
)

INSUFFICIENT_FUNDS_MESSAGE = (
    "Insufficient funds for document storage. Please ensure the storage wallet has FIL and USDFC tokens."
)


class DocumentRejectedError(ValueError):
    """The uploaded file failed validation and was never sent to storage."""


class StorageNotConfiguredError(RuntimeError):
    """The server has no storage gateway credential."""


class PaymentSetupError(StorageError):
    """Depositing funds or approving the storage service failed."""


@dataclass(frozen=True)
class StoredDocument:
    cid: str
    filename: str
    size: int
    type: str


def validate_document(filename: Optional[str], content_type: Optional[str], size: int) -> None:
    """
    Check an upload before any network call.

    Raises:
        DocumentRejectedError: With the message shown to the user.
    """
    if not filename:
        raise DocumentRejectedError("No file uploaded")
    if not is_valid_file_size(size):
        raise DocumentRejectedError("File size exceeds 10MB limit")
    if not is_valid_file_type(content_type):
        raise DocumentRejectedError("Invalid file type. Only PDF, DOC, DOCX, and TXT files are allowed")


def classify_upload_error(exc: Exception) -> tuple[int, str]:
    """Map an unexpected upload failure to an HTTP status and a user-facing message."""
    if isinstance(exc, PaymentSetupError):
        return 402, PAYMENT_SETUP_MESSAGE

    message = str(exc)
    lowered = message.lower()
    if "private key" in lowered:
        return 500, "Invalid private key configuration"
    if "network" in lowered or "connection" in lowered:
        return 503, "Network error - unable to connect to the storage network"
    if (
        "insufficient funds" in lowered
        or "balance" in lowered
        or getattr(exc, "status_code", None) == 402
    ):
        return 402, INSUFFICIENT_FUNDS_MESSAGE
    if "createStorage failed" in message:
        return 500, "Storage service setup failed. This may require additional configuration or tokens."
    return 500, "Upload failed. Please try again later."


class DocumentService:
    """Stores validated documents through the storage gateway."""

    def __init__(
        self,
        client: StorageGatewayClient,
        *,
        service_address: Optional[str] = None,
        payment_token: str = "USDFC",
        deposit_amount: str = "5",
        rate_allowance: str = "1",
        lockup_allowance: str = "5",
    ) -> None:
        self._client = client
        self._service_address = service_address
        self._payment_token = payment_token
        self._deposit_amount = deposit_amount
        self._rate_allowance = rate_allowance
        self._lockup_allowance = lockup_allowance

    async def upload(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> StoredDocument:
        """
        Validate and store a document.

        Raises:
            DocumentRejectedError: The file failed validation.
            StorageNotConfiguredError: No gateway credential is configured.
            PaymentSetupError: The storage context needed payment setup and it failed.
            StorageError: Any other gateway failure.
        """
        validate_document(filename, content_type, len(data))

        if not self._client.auth_token:
            logger.error("STORAGE_API_TOKEN is not set")
            raise StorageNotConfiguredError("Server configuration error")

        try:
            context = await self._client.create_storage()
            logger.info("Storage context created")
        except StorageContextError:
            logger.info("Storage context creation failed, attempting payment setup...")
            try:
                await self._setup_payments()
                context = await self._client.create_storage()
                logger.info("Storage context created after payment setup")
            except StorageError as e:
                logger.error(f"Payment setup failed: {e}", exc_info=True)
                raise PaymentSetupError(str(e), status_code=e.status_code, details=e.details) from e

        return await self._store(context, filename, content_type, data)

    async def _store(
        self, context: StorageContext, filename: str, content_type: Optional[str], data: bytes
    ) -> StoredDocument:
        result = await self._client.upload(context.storage_id, data)
        if not result.commp:
            raise MissingPieceCidError()
        logger.info(f"File uploaded successfully. CID: {result.commp}")
        return StoredDocument(cid=str(result.commp), filename=filename, size=len(data), type=content_type or "")

    async def _setup_payments(self) -> None:
        deposit = await self._client.deposit(eth_to_wei(self._deposit_amount), self._payment_token)
        logger.info(f"Deposit transaction: {deposit.tx_hash}")
        await self._client.wait_for_transaction(deposit.tx_hash)
        logger.info("Deposit confirmed")

        service = self._service_address or (await self._client.get_network()).service_address
        approval = await self._client.approve_service(
            service,
            eth_to_wei(self._rate_allowance),
            eth_to_wei(self._lockup_allowance),
        )
        logger.info(f"Service approval transaction: {approval.tx_hash}")
        await self._client.wait_for_transaction(approval.tx_hash)
        logger.info("Service approval confirmed")

    async def aclose(self) -> None:
        await self._client.aclose()
