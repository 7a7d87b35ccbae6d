"""
Document Upload Endpoint.

Accepts tender requirement documents and bid proposals as multipart uploads
and stores them on the decentralized storage network. The returned CID is
what the browser passes to ``createTender`` / ``submitBid``.
"""

from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from tenderchain.core.logging_config import get_logger
from tenderchain.server.schemas import UploadResponse
from tenderchain.server.services.deps import DocumentServiceDep
from tenderchain.server.services.document_service import (
    DocumentRejectedError,
    StorageNotConfiguredError,
    classify_upload_error,
    validate_document,
)
from tenderchain.storage import StorageError

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/upload-document",
    response_model=UploadResponse,
    summary="Upload Document",
    description="Store a PDF, DOC, DOCX or TXT file (10MB max) and return its CID.",
    responses={
        400: {"description": "Missing file, file too large or unsupported type"},
        402: {"description": "The storage wallet needs funding"},
        500: {"description": "Server misconfiguration or storage failure"},
        503: {"description": "Storage network unreachable"},
    },
)
async def upload_document(
    documents: DocumentServiceDep,
    file: Optional[UploadFile] = File(default=None),
) -> UploadResponse:
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    try:
        if file.size is not None:
            validate_document(file.filename, file.content_type, file.size)
        data = await file.read()
        stored = await documents.upload(file.filename, file.content_type, data)
    except DocumentRejectedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StorageNotConfiguredError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    except StorageError as e:
        logger.error(f"Upload error: {e}", exc_info=True)
        status_code, message = classify_upload_error(e)
        raise HTTPException(status_code=status_code, detail=message) from e

    return UploadResponse(cid=stored.cid, filename=stored.filename, size=stored.size, type=stored.type)
