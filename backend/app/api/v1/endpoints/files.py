"""
File API endpoints. Receipts are uploaded here and then referenced from
travel records by ID.
"""

from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.controllers.document_file_controller import DocumentFileController
from app.schemas.document_file import DocumentFileResponse

router = APIRouter()


def get_file_controller(db: AsyncSession = Depends(get_db)) -> DocumentFileController:
    return DocumentFileController(db)


@router.post("", response_model=DocumentFileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    owner_id: UUID = Form(...),
    file: UploadFile = File(...),
    controller: DocumentFileController = Depends(get_file_controller),
) -> DocumentFileResponse:
    """Upload a receipt (JPEG, PNG or PDF)."""
    content = await file.read()
    return await controller.upload_file(owner_id, file.filename, file.content_type, content)


@router.get("/{file_id}/info", response_model=DocumentFileResponse)
async def get_file_info(
    file_id: UUID,
    controller: DocumentFileController = Depends(get_file_controller),
) -> DocumentFileResponse:
    """Get file metadata."""
    return await controller.get_file(file_id)


@router.get("/{file_id}")
async def download_file(
    file_id: UUID,
    controller: DocumentFileController = Depends(get_file_controller),
) -> Response:
    """Download the file content."""
    document = await controller.download_file(file_id)
    return Response(
        content=document.data,
        media_type=document.type.value,
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(document.name)}"},
    )
