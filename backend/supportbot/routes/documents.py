from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from supportbot.errors import ValidationError
from supportbot.routes.deps import get_credentials
from supportbot.schemas.documents import DeleteResponse, Document, UploadResponse
from supportbot.services import knowledge_base
from supportbot.services.credentials import CredentialBundle

router = APIRouter(prefix="/documents")


@router.get("/list", response_model=list[Document])
async def list_documents(credentials: CredentialBundle = Depends(get_credentials)) -> list[Document]:
    return await knowledge_base.list_documents(credentials)


@router.delete("/delete", response_model=DeleteResponse)
async def delete_document(
    credentials: CredentialBundle = Depends(get_credentials),
    document_id: str | None = Query(default=None, alias="id"),
) -> DeleteResponse:
    if not document_id:
        raise ValidationError("Document ID is required")
    await knowledge_base.delete_document(credentials, document_id)
    return DeleteResponse(success=True, message="Document deleted successfully")


@router.post("/upload", response_model=UploadResponse)
async def upload_documents(
    credentials: CredentialBundle = Depends(get_credentials),
    files: list[UploadFile] = File(default=[]),
    friendly_name: str | None = Form(default=None, alias="friendlyName"),
    category: str | None = Form(default=None),
) -> UploadResponse:
    items = [
        knowledge_base.UploadItem(
            file_name=upload.filename or "upload",
            content=await upload.read(),
            content_type=upload.content_type,
        )
        for upload in files
    ]
    uploaded = await knowledge_base.upload_files(credentials, items, friendly_name=friendly_name, category=category)
    return UploadResponse(success=True, uploaded=uploaded)
