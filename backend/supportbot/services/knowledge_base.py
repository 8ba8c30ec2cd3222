"""Passthroughs to the LlamaCloud pipeline/document API used by admin mode."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any

import httpx

from supportbot.config import settings
from supportbot.errors import KnowledgeBaseError, ValidationError
from supportbot.schemas.documents import Document, UploadedFile
from supportbot.services.credentials import CredentialBundle

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".docx", ".doc", ".txt", ".md", ".csv", ".json"}


@dataclass
class UploadItem:
    file_name: str
    content: bytes
    content_type: str | None = None


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _details(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _id_of(resp: httpx.Response) -> str:
    data = _details(resp)
    if isinstance(data, dict) and data.get("id"):
        return str(data["id"])
    raise KnowledgeBaseError("Upstream response carried no id", status_code=502, details=data)


def _check(resp: httpx.Response, message: str) -> None:
    if resp.is_error:
        details = _details(resp)
        logger.error(message, extra={"status": resp.status_code, "details": details})
        raise KnowledgeBaseError(message, status_code=resp.status_code, details=details)


async def _send(client: httpx.AsyncClient | None, method: str, url: str, **kwargs: Any) -> httpx.Response:
    if client is not None:
        return await client.request(method, url, **kwargs)
    async with httpx.AsyncClient() as own_client:
        return await own_client.request(method, url, **kwargs)


def _str_or_none(value: Any) -> str | None:
    return str(value) if value else None


def to_document(raw: dict[str, Any]) -> Document:
    metadata = raw.get("metadata") or {}
    if not isinstance(metadata, dict):
        metadata = {}
    return Document(
        id=str(raw.get("id", "")),
        friendlyName=_str_or_none(metadata.get("friendlyName")),
        fileName=_str_or_none(metadata.get("file_name")) or "Unknown file",
        markdown=_str_or_none(raw.get("text")) or "",
        category=_str_or_none(metadata.get("category")),
        uploadDate=_str_or_none(metadata.get("upload_date")) or _now_iso(),
    )


async def list_documents(
    credentials: CredentialBundle,
    client: httpx.AsyncClient | None = None,
) -> list[Document]:
    url = f"{settings.llamacloud_base_url}/api/v1/pipelines/{credentials.index_id}/documents"
    resp = await _send(client, "GET", url, headers=credentials.auth_headers())
    _check(resp, "Failed to fetch documents")

    data = _details(resp)
    if not isinstance(data, list):
        return []
    return [to_document(item) for item in data if isinstance(item, dict)]


async def delete_document(
    credentials: CredentialBundle,
    document_id: str,
    client: httpx.AsyncClient | None = None,
) -> None:
    if not document_id:
        raise ValidationError("Document ID is required")
    url = f"{settings.llamacloud_base_url}/api/v1/pipelines/{credentials.index_id}/documents/{document_id}"
    resp = await _send(client, "DELETE", url, headers=credentials.auth_headers())
    _check(resp, "Failed to delete document")
    logger.info("Document deleted", extra={"document_id": document_id})


def _validate_upload(items: list[UploadItem]) -> None:
    if not items:
        raise ValidationError("No files provided")
    for item in items:
        suffix = PurePath(item.file_name).suffix.lower()
        if suffix not in ALLOWED_EXTENSIONS:
            raise ValidationError(f"Unsupported file type: {item.file_name}")


async def upload_files(
    credentials: CredentialBundle,
    items: list[UploadItem],
    friendly_name: str | None = None,
    category: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[UploadedFile]:
    _validate_upload(items)
    base = settings.llamacloud_base_url
    params = {"project_id": credentials.project_id, "organization_id": credentials.organization_id}

    uploaded: list[UploadedFile] = []
    for item in items:
        resp = await _send(
            client,
            "POST",
            f"{base}/api/v1/files",
            params=params,
            headers=credentials.auth_headers(),
            files={"upload_file": (item.file_name, item.content, item.content_type or "application/octet-stream")},
        )
        _check(resp, "Failed to upload file")
        file_id = _id_of(resp)

        custom_metadata: dict[str, Any] = {"file_name": item.file_name, "upload_date": _now_iso()}
        # one friendly name only makes sense for a single file
        if friendly_name and len(items) == 1:
            custom_metadata["friendlyName"] = friendly_name
        if category:
            custom_metadata["category"] = category

        resp = await _send(
            client,
            "PUT",
            f"{base}/api/v1/pipelines/{credentials.index_id}/files",
            headers=credentials.auth_headers(),
            json=[{"file_id": file_id, "custom_metadata": custom_metadata}],
        )
        _check(resp, "Failed to add file to pipeline")
        logger.info("File uploaded", extra={"file_name": item.file_name, "file_id": file_id})
        uploaded.append(UploadedFile(fileName=item.file_name, fileId=file_id))
    return uploaded


async def ensure_pipeline(
    api_key: str,
    project_id: str,
    organization_id: str,
    name: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    name = name or settings.knowledge_base_pipeline_name
    url = f"{settings.llamacloud_base_url}/api/v1/pipelines"
    headers = {
        "Authorization": f"Bearer {api_key}",
        "X-Organization-Id": organization_id,
        "X-Project-Id": project_id,
    }

    resp = await _send(client, "GET", url, params={"project_id": project_id, "pipeline_name": name}, headers=headers)
    _check(resp, "Failed to look up pipeline")
    existing = _details(resp)
    if isinstance(existing, list) and existing and isinstance(existing[0], dict) and existing[0].get("id"):
        return str(existing[0]["id"])

    resp = await _send(client, "POST", url, params={"project_id": project_id}, headers=headers, json={"name": name})
    _check(resp, "Failed to create pipeline")
    pipeline_id = _id_of(resp)
    logger.info("Pipeline created", extra={"pipeline_name": name, "pipeline_id": pipeline_id})
    return pipeline_id
