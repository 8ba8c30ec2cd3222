from unittest.mock import AsyncMock, patch

from supportbot.errors import KnowledgeBaseError
from supportbot.schemas.documents import Document, UploadedFile


def test_list_documents(client, headers):
    docs = [Document(id="d1", fileName="faq.md", markdown="text", uploadDate="2024-01-01T00:00:00Z")]
    with patch("supportbot.services.knowledge_base.list_documents", AsyncMock(return_value=docs)) as listing:
        resp = client.get("/documents/list", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == [
        {
            "id": "d1",
            "friendlyName": None,
            "fileName": "faq.md",
            "markdown": "text",
            "category": None,
            "uploadDate": "2024-01-01T00:00:00Z",
        }
    ]
    assert listing.await_args.args[0].index_id == "pipe-123"


def test_list_documents_requires_headers(client):
    with patch("supportbot.services.knowledge_base.list_documents", AsyncMock()) as listing:
        resp = client.get("/documents/list")
    assert resp.status_code == 400
    listing.assert_not_awaited()


def test_list_documents_upstream_error_passthrough(client, headers):
    error = KnowledgeBaseError("Failed to fetch documents", status_code=404, details={"detail": "nope"})
    with patch("supportbot.services.knowledge_base.list_documents", AsyncMock(side_effect=error)):
        resp = client.get("/documents/list", headers=headers)

    assert resp.status_code == 404
    assert resp.json() == {"error": "Failed to fetch documents", "details": {"detail": "nope"}}


def test_delete_document(client, headers):
    with patch("supportbot.services.knowledge_base.delete_document", AsyncMock()) as deleting:
        resp = client.delete("/documents/delete", params={"id": "doc-3"}, headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Document deleted successfully"}
    assert deleting.await_args.args[1] == "doc-3"


def test_delete_document_requires_id(client, headers):
    with patch("supportbot.services.knowledge_base.delete_document", AsyncMock()) as deleting:
        resp = client.delete("/documents/delete", headers=headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Document ID is required"}
    deleting.assert_not_awaited()


def test_upload_documents(client, headers):
    uploaded = [UploadedFile(fileName="guide.md", fileId="f-1")]
    with patch("supportbot.services.knowledge_base.upload_files", AsyncMock(return_value=uploaded)) as uploading:
        resp = client.post(
            "/documents/upload",
            headers=headers,
            files=[("files", ("guide.md", b"# Guide", "text/markdown"))],
            data={"friendlyName": "User Guide", "category": "docs"},
        )

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "uploaded": [{"fileName": "guide.md", "fileId": "f-1"}]}

    _, items = uploading.await_args.args
    assert items[0].file_name == "guide.md"
    assert items[0].content == b"# Guide"
    assert uploading.await_args.kwargs == {"friendly_name": "User Guide", "category": "docs"}


def test_upload_rejects_unsupported_type(client, headers):
    resp = client.post(
        "/documents/upload",
        headers=headers,
        files=[("files", ("run.sh", b"echo", "text/x-sh"))],
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Unsupported file type: run.sh"


def test_initialize_returns_index_id(client, headers):
    headers.pop("X-Index-ID")
    with patch("supportbot.routes.initialize.ensure_pipeline", AsyncMock(return_value="pipe-9")) as ensuring:
        resp = client.post("/initialize", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"index_id": "pipe-9"}
    assert ensuring.await_args.args == ("llx-test-key", "proj-1", "org-1")


def test_initialize_requires_headers(client):
    resp = client.post("/initialize", headers={"X-API-Key": "k"})
    assert resp.status_code == 400
