from unittest.mock import AsyncMock, patch

import pytest

from supportbot.config import settings
from supportbot.errors import CompletionFailure, RetrievalFailure
from supportbot.services.retriever import RetrievedNode


@pytest.fixture
def pipeline():
    retrieve = AsyncMock(
        return_value=[
            RetrievedNode(text="Reset your password from Settings > Security.", metadata={"friendlyName": "Account FAQ", "document_id": "d1"}),
            RetrievedNode(text="Passwords expire every 90 days."),
        ]
    )
    complete = AsyncMock(return_value="Go to **Settings > Security**.")
    with patch("supportbot.routes.chat.retrieve", retrieve), patch("supportbot.routes.chat.complete", complete):
        yield retrieve, complete


def test_chat_happy_path(client, headers, pipeline):
    retrieve, complete = pipeline
    resp = client.post(
        "/chat",
        headers=headers,
        json={
            "message": "How do I reset my password?",
            "history": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "Hello!"}],
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["text"] == "Go to **Settings > Security**."
    assert data["sources"] == [
        {
            "documentId": "d1",
            "title": "Account FAQ",
            "excerpt": "Reset your password from Settings > Security....",
        }
    ]

    message, credentials = retrieve.await_args.args
    assert message == "How do I reset my password?"
    assert credentials.index_id == "pipe-123"

    prompt = complete.await_args.args[0]
    assert "User: hi\nAssistant: Hello!" in prompt
    assert "Reset your password from Settings > Security.\n\nPasswords expire every 90 days." in prompt


def test_chat_sources_null_without_metadata(client, headers, pipeline):
    retrieve, _ = pipeline
    retrieve.return_value = [RetrievedNode(text="plain passage")]
    resp = client.post("/chat", headers=headers, json={"message": "billing help"})

    assert resp.status_code == 200
    assert resp.json()["sources"] is None


def test_out_of_domain_message_short_circuits(client, headers, pipeline):
    retrieve, complete = pipeline
    resp = client.post("/chat", headers=headers, json={"message": "Who won the world cup in 1998?"})

    assert resp.status_code == 200
    assert resp.json() == {"text": settings.domain_refusal_message, "sources": None}
    retrieve.assert_not_awaited()
    complete.assert_not_awaited()


@pytest.mark.parametrize("missing", ["X-API-Key", "X-Index-ID", "X-Project-ID", "X-Organization-ID"])
def test_missing_header_is_400_without_network(client, headers, pipeline, missing):
    retrieve, complete = pipeline
    headers.pop(missing)
    resp = client.post("/chat", headers=headers, json={"message": "billing help"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required headers"}
    retrieve.assert_not_awaited()
    complete.assert_not_awaited()


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"history": []}])
def test_missing_message_is_400(client, headers, pipeline, body):
    retrieve, _ = pipeline
    resp = client.post("/chat", headers=headers, json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Message is required"}
    retrieve.assert_not_awaited()


def test_retrieval_failure_passes_status_through(client, headers, pipeline):
    retrieve, complete = pipeline
    retrieve.side_effect = RetrievalFailure(401, '{"detail":"Invalid API key"}')
    resp = client.post("/chat", headers=headers, json={"message": "billing help"})

    assert resp.status_code == 401
    assert "text" not in resp.json()
    assert resp.json()["error"] == "Failed to find relevant information"
    complete.assert_not_awaited()


def test_completion_failure_is_500(client, headers, pipeline):
    _, complete = pipeline
    complete.side_effect = CompletionFailure()
    resp = client.post("/chat", headers=headers, json={"message": "billing help"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate response from AI model"}


def test_unexpected_error_is_generic_500(client, headers, pipeline):
    retrieve, _ = pipeline
    retrieve.side_effect = RuntimeError("boom")
    resp = client.post("/chat", headers=headers, json={"message": "billing help"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_history_limit_applies(client, headers, pipeline, monkeypatch):
    _, complete = pipeline
    monkeypatch.setattr(settings, "max_history_turns", 1)
    history = [{"role": "user", "content": "first"}, {"role": "assistant", "content": "second"}]
    client.post("/chat", headers=headers, json={"message": "billing help", "history": history})

    prompt = complete.await_args.args[0]
    assert "Assistant: second" in prompt
    assert "User: first" not in prompt


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_history_entry_with_null_content(client, headers, pipeline):
    _, complete = pipeline
    history = [{"role": "user", "content": None}, {"role": "assistant", "content": "Hello!"}]
    resp = client.post("/chat", headers=headers, json={"message": "billing help", "history": history})

    assert resp.status_code == 200
    assert "User: \nAssistant: Hello!" in complete.await_args.args[0]
