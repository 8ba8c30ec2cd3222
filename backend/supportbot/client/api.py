from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any

import httpx

from supportbot.client.conversation import ChatMessage, Conversation
from supportbot.client.session import CredentialSession
from supportbot.config import settings
from supportbot.errors import SupportBotError

logger = logging.getLogger(__name__)

CHAT_ERROR_REPLY = "Sorry, I encountered an error. Please try again."


class SupportBotClient:
    """Async client for the chatbot backend; every call carries the session's credentials."""

    def __init__(
        self,
        session: CredentialSession,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.session = session
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=60)
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> SupportBotClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    @staticmethod
    def _raise_for_error(resp: httpx.Response) -> None:
        if not resp.is_error:
            return
        try:
            body = resp.json()
        except ValueError:
            body = {}
        message = body.get("error") if isinstance(body, dict) else None
        raise SupportBotError(
            message or f"Error: {resp.status_code}",
            status_code=resp.status_code,
            details=body.get("details") if isinstance(body, dict) else None,
        )

    async def initialize(self) -> str:
        client = await self._get_client()
        resp = await client.post("/initialize", headers=self.session.headers(include_index=False))
        self._raise_for_error(resp)
        index_id = resp.json()["index_id"]
        self.session.set_index_id(index_id)
        return index_id

    async def chat(self, message: str, conversation: Conversation) -> ChatMessage:
        history = conversation.history()
        conversation.add("user", message)

        try:
            client = await self._get_client()
            resp = await client.post(
                "/chat",
                headers=self.session.headers(),
                json={"message": message, "history": history},
            )
            self._raise_for_error(resp)
            data = resp.json()
        except (SupportBotError, httpx.HTTPError):
            # keep user/assistant turns paired for the next request's history
            conversation.add("assistant", CHAT_ERROR_REPLY)
            raise
        return conversation.add(
            "assistant",
            data.get("text") or "No response received",
            sources=data.get("sources") or [],
        )

    async def list_documents(self) -> list[dict[str, Any]]:
        client = await self._get_client()
        resp = await client.get("/documents/list", headers=self.session.headers())
        self._raise_for_error(resp)
        return resp.json()

    async def delete_document(self, document_id: str) -> None:
        client = await self._get_client()
        resp = await client.delete(
            "/documents/delete",
            params={"id": document_id},
            headers=self.session.headers(),
        )
        self._raise_for_error(resp)

    async def upload(
        self,
        paths: list[str | Path],
        friendly_name: str | None = None,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        files = []
        for raw_path in paths:
            path = Path(raw_path)
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
            files.append(("files", (path.name, path.read_bytes(), content_type)))

        data = {}
        if friendly_name:
            data["friendlyName"] = friendly_name
        if category:
            data["category"] = category

        client = await self._get_client()
        resp = await client.post(
            "/documents/upload",
            headers=self.session.headers(),
            files=files,
            data=data,
        )
        self._raise_for_error(resp)
        return resp.json().get("uploaded", [])
