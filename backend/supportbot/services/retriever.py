from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from supportbot.config import settings
from supportbot.errors import RetrievalFailure
from supportbot.services.credentials import CredentialBundle

logger = logging.getLogger(__name__)


@dataclass
class RetrievedNode:
    text: str
    metadata: dict[str, Any] | None = None


def parse_nodes(payload: Any) -> list[RetrievedNode]:
    if not isinstance(payload, dict):
        return []
    items = payload.get("nodes")
    if not isinstance(items, list):
        return []

    nodes: list[RetrievedNode] = []
    for item in items:
        node = item.get("node") if isinstance(item, dict) else None
        if not isinstance(node, dict):
            continue
        text = node.get("text")
        if not isinstance(text, str) or not text:
            continue
        metadata = node.get("metadata")
        nodes.append(RetrievedNode(text=text, metadata=metadata if isinstance(metadata, dict) else None))
    return nodes


def _payload(message: str, credentials: CredentialBundle) -> dict[str, Any]:
    return {
        "mode": "full",
        "query": message,
        "pipelines": [
            {
                "name": settings.retriever_pipeline_name,
                "description": settings.retriever_pipeline_description,
                "pipeline_id": credentials.index_id,
            }
        ],
    }


async def retrieve(
    message: str,
    credentials: CredentialBundle,
    client: httpx.AsyncClient | None = None,
) -> list[RetrievedNode]:
    url = f"{settings.llamacloud_base_url}/api/v1/retrievers/retrieve"
    params = {"project_id": credentials.project_id, "organization_id": credentials.organization_id}
    headers = {"Authorization": f"Bearer {credentials.api_key}"}

    if client is None:
        async with httpx.AsyncClient() as own_client:
            resp = await own_client.post(url, params=params, headers=headers, json=_payload(message, credentials))
    else:
        resp = await client.post(url, params=params, headers=headers, json=_payload(message, credentials))

    if resp.is_error:
        logger.error(
            "Retriever call failed",
            extra={"status": resp.status_code, "body": resp.text[:500]},
        )
        raise RetrievalFailure(resp.status_code, resp.text)

    try:
        data = resp.json()
    except ValueError:
        logger.warning("Retriever returned a non-JSON body; treating as no nodes")
        data = None

    nodes = parse_nodes(data)
    logger.info("Retrieved nodes", extra={"count": len(nodes)})
    return nodes
