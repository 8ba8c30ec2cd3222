from collections.abc import Iterable

from supportbot.schemas.chat import ChatResponse, SourceCitation
from supportbot.services.retriever import RetrievedNode

EXCERPT_LENGTH = 150
UNKNOWN_TITLE = "Unknown document"


def to_citation(node: RetrievedNode) -> SourceCitation | None:
    if node.metadata is None:
        return None
    md = node.metadata
    return SourceCitation(
        documentId=str(md.get("document_id") or ""),
        title=str(md.get("friendlyName") or md.get("file_name") or UNKNOWN_TITLE),
        # fixed-length cut, not word-boundary aware
        excerpt=node.text[:EXCERPT_LENGTH] + "...",
    )


def shape(completion_text: str, nodes: Iterable[RetrievedNode]) -> ChatResponse:
    sources = [c for c in (to_citation(node) for node in nodes) if c is not None]
    return ChatResponse(text=completion_text, sources=sources or None)
