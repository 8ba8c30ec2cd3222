import logging

from fastapi import APIRouter, Depends

from supportbot.config import settings
from supportbot.routes.deps import get_credentials
from supportbot.schemas.chat import ChatRequest, ChatResponse
from supportbot.services.ai import complete
from supportbot.services.citations import shape
from supportbot.services.credentials import CredentialBundle
from supportbot.services.domain_gate import is_in_domain
from supportbot.services.prompt import build_prompt
from supportbot.services.retriever import retrieve

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    credentials: CredentialBundle = Depends(get_credentials),
) -> ChatResponse:
    if not is_in_domain(request.message, settings.keywords()):
        logger.info("Out-of-domain message refused", extra={"message_length": len(request.message)})
        return ChatResponse(text=settings.domain_refusal_message, sources=None)

    nodes = await retrieve(request.message, credentials)

    prompt = build_prompt(
        request.message,
        request.history,
        [node.text for node in nodes],
        max_context_chars=settings.max_context_chars,
        max_history_turns=settings.max_history_turns,
    )
    answer = await complete(prompt)

    response = shape(answer, nodes)
    logger.info(
        "Chat turn answered",
        extra={"nodes": len(nodes), "sources": len(response.sources or [])},
    )
    return response
