from __future__ import annotations

import logging

from langchain_openai import ChatOpenAI

from supportbot.config import settings
from supportbot.errors import CompletionFailure

logger = logging.getLogger(__name__)


def _get_llm() -> ChatOpenAI:
    return ChatOpenAI(
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        openai_api_key=settings.openai_api_key,
        openai_api_base=settings.openai_base_url,
    )


def _text_of(response: object) -> str:
    content = getattr(response, "content", None)
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = [p.get("text", "") if isinstance(p, dict) else str(p) for p in content]
        return "".join(parts).strip()
    return ""


async def complete(prompt: str) -> str:
    logger.debug("Sending prompt to LLM", extra={"prompt": prompt})
    try:
        response = await _get_llm().ainvoke(prompt)
    except Exception as exc:
        logger.exception("LLM call failed", exc_info=exc)
        raise CompletionFailure() from exc

    text = _text_of(response)
    if not text:
        logger.error("LLM returned no text", extra={"model": settings.openai_model})
        raise CompletionFailure()
    return text
