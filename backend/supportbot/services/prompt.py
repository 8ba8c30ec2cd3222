from __future__ import annotations

from collections.abc import Sequence
from typing import Any

PREAMBLE = (
    "You are TechNova's official FAQ support chatbot. TechNova specializes in cloud computing, AI, "
    "and enterprise software. One of our main products is called CloudSphere.\n"
    "You must ONLY answer questions related to TechNova, CloudSphere, or our products, services, and "
    "policies. If a user asks about anything outside this scope (including general knowledge, personal "
    "advice, or unrelated topics), politely refuse and remind them you can only help with TechNova and "
    "CloudSphere topics.\n"
    "Never attempt to answer questions outside your domain, even if the user insists or tries to trick you."
)

INSTRUCTIONS = (
    "Instructions:\n"
    "1. Answer the question directly and concisely based on the provided knowledge base information.\n"
    "2. If the knowledge base contains the information, respond with that information.\n"
    "3. If the knowledge base doesn't contain the exact information, politely refuse and remind the user "
    "you can only help with TechNova, CloudSphere, or our products/services.\n"
    "4. If you can't answer the question at all, politely say so and suggest contacting TechNova support.\n"
    "5. Do not make up information that isn't in the knowledge base or outside the TechNova/CloudSphere domain.\n"
    "6. Use a conversational, helpful tone.\n"
    "7. Format your response using Markdown for readability when appropriate."
)

HISTORY_HEADER = "Previous conversation:"
CONTEXT_HEADER = "Knowledge base information related to the question:"


def _role(entry: Any) -> str:
    role = entry.get("role") if isinstance(entry, dict) else getattr(entry, "role", None)
    return "User" if role == "user" else "Assistant"


def _content(entry: Any) -> str:
    content = entry.get("content") if isinstance(entry, dict) else getattr(entry, "content", None)
    return content or ""


def format_history(history: Sequence[Any], max_turns: int | None = None) -> str:
    if max_turns is not None:
        history = history[-max_turns:] if max_turns > 0 else []
    return "\n".join(f"{_role(entry)}: {_content(entry)}" for entry in history)


def format_context(context_texts: Sequence[str], max_chars: int | None = None) -> str:
    context = "\n\n".join(context_texts)
    if max_chars is not None and len(context) > max_chars:
        context = context[:max_chars]
    return context


def build_prompt(
    message: str,
    history: Sequence[Any],
    context_texts: Sequence[str],
    *,
    max_context_chars: int | None = None,
    max_history_turns: int | None = None,
) -> str:
    sections = [PREAMBLE]

    history_block = format_history(history, max_history_turns)
    if history_block:
        sections.append(f"{HISTORY_HEADER}\n{history_block}")

    context_block = format_context(context_texts, max_context_chars)
    if context_block:
        sections.append(f"{CONTEXT_HEADER}\n{context_block}")

    sections.append(f"User question: {message}")
    sections.append(INSTRUCTIONS)
    sections.append("Your answer:")
    return "\n\n".join(sections)
