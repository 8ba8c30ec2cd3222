"""Error types raised by the chat pipeline and the knowledge-base passthroughs.

Every error carries the HTTP status it should surface as; the handlers in
``supportbot.main`` turn them into ``{"error": ...}`` JSON bodies.
"""

from typing import Any


class SupportBotError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.status_code}: {self.message})"


class ValidationError(SupportBotError):
    """Malformed input; raised before any network call."""

    status_code = 400


class RetrievalFailure(SupportBotError):
    """Non-success status from the retrieval service."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__("Failed to find relevant information", status_code=status_code)
        self.body = body


class CompletionFailure(SupportBotError):
    status_code = 500

    def __init__(self, message: str = "Failed to generate response from AI model") -> None:
        super().__init__(message)


class KnowledgeBaseError(SupportBotError):
    """Non-success status from one of the document admin endpoints."""


class InternalError(SupportBotError):
    status_code = 500
