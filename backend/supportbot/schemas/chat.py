from pydantic import BaseModel, Field


class HistoryMessage(BaseModel):
    role: str
    content: str | None = None


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    history: list[HistoryMessage] = Field(default_factory=list)


class SourceCitation(BaseModel):
    documentId: str
    title: str
    excerpt: str


class ChatResponse(BaseModel):
    text: str
    sources: list[SourceCitation] | None = None
