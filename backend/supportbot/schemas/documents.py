from pydantic import BaseModel, Field


class Document(BaseModel):
    id: str
    friendlyName: str | None = None
    fileName: str = "Unknown file"
    markdown: str = ""
    category: str | None = None
    uploadDate: str


class DeleteResponse(BaseModel):
    success: bool
    message: str


class UploadedFile(BaseModel):
    fileName: str
    fileId: str


class UploadResponse(BaseModel):
    success: bool
    uploaded: list[UploadedFile] = Field(default_factory=list)


class InitializeResponse(BaseModel):
    index_id: str
