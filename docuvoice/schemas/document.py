# docuvoice/schemas/document.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field
from .base import BaseSchema, TimestampMixin
from .chat import ChatSession

class DocumentBase(BaseSchema):
    title: Optional[str] = None
    document_type: Optional[str] = None
    file_name: Optional[str] = None
    summary: Optional[str] = None

class DocumentCreate(DocumentBase):
    content: str

class DocumentUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    document_type: Optional[str] = None
    file_name: Optional[str] = None

class Document(DocumentBase, TimestampMixin):
    id: int
    user_id: str
    content: str
    content_length: Optional[int] = None
    updated_at: Optional[datetime] = None

class DocumentList(BaseModel):
    documents: List[Document] = []

class DocumentDetail(BaseModel):
    document: Document
    sessions: List[ChatSession] = []

class SuggestedQuestionsUpdate(BaseModel):
    questions: List[str] = Field(default_factory=list)
