# docuvoice/schemas/chat.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from .base import BaseSchema, TimestampMixin


class ChatSessionCreate(BaseModel):
    document_id: Optional[int] = None
    session_name: Optional[str] = None


class ChatSession(BaseSchema, TimestampMixin):
    id: int
    user_id: str
    document_id: int
    session_name: Optional[str] = None
    updated_at: Optional[datetime] = None


class ChatHistoryCreate(BaseModel):
    session_id: Optional[int] = None
    question: Optional[str] = None
    answer: Optional[str] = None
    suggested_question: bool = False


class ChatHistoryEntry(BaseSchema, TimestampMixin):
    id: int
    session_id: int
    question: str
    answer: str
    suggested_question: bool = False


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: Optional[str] = None


class ChatHistoryCreated(BaseModel):
    success: bool = True
    history: ChatHistoryEntry


class SessionHistory(BaseModel):
    session_id: int
    history: List[ChatHistoryEntry] = []
    messages: List[ChatMessage] = []


# Aggregated overview: document -> session -> entry

class HistoryEntryItem(BaseModel):
    id: int
    question: str
    answer: str
    suggested_question: bool = False
    created_at: Optional[datetime] = None


class SessionGroup(BaseModel):
    session_id: int
    session_name: Optional[str] = None
    session_created_at: Optional[datetime] = None
    chat_history: List[HistoryEntryItem] = []


class DocumentGroup(BaseModel):
    document_id: int
    document_title: str
    document_type: Optional[str] = None
    file_name: Optional[str] = None
    sessions: List[SessionGroup] = []


class ChatHistoryOverview(BaseModel):
    success: bool = True
    data: List[DocumentGroup] = []
    total_documents: int = 0
    total_sessions: int = 0
    total_questions: int = 0
