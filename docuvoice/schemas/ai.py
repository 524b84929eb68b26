# docuvoice/schemas/ai.py
from typing import List, Optional

from pydantic import BaseModel


class ChatRequest(BaseModel):
    question: Optional[str] = None
    context: Optional[str] = None
    document_id: Optional[int] = None
    suggested_question: bool = False


class ChatResponse(BaseModel):
    answer: str
    question: str
    context_length: int
    session_id: Optional[int] = None
    history_id: Optional[int] = None
    success: bool = True


class SummarizeRequest(BaseModel):
    text: Optional[str] = None
    document_id: Optional[int] = None


class SummarizeResponse(BaseModel):
    summary: str
    original_length: int
    summary_length: int
    success: bool = True


class GenerateQuestionsRequest(BaseModel):
    text: Optional[str] = None
    document_id: Optional[int] = None


class GenerateQuestionsResponse(BaseModel):
    questions: List[str]
    document_length: int
    question_count: int
    success: bool = True
