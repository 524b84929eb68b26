# docuvoice/schemas/__init__.py
from .document import Document, DocumentCreate, DocumentUpdate, DocumentDetail, DocumentList
from .chat import ChatSession, ChatSessionCreate, ChatHistoryEntry, ChatHistoryCreate, ChatHistoryOverview
from .ai import ChatRequest, SummarizeRequest, GenerateQuestionsRequest
from .speech import SpeechRequest, SpeechPlan
from .user import User, UserSync

__all__ = [
    "Document", "DocumentCreate", "DocumentUpdate", "DocumentDetail", "DocumentList",
    "ChatSession", "ChatSessionCreate", "ChatHistoryEntry", "ChatHistoryCreate", "ChatHistoryOverview",
    "ChatRequest", "SummarizeRequest", "GenerateQuestionsRequest",
    "SpeechRequest", "SpeechPlan",
    "User", "UserSync"
]
