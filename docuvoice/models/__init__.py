# docuvoice/models/__init__.py
from ..database import Base
from .user import User
from .document import Document
from .chat import ChatSession, ChatHistoryEntry
from .suggested_question import SuggestedQuestion

__all__ = [
    "Base",
    "User",
    "Document",
    "ChatSession",
    "ChatHistoryEntry",
    "SuggestedQuestion"
]
