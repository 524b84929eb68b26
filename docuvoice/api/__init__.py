# docuvoice/api/__init__.py
from .documents import router as documents_router
from .chat_sessions import router as chat_sessions_router, history_router as chat_history_router
from .ai import router as ai_router
from .extraction import router as extraction_router
from .speech import router as speech_router
from .users import router as users_router

__all__ = [
    "documents_router",
    "chat_sessions_router",
    "chat_history_router",
    "ai_router",
    "extraction_router",
    "speech_router",
    "users_router"
]
