# docuvoice/services/__init__.py
from . import documents, chat, history, suggestions, users, ai, extraction, speech

__all__ = ["documents", "chat", "history", "suggestions", "users", "ai", "extraction", "speech"]
