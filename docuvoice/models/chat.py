# docuvoice/models/chat.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class ChatSession(Base):
    __tablename__ = "chat_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(256), nullable=False)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False, index=True)
    session_name = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    document = relationship("Document", back_populates="sessions")
    entries = relationship("ChatHistoryEntry", back_populates="session",
                           order_by="ChatHistoryEntry.created_at")


class ChatHistoryEntry(Base):
    __tablename__ = "chat_history"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("chat_sessions.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    suggested_question = Column(Boolean, nullable=False, default=False, server_default='0')
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    session = relationship("ChatSession", back_populates="entries")
