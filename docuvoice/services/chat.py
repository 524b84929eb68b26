# docuvoice/services/chat.py
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError, ValidationError
from ..models import ChatHistoryEntry, ChatSession, Document
from ..utils.logging import db_logger
from .documents import get_owned_document, storage_failure, utcnow


def create_chat_session(db: Session, owner_id: str, document_id: int,
                        session_name: Optional[str] = None) -> ChatSession:
    get_owned_document(db, document_id, owner_id)

    now = utcnow()
    session = ChatSession(
        user_id=owner_id,
        document_id=document_id,
        session_name=session_name or f"Chat Session - {now.strftime('%Y-%m-%d %H:%M')}",
        created_at=now,
        updated_at=now,
    )
    try:
        db.add(session)
        db.commit()
        db.refresh(session)
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to create chat session", e, document_id=document_id)

    db_logger.info("Created chat session", extra={
        "session_id": session.id,
        "document_id": document_id,
        "user_id": owner_id
    })
    return session


def list_document_sessions(db: Session, owner_id: str, document_id: int) -> List[ChatSession]:
    get_owned_document(db, document_id, owner_id)
    try:
        return db.query(ChatSession) \
            .filter(ChatSession.document_id == document_id) \
            .order_by(ChatSession.created_at.desc(), ChatSession.id.desc()) \
            .all()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch chat sessions", e, document_id=document_id)


def get_or_create_session(db: Session, owner_id: str, document_id: int) -> ChatSession:
    """Return the most recently created session of a document, creating one if it has none."""
    sessions = list_document_sessions(db, owner_id, document_id)
    if sessions:
        return sessions[0]
    return create_chat_session(db, owner_id, document_id)


def get_owned_session(db: Session, session_id: int, owner_id: str) -> ChatSession:
    """Look up a session whose parent document belongs to ``owner_id``."""
    try:
        session = db.query(ChatSession) \
            .join(Document, ChatSession.document_id == Document.id) \
            .filter(ChatSession.id == session_id, Document.user_id == owner_id) \
            .first()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch chat session", e, session_id=session_id)

    if not session:
        raise NotFoundError("Chat session not found")
    return session


def delete_chat_session(db: Session, session_id: int, owner_id: str) -> Dict[str, object]:
    get_owned_session(db, session_id, owner_id)

    try:
        history_deleted = db.query(ChatHistoryEntry) \
            .filter(ChatHistoryEntry.session_id == session_id) \
            .delete(synchronize_session=False)
        db.query(ChatSession).filter(ChatSession.id == session_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to delete chat session", e, session_id=session_id)

    db_logger.info("Deleted chat session", extra={
        "session_id": session_id,
        "history_deleted": history_deleted
    })
    return {"success": True, "message": "Chat session deleted successfully"}


def save_chat_message(db: Session, session_id: int, question: str, answer: str,
                      suggested_question: bool = False) -> ChatHistoryEntry:
    if not question or not answer:
        raise ValidationError("Question and answer are required")

    entry = ChatHistoryEntry(
        session_id=session_id,
        question=question,
        answer=answer,
        suggested_question=suggested_question,
        created_at=utcnow(),
    )
    try:
        db.add(entry)
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to save chat message", e, session_id=session_id)

    db_logger.debug("Saved chat message", extra={
        "session_id": session_id,
        "history_id": entry.id
    })
    return entry


def get_chat_history(db: Session, session_id: int) -> List[ChatHistoryEntry]:
    try:
        return db.query(ChatHistoryEntry) \
            .filter(ChatHistoryEntry.session_id == session_id) \
            .order_by(ChatHistoryEntry.created_at.asc(), ChatHistoryEntry.id.asc()) \
            .all()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch chat history", e, session_id=session_id)


def history_as_messages(entries: List[ChatHistoryEntry]) -> List[Dict[str, Optional[str]]]:
    """Flatten question/answer pairs into alternating user/assistant messages."""
    messages = []
    for entry in entries:
        timestamp = entry.created_at.isoformat() if entry.created_at else None
        messages.append({"role": "user", "content": entry.question, "timestamp": timestamp})
        messages.append({"role": "assistant", "content": entry.answer, "timestamp": timestamp})
    return messages
