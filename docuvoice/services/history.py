# docuvoice/services/history.py
"""
Chat history aggregation.

Builds the document -> session -> entry tree shown on the history page from a
single three-table join, instead of querying sessions and entries per document.
"""
import time
from typing import Any, Dict, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import ChatHistoryEntry, ChatSession, Document
from ..schemas.chat import (
    ChatHistoryOverview,
    DocumentGroup,
    HistoryEntryItem,
    SessionGroup,
)
from ..utils.logging import service_logger
from .documents import storage_failure

UNTITLED_DOCUMENT = "Untitled Document"


def _session_sort_key(group: SessionGroup):
    # Sessions without a timestamp sort last
    return (group.session_created_at is not None, group.session_created_at or 0)


def group_chat_history(rows: Iterable[Any]) -> ChatHistoryOverview:
    """Nest flat joined rows under their session and document.

    Documents and sessions keep the order in which they are first seen, so with
    rows ordered newest entry first the most recently active document leads.
    Entries keep row order within their session. Sessions are then re-sorted by
    their own creation time, newest first.
    """
    documents: Dict[int, DocumentGroup] = {}
    sessions: Dict[int, Dict[int, SessionGroup]] = {}
    total_questions = 0

    for row in rows:
        total_questions += 1

        document = documents.get(row.document_id)
        if document is None:
            document = DocumentGroup(
                document_id=row.document_id,
                document_title=row.document_title or UNTITLED_DOCUMENT,
                document_type=row.document_type,
                file_name=row.file_name,
            )
            documents[row.document_id] = document
            sessions[row.document_id] = {}

        document_sessions = sessions[row.document_id]
        session = document_sessions.get(row.session_id)
        if session is None:
            session = SessionGroup(
                session_id=row.session_id,
                session_name=row.session_name,
                session_created_at=row.session_created_at,
            )
            document_sessions[row.session_id] = session

        session.chat_history.append(HistoryEntryItem(
            id=row.id,
            question=row.question,
            answer=row.answer,
            suggested_question=bool(row.suggested_question),
            created_at=row.created_at,
        ))

    for document_id, document in documents.items():
        document.sessions = sorted(sessions[document_id].values(), key=_session_sort_key, reverse=True)

    data = list(documents.values())
    return ChatHistoryOverview(
        data=data,
        total_documents=len(data),
        total_sessions=sum(len(doc.sessions) for doc in data),
        total_questions=total_questions,
    )


def get_user_chat_history(db: Session, owner_id: str) -> ChatHistoryOverview:
    start_time = time.time()
    try:
        rows = db.query(
            ChatHistoryEntry.id.label("id"),
            ChatHistoryEntry.question.label("question"),
            ChatHistoryEntry.answer.label("answer"),
            ChatHistoryEntry.suggested_question.label("suggested_question"),
            ChatHistoryEntry.created_at.label("created_at"),
            ChatSession.id.label("session_id"),
            ChatSession.session_name.label("session_name"),
            ChatSession.created_at.label("session_created_at"),
            Document.id.label("document_id"),
            Document.title.label("document_title"),
            Document.document_type.label("document_type"),
            Document.file_name.label("file_name"),
        ) \
            .join(ChatSession, ChatHistoryEntry.session_id == ChatSession.id) \
            .join(Document, ChatSession.document_id == Document.id) \
            .filter(Document.user_id == owner_id) \
            .order_by(ChatHistoryEntry.created_at.desc()) \
            .all()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Database connection failed", e, user_id=owner_id)

    overview = group_chat_history(rows)

    service_logger.info("Aggregated chat history", extra={
        "user_id": owner_id,
        "total_documents": overview.total_documents,
        "total_sessions": overview.total_sessions,
        "total_questions": overview.total_questions,
        "execution_time_ms": round((time.time() - start_time) * 1000, 2)
    })
    return overview
