# docuvoice/services/documents.py
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError, StorageError, ValidationError
from ..models import ChatHistoryEntry, ChatSession, Document, SuggestedQuestion
from ..utils.logging import db_logger

UPDATABLE_FIELDS = ("title", "content", "summary", "document_type", "file_name")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def storage_failure(db: Session, message: str, error: Exception, **extra) -> StorageError:
    """Roll back the session, log the failure and build the error to raise."""
    db.rollback()
    db_logger.error(message, extra={**extra, "error": str(error)})
    return StorageError(message, details=str(error))


def save_document(
        db: Session,
        owner_id: str,
        content: str,
        title: Optional[str] = None,
        file_name: Optional[str] = None,
        document_type: Optional[str] = None,
        summary: Optional[str] = None,
) -> Document:
    if not content or not content.strip():
        raise ValidationError("Document content is required")

    now = utcnow()
    document = Document(
        user_id=owner_id,
        title=title or f"Document - {now.date().isoformat()}",
        content=content,
        summary=summary,
        content_length=len(content),
        document_type=document_type or "text",
        file_name=file_name,
        created_at=now,
        updated_at=now,
    )
    try:
        db.add(document)
        db.commit()
        db.refresh(document)
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to save document to database", e, user_id=owner_id)

    db_logger.info("Saved document", extra={
        "document_id": document.id,
        "user_id": owner_id,
        "content_length": document.content_length
    })
    return document


def update_document(db: Session, document_id: int, **fields) -> Document:
    """Merge the given fields into a document. Ownership must be checked by the caller."""
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown document fields", details=sorted(unknown))
    if "content" in fields and (not fields["content"] or not fields["content"].strip()):
        raise ValidationError("Document content is required")

    try:
        document = db.query(Document).filter(Document.id == document_id).first()
        if not document:
            raise NotFoundError("Document not found")

        for field, value in fields.items():
            setattr(document, field, value)
        document.updated_at = utcnow()

        db.commit()
        db.refresh(document)
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to update document", e, document_id=document_id)

    db_logger.info("Updated document", extra={
        "document_id": document_id,
        "update_fields": sorted(fields)
    })
    return document


def get_document(db: Session, document_id: int, owner_id: str) -> Optional[Document]:
    try:
        return db.query(Document) \
            .filter(Document.id == document_id, Document.user_id == owner_id) \
            .first()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch document", e, document_id=document_id)


def get_owned_document(db: Session, document_id: int, owner_id: str) -> Document:
    document = get_document(db, document_id, owner_id)
    if not document:
        raise NotFoundError("Document not found")
    return document


def get_document_with_sessions(db: Session, document_id: int, owner_id: str) -> Tuple[Document, List[ChatSession]]:
    document = get_owned_document(db, document_id, owner_id)
    try:
        sessions = db.query(ChatSession) \
            .filter(ChatSession.document_id == document_id) \
            .order_by(ChatSession.created_at.desc(), ChatSession.id.desc()) \
            .all()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch document data", e, document_id=document_id)
    return document, sessions


def get_user_documents(db: Session, owner_id: str, limit: int = 10) -> List[Document]:
    try:
        return db.query(Document) \
            .filter(Document.user_id == owner_id) \
            .order_by(Document.created_at.desc(), Document.id.desc()) \
            .limit(limit) \
            .all()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch user documents", e, user_id=owner_id)


def search_documents(db: Session, owner_id: str, term: str, limit: int = 10) -> List[Document]:
    """Filter the owner's newest ``limit`` documents by a case-insensitive substring.

    The filter runs over the rows already fetched, so a match older than the
    newest ``limit`` documents is not returned.
    """
    needle = term.lower()
    documents = get_user_documents(db, owner_id, limit)
    return [
        doc for doc in documents
        if needle in (doc.title or "").lower()
        or needle in doc.content.lower()
        or needle in (doc.file_name or "").lower()
    ]


def delete_document(db: Session, document_id: int, owner_id: str) -> Dict[str, object]:
    """Delete a document with its sessions, chat history and suggested questions in one transaction."""
    get_owned_document(db, document_id, owner_id)

    try:
        session_ids = [
            row.id for row in db.query(ChatSession.id).filter(ChatSession.document_id == document_id)
        ]
        history_deleted = 0
        if session_ids:
            history_deleted = db.query(ChatHistoryEntry) \
                .filter(ChatHistoryEntry.session_id.in_(session_ids)) \
                .delete(synchronize_session=False)
        sessions_deleted = db.query(ChatSession) \
            .filter(ChatSession.document_id == document_id) \
            .delete(synchronize_session=False)
        questions_deleted = db.query(SuggestedQuestion) \
            .filter(SuggestedQuestion.document_id == document_id) \
            .delete(synchronize_session=False)
        db.query(Document).filter(Document.id == document_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to delete document", e, document_id=document_id)

    db_logger.info("Deleted document and related data", extra={
        "document_id": document_id,
        "sessions_deleted": sessions_deleted,
        "history_deleted": history_deleted,
        "questions_deleted": questions_deleted
    })
    return {"success": True, "message": "Document and all related data deleted successfully"}
