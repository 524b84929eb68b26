# docuvoice/api/documents.py
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..errors import DocuVoiceError
from ..schemas.base import SuccessResponse
from ..schemas.chat import ChatSession as ChatSessionSchema
from ..schemas.document import (
    Document as DocumentSchema,
    DocumentCreate,
    DocumentDetail,
    DocumentList,
    DocumentUpdate,
    SuggestedQuestionsUpdate,
)
from ..services import chat as chat_service
from ..services import documents as document_service
from ..services import suggestions as suggestion_service
from ..utils.logging import api_logger
from .deps import get_current_user_id

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("", response_model=DocumentSchema)
async def create_document(
        document: DocumentCreate,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Creating new document", extra={
        "user_id": user_id,
        "document_type": document.document_type,
        "content_length": len(document.content)
    })

    start_time = time.time()
    db_document = document_service.save_document(
        db,
        owner_id=user_id,
        content=document.content,
        title=document.title,
        file_name=document.file_name,
        document_type=document.document_type,
        summary=document.summary,
    )

    api_logger.info("Successfully created document", extra={
        "document_id": db_document.id,
        "execution_time_ms": round((time.time() - start_time) * 1000, 2)
    })
    return db_document


@router.get("", response_model=DocumentList)
async def list_documents(
        limit: int = Query(settings.DEFAULT_DOCUMENT_LIMIT, ge=1, le=100),
        search: Optional[str] = None,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Listing documents", extra={
        "user_id": user_id,
        "limit": limit,
        "search": search
    })

    if search:
        documents = document_service.search_documents(db, user_id, search, limit)
    else:
        documents = document_service.get_user_documents(db, user_id, limit)

    api_logger.info("Found documents", extra={"document_count": len(documents)})
    return {"documents": documents}


@router.get("/{document_id}", response_model=DocumentDetail)
async def get_document(
        document_id: int,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Retrieving document details", extra={"document_id": document_id})

    try:
        document, sessions = document_service.get_document_with_sessions(db, document_id, user_id)
    except DocuVoiceError as e:
        api_logger.warning("Document lookup failed", extra={
            "document_id": document_id,
            "error": e.message
        })
        raise

    return {"document": document, "sessions": sessions}


@router.patch("/{document_id}", response_model=DocumentSchema)
async def update_document(
        document_id: int,
        document: DocumentUpdate,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    fields = document.model_dump(exclude_unset=True)
    api_logger.info("Updating document", extra={
        "document_id": document_id,
        "update_fields": list(fields.keys())
    })

    document_service.get_owned_document(db, document_id, user_id)
    return document_service.update_document(db, document_id, **fields)


@router.delete("/{document_id}", response_model=SuccessResponse)
async def delete_document(
        document_id: int,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    result = document_service.delete_document(db, document_id, user_id)

    api_logger.info(f"Successfully deleted document {document_id}")
    return result


@router.get("/{document_id}/chat-sessions", response_model=List[ChatSessionSchema])
async def list_document_sessions(
        document_id: int,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Listing chat sessions", extra={"document_id": document_id})
    return chat_service.list_document_sessions(db, user_id, document_id)


@router.get("/{document_id}/suggested-questions", response_model=List[str])
async def get_suggested_questions(
        document_id: int,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    document_service.get_owned_document(db, document_id, user_id)

    questions = suggestion_service.get_suggested_questions(db, document_id)
    if not questions:
        api_logger.info("Seeding default suggested questions", extra={"document_id": document_id})
        suggestion_service.save_suggested_questions(
            db, document_id, suggestion_service.DEFAULT_SUGGESTED_QUESTIONS
        )
        questions = list(suggestion_service.DEFAULT_SUGGESTED_QUESTIONS)

    return questions


@router.post("/{document_id}/suggested-questions", response_model=List[str])
async def replace_suggested_questions(
        document_id: int,
        payload: SuggestedQuestionsUpdate,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Replacing suggested questions", extra={
        "document_id": document_id,
        "question_count": len(payload.questions)
    })

    document_service.get_owned_document(db, document_id, user_id)
    rows = suggestion_service.save_suggested_questions(db, document_id, payload.questions)
    return [row.question for row in rows]
