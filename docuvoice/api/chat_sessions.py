# docuvoice/api/chat_sessions.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ValidationError
from ..schemas.base import SuccessResponse
from ..schemas.chat import (
    ChatHistoryCreate,
    ChatHistoryCreated,
    ChatHistoryOverview,
    ChatSession as ChatSessionSchema,
    ChatSessionCreate,
    SessionHistory,
)
from ..services import chat as chat_service
from ..services.history import get_user_chat_history
from ..utils.logging import api_logger
from .deps import get_current_user_id

router = APIRouter(prefix="/api/chat-sessions", tags=["chat-sessions"])
history_router = APIRouter(prefix="/api/chat-history", tags=["chat-history"])


@router.post("", response_model=ChatSessionSchema)
async def create_chat_session(
        payload: ChatSessionCreate,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    if not payload.document_id:
        raise ValidationError("Document ID is required")

    api_logger.info("Creating chat session", extra={
        "document_id": payload.document_id,
        "user_id": user_id
    })
    return chat_service.create_chat_session(db, user_id, payload.document_id, payload.session_name)


@router.get("/{session_id}/history", response_model=SessionHistory)
async def get_session_history(
        session_id: int,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    chat_service.get_owned_session(db, session_id, user_id)
    entries = chat_service.get_chat_history(db, session_id)

    api_logger.debug("Retrieved session history", extra={
        "session_id": session_id,
        "entry_count": len(entries)
    })
    return {
        "session_id": session_id,
        "history": entries,
        "messages": chat_service.history_as_messages(entries),
    }


@router.delete("/{session_id}", response_model=SuccessResponse)
async def delete_chat_session(
        session_id: int,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Deleting chat session", extra={"session_id": session_id})
    return chat_service.delete_chat_session(db, session_id, user_id)


@history_router.post("", response_model=ChatHistoryCreated)
async def save_chat_history(
        payload: ChatHistoryCreate,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    if not payload.session_id or not payload.question or not payload.answer:
        raise ValidationError("SessionId, question, and answer are required")

    chat_service.get_owned_session(db, payload.session_id, user_id)
    entry = chat_service.save_chat_message(
        db, payload.session_id, payload.question, payload.answer, payload.suggested_question
    )
    return {"success": True, "history": entry}


@history_router.get("", response_model=ChatHistoryOverview)
async def get_chat_history_overview(
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Building chat history overview", extra={"user_id": user_id})
    return get_user_chat_history(db, user_id)
