# docuvoice/api/ai.py
import time
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import DocuVoiceError, UnauthorizedError
from ..schemas.ai import (
    ChatRequest,
    ChatResponse,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from ..services import chat as chat_service
from ..services import documents as document_service
from ..services import suggestions as suggestion_service
from ..services.ai import AIService
from ..utils.logging import api_logger
from .deps import get_ai_service, get_optional_user_id

router = APIRouter(prefix="/api", tags=["ai"])


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise UnauthorizedError()
    return user_id


@router.post("/chat", response_model=ChatResponse)
async def chat(
        payload: ChatRequest,
        user_id: Optional[str] = Depends(get_optional_user_id),
        ai: AIService = Depends(get_ai_service),
        db: Session = Depends(get_db)
):
    """Answer a question from a document's text.

    With ``document_id`` the document content is the default context and the
    exchange is appended to the document's most recent chat session.
    """
    api_logger.info("Answering question", extra={
        "document_id": payload.document_id,
        "question_length": len(payload.question or "")
    })

    start_time = time.time()
    document = None
    context = payload.context
    if payload.document_id is not None:
        document = document_service.get_owned_document(db, payload.document_id, _require_user(user_id))
        context = context or document.content

    try:
        answer = await ai.answer_question(payload.question, context)
    except DocuVoiceError as e:
        api_logger.error("Chat request failed", extra={"error": e.message, "details": e.details})
        raise

    response = {
        "answer": answer,
        "question": payload.question,
        "context_length": len(context),
    }
    if document is not None:
        session = chat_service.get_or_create_session(db, user_id, document.id)
        entry = chat_service.save_chat_message(
            db, session.id, payload.question, answer, payload.suggested_question
        )
        response.update(session_id=session.id, history_id=entry.id)

    api_logger.info("Answered question", extra={
        "answer_length": len(answer),
        "execution_time_ms": round((time.time() - start_time) * 1000, 2)
    })
    return response


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
        payload: SummarizeRequest,
        user_id: Optional[str] = Depends(get_optional_user_id),
        ai: AIService = Depends(get_ai_service),
        db: Session = Depends(get_db)
):
    api_logger.info("Starting summary", extra={
        "document_id": payload.document_id,
        "text_length": len(payload.text or "")
    })

    text = payload.text
    if payload.document_id is not None:
        document = document_service.get_owned_document(db, payload.document_id, _require_user(user_id))
        text = text or document.content

    try:
        summary = await ai.summarize(text)
    except DocuVoiceError as e:
        api_logger.error("Summary request failed", extra={"error": e.message, "details": e.details})
        raise

    if payload.document_id is not None:
        document_service.update_document(db, payload.document_id, summary=summary)

    return {
        "summary": summary,
        "original_length": len(text),
        "summary_length": len(summary),
    }


@router.post("/generate-questions", response_model=GenerateQuestionsResponse)
async def generate_questions(
        payload: GenerateQuestionsRequest,
        user_id: Optional[str] = Depends(get_optional_user_id),
        ai: AIService = Depends(get_ai_service),
        db: Session = Depends(get_db)
):
    api_logger.info("Generating questions", extra={
        "document_id": payload.document_id,
        "text_length": len(payload.text or "")
    })

    text = payload.text
    if payload.document_id is not None:
        document = document_service.get_owned_document(db, payload.document_id, _require_user(user_id))
        text = text or document.content

    try:
        questions = await ai.generate_questions(text)
    except DocuVoiceError as e:
        api_logger.error("Question generation failed", extra={"error": e.message, "details": e.details})
        raise

    if payload.document_id is not None:
        suggestion_service.save_suggested_questions(db, payload.document_id, questions)

    api_logger.info("Generated questions", extra={"question_count": len(questions)})
    return {
        "questions": questions,
        "document_length": len(text),
        "question_count": len(questions),
    }
