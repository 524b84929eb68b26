# docuvoice/services/suggestions.py
from typing import List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import SuggestedQuestion
from ..utils.logging import db_logger
from .documents import storage_failure, utcnow

DEFAULT_SUGGESTED_QUESTIONS = [
    "What is the main topic of this document?",
    "Can you summarize the key points?",
    "What are the important details I should know?",
    "How can I apply this information?",
    "What are the next steps mentioned?",
]


def save_suggested_questions(db: Session, document_id: int, questions: Sequence[str]) -> List[SuggestedQuestion]:
    """Replace every suggested question of a document with ``questions``, in one transaction."""
    now = utcnow()
    rows = [
        SuggestedQuestion(
            document_id=document_id,
            question=question,
            question_order=index,
            created_at=now,
        )
        for index, question in enumerate(questions, start=1)
    ]
    try:
        removed = db.query(SuggestedQuestion) \
            .filter(SuggestedQuestion.document_id == document_id) \
            .delete(synchronize_session=False)
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to save suggested questions", e, document_id=document_id)

    db_logger.info("Replaced suggested questions", extra={
        "document_id": document_id,
        "removed": removed,
        "saved": len(rows)
    })
    return rows


def get_suggested_questions(db: Session, document_id: int) -> List[str]:
    try:
        rows = db.query(SuggestedQuestion) \
            .filter(SuggestedQuestion.document_id == document_id) \
            .order_by(SuggestedQuestion.question_order.asc(), SuggestedQuestion.id.asc()) \
            .all()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch suggested questions", e, document_id=document_id)
    return [row.question for row in rows]
