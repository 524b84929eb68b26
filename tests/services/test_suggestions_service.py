# tests/services/test_suggestions_service.py
from docuvoice.models import SuggestedQuestion
from docuvoice.services.suggestions import (
    DEFAULT_SUGGESTED_QUESTIONS,
    get_suggested_questions,
    save_suggested_questions,
)


def test_save_assigns_order_from_one(db_session, sample_document):
    rows = save_suggested_questions(db_session, sample_document.id, ["A?", "B?", "C?"])

    assert [row.question_order for row in rows] == [1, 2, 3]
    assert get_suggested_questions(db_session, sample_document.id) == ["A?", "B?", "C?"]


def test_second_save_replaces_first(db_session, sample_document):
    save_suggested_questions(db_session, sample_document.id, ["Old 1?", "Old 2?", "Old 3?"])
    save_suggested_questions(db_session, sample_document.id, ["New?"])

    assert get_suggested_questions(db_session, sample_document.id) == ["New?"]
    assert db_session.query(SuggestedQuestion) \
        .filter(SuggestedQuestion.document_id == sample_document.id).count() == 1


def test_replace_is_per_document(db_session, sample_document, other_document):
    save_suggested_questions(db_session, other_document.id, ["Theirs?"])
    save_suggested_questions(db_session, sample_document.id, ["Mine?"])

    assert get_suggested_questions(db_session, other_document.id) == ["Theirs?"]


def test_empty_document_has_no_questions(db_session, sample_document):
    assert get_suggested_questions(db_session, sample_document.id) == []
    assert len(DEFAULT_SUGGESTED_QUESTIONS) == 5
