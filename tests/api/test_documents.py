# tests/api/test_documents.py
from datetime import datetime

from fastapi import status

from docuvoice.services.suggestions import DEFAULT_SUGGESTED_QUESTIONS, save_suggested_questions


def test_create_document(client):
    """Test saving pasted text as a document"""
    content = "Minutes of the planning meeting held on Monday."
    response = client.post(
        "/api/documents",
        json={
            "title": "Planning",
            "content": content,
            "document_type": "manual_text"
        }
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Planning"
    assert data["user_id"] == "user_1"
    assert data["content_length"] == len(content)
    assert data["document_type"] == "manual_text"


def test_create_document_without_content(client):
    response = client.post("/api/documents", json={"title": "Empty"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error"] == "Invalid request"
    assert any(d["field"] == "body.content" for d in data["details"])


def test_create_document_with_blank_content(client):
    response = client.post("/api/documents", json={"content": "   "})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Document content is required"


def test_get_document_with_sessions(client, sample_document, make_session):
    """Test getting a single document and its chat sessions"""
    make_session(sample_document, name="older", created_at=datetime(2024, 1, 1))
    make_session(sample_document, name="newer", created_at=datetime(2024, 2, 1))

    response = client.get(f"/api/documents/{sample_document.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["document"]["id"] == sample_document.id
    assert data["document"]["title"] == "Quarterly Report"
    assert [s["session_name"] for s in data["sessions"]] == ["newer", "older"]


def test_get_foreign_document(client, other_document):
    response = client.get(f"/api/documents/{other_document.id}")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Document not found"}


def test_list_documents(client, sample_document, other_document):
    """Test listing only the caller's documents"""
    response = client.get("/api/documents")

    assert response.status_code == status.HTTP_200_OK
    ids = [d["id"] for d in response.json()["documents"]]
    assert ids == [sample_document.id]


def test_list_documents_with_search(client, sample_document):
    client.post("/api/documents", json={"title": "Recipes", "content": "Flour, sugar and eggs"})

    response = client.get("/api/documents", params={"search": "revenue"})

    assert response.status_code == status.HTTP_200_OK
    assert [d["title"] for d in response.json()["documents"]] == ["Quarterly Report"]


def test_list_documents_rejects_bad_limit(client):
    response = client.get("/api/documents", params={"limit": 0})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_document(client, sample_document):
    """Test updating document metadata"""
    response = client.patch(
        f"/api/documents/{sample_document.id}",
        json={"summary": "Revenue up, costs flat."}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["summary"] == "Revenue up, costs flat."
    assert data["title"] == "Quarterly Report"


def test_update_document_rejects_empty_content(client, sample_document):
    for content in (None, "", "   "):
        response = client.patch(f"/api/documents/{sample_document.id}", json={"content": content})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Document content is required"

    detail = client.get(f"/api/documents/{sample_document.id}").json()
    assert detail["document"]["content"].startswith("The quarterly report")


def test_update_foreign_document(client, other_document):
    response = client.patch(f"/api/documents/{other_document.id}", json={"title": "Mine now"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_document(client, sample_document, sample_session, make_entry):
    """Test deleting a document and everything hanging off it"""
    document_id = sample_document.id
    make_entry(sample_session)

    response = client.delete(f"/api/documents/{document_id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] is True

    response = client.get(f"/api/documents/{document_id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND

    overview = client.get("/api/chat-history").json()
    assert overview["total_questions"] == 0


def test_delete_missing_document(client):
    response = client.delete("/api/documents/99999")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_document_sessions(client, sample_document, sample_session):
    response = client.get(f"/api/documents/{sample_document.id}/chat-sessions")

    assert response.status_code == status.HTTP_200_OK
    assert [s["id"] for s in response.json()] == [sample_session.id]


def test_suggested_questions_seed_defaults(client, sample_document):
    response = client.get(f"/api/documents/{sample_document.id}/suggested-questions")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == DEFAULT_SUGGESTED_QUESTIONS


def test_suggested_questions_returns_saved(client, db_session, sample_document):
    save_suggested_questions(db_session, sample_document.id, ["Why?", "How?"])

    response = client.get(f"/api/documents/{sample_document.id}/suggested-questions")

    assert response.json() == ["Why?", "How?"]


def test_replace_suggested_questions(client, sample_document):
    client.post(f"/api/documents/{sample_document.id}/suggested-questions", json={"questions": ["A?", "B?"]})
    response = client.post(
        f"/api/documents/{sample_document.id}/suggested-questions",
        json={"questions": ["C?"]}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == ["C?"]
    assert client.get(f"/api/documents/{sample_document.id}/suggested-questions").json() == ["C?"]


def test_documents_require_sign_in(anon_client):
    response = anon_client.get("/api/documents")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthorized"}
