# tests/conftest.py
import os
import shutil
import tempfile
from datetime import datetime

# Configure the application before it is imported
_TEST_STORAGE = tempfile.mkdtemp(prefix="docuvoice-test-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_PATH"] = _TEST_STORAGE
os.environ["ENVIRONMENT"] = "development"
os.environ["GOOGLE_AI_API_KEY"] = ""
for _name in ("CLERK_JWKS_URL", "CLERK_JWT_KEY", "CLERK_ISSUER"):
    os.environ.pop(_name, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docuvoice.main import app
from docuvoice.database import Base, get_db
from docuvoice.api.deps import get_ai_service, get_current_user_id, get_optional_user_id
from docuvoice.models import ChatHistoryEntry, ChatSession
from docuvoice.services.ai import AIService
from docuvoice.services.documents import save_document

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_USER_ID = "user_1"
OTHER_USER_ID = "user_2"
CHAT_MODEL = "test-chat-model"
QUESTIONS_MODEL = "test-questions-model"


class FakeGeminiClient:
    """Records prompts and returns a canned reply or raises a canned error"""

    def __init__(self):
        self.calls = []
        self.reply = "This is a generated answer."
        self.error = None

    async def generate(self, prompt, model):
        self.calls.append({"prompt": prompt, "model": model})
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self):
        pass


@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return engine


@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test, rolled back afterwards"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def fake_ai():
    return FakeGeminiClient()


@pytest.fixture
def ai_service(fake_ai):
    return AIService(fake_ai, chat_model=CHAT_MODEL, questions_model=QUESTIONS_MODEL)


def _override_db(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
    return override_get_db


@pytest.fixture
def client(db_session, ai_service):
    """Test client signed in as TEST_USER_ID, using the test database and fake AI client"""
    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_current_user_id] = lambda: TEST_USER_ID
    app.dependency_overrides[get_optional_user_id] = lambda: TEST_USER_ID
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db_session, ai_service):
    """Test client without identity overrides; requests carry no session token"""
    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_document(db_session):
    """Create a sample document owned by the test user"""
    return save_document(
        db_session,
        owner_id=TEST_USER_ID,
        content="The quarterly report explains how revenue grew by twelve percent "
                "while operating costs stayed flat across all regions.",
        title="Quarterly Report",
        file_name="report.pdf",
        document_type="pdf",
    )


@pytest.fixture
def other_document(db_session):
    """A document that belongs to somebody else"""
    return save_document(
        db_session,
        owner_id=OTHER_USER_ID,
        content="Private notes that only the second user may read.",
        title="Private Notes",
    )


@pytest.fixture
def make_session(db_session):
    """Insert a chat session with an explicit creation time"""
    def _make_session(document, name="Session", created_at=None):
        created_at = created_at or datetime(2024, 1, 1, 12, 0, 0)
        session = ChatSession(
            user_id=document.user_id,
            document_id=document.id,
            session_name=name,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(session)
        db_session.commit()
        db_session.refresh(session)
        return session
    return _make_session


@pytest.fixture
def make_entry(db_session):
    """Insert a chat history entry with an explicit creation time"""
    def _make_entry(session, question="What is X?", answer="X is Y.", created_at=None, suggested=False):
        created_at = created_at or datetime(2024, 1, 1, 12, 30, 0)
        entry = ChatHistoryEntry(
            session_id=session.id,
            question=question,
            answer=answer,
            suggested_question=suggested,
            created_at=created_at,
        )
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        return entry
    return _make_entry


@pytest.fixture
def sample_session(make_session, sample_document):
    return make_session(sample_document, name="Reading session")


@pytest.fixture(scope="session", autouse=True)
def cleanup_test_storage():
    """Remove log files written during the run"""
    yield
    shutil.rmtree(_TEST_STORAGE, ignore_errors=True)
