# docuvoice/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import settings
from .utils.logging import db_logger

SQLALCHEMY_DATABASE_URL = str(settings.DATABASE_URL)
db_logger.info("Configuring database engine", extra={
    "backend": SQLALCHEMY_DATABASE_URL.split(":", 1)[0]
})

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {},
    pool_pre_ping=not SQLALCHEMY_DATABASE_URL.startswith("sqlite"),
    echo=False
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db(bind=None):
    """Create all tables that don't exist yet"""
    from . import models  # noqa: F401  registers the mappers on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
    db_logger.info("Database tables ensured", extra={
        "tables": sorted(Base.metadata.tables.keys())
    })

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
