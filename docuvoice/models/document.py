# docuvoice/models/document.py
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(256), nullable=False, index=True)
    title = Column(String(500), nullable=True)
    content = Column(Text, nullable=False)
    summary = Column(Text, nullable=True)
    content_length = Column(Integer, nullable=True)
    document_type = Column(String(50), nullable=True)  # 'text', 'pdf', 'doc', 'manual_text'
    file_name = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    # Deletes cascade through the service layer, not the ORM
    sessions = relationship("ChatSession", back_populates="document", order_by="ChatSession.created_at.desc()")
    suggested_questions = relationship(
        "SuggestedQuestion", back_populates="document", order_by="SuggestedQuestion.question_order"
    )
