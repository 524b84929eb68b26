# docuvoice/models/user.py
from sqlalchemy import Column, String, Boolean

from ..database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(256), primary_key=True)  # Clerk user id
    name = Column(String(256), nullable=False)
    email = Column(String(256), nullable=False, unique=True)
    image_url = Column(String, nullable=True)
    subscription = Column(Boolean, nullable=False, default=False, server_default='0')
