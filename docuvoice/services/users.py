# docuvoice/services/users.py
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import User
from ..utils.logging import db_logger
from .documents import storage_failure


def get_user(db: Session, user_id: str) -> Optional[User]:
    try:
        return db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to fetch user", e, user_id=user_id)


def ensure_user(db: Session, user_id: str, name: str, email: str, image_url: Optional[str] = None) -> User:
    """Create the user row on first sign-in; an existing row is returned untouched."""
    user = get_user(db, user_id)
    if user:
        return user

    user = User(id=user_id, name=name, email=email, image_url=image_url, subscription=False)
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to create user", e, user_id=user_id)

    db_logger.info("Created user on first sign-in", extra={"user_id": user_id})
    return user


def set_subscription(db: Session, user_id: str, subscribed: bool) -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    try:
        user.subscription = subscribed
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        raise storage_failure(db, "Failed to update subscription", e, user_id=user_id)

    db_logger.info("Updated subscription", extra={"user_id": user_id, "subscription": subscribed})
    return user
