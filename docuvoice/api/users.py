# docuvoice/api/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.user import CurrentUser, SubscriptionUpdate, User as UserSchema, UserSync
from ..services import users as user_service
from ..utils.logging import api_logger
from .deps import get_current_user_id

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=CurrentUser)
async def get_me(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return {"user_id": user_id, "user": user_service.get_user(db, user_id)}


@router.post("/me", response_model=UserSchema)
async def sync_me(payload: UserSync, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    api_logger.info("Syncing signed-in user", extra={"user_id": user_id})
    return user_service.ensure_user(db, user_id, payload.name, payload.email, payload.image_url)


@router.put("/me/subscription", response_model=UserSchema)
async def update_subscription(
        payload: SubscriptionUpdate,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    return user_service.set_subscription(db, user_id, payload.subscription)
