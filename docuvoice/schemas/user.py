# docuvoice/schemas/user.py
from typing import Optional

from pydantic import BaseModel

from .base import BaseSchema


class UserSync(BaseModel):
    name: str
    email: str
    image_url: Optional[str] = None


class User(BaseSchema):
    id: str
    name: str
    email: str
    image_url: Optional[str] = None
    subscription: bool = False


class SubscriptionUpdate(BaseModel):
    subscription: bool


class CurrentUser(BaseModel):
    user_id: str
    user: Optional[User] = None
