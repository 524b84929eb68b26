# tests/services/test_user_service.py
import pytest

from docuvoice.errors import NotFoundError
from docuvoice.services.users import ensure_user, get_user, set_subscription


def test_ensure_user_creates_once(db_session):
    created = ensure_user(db_session, "user_1", "Ada", "ada@example.com")
    again = ensure_user(db_session, "user_1", "Someone Else", "other@example.com")

    assert created.subscription is False
    assert again.name == "Ada"
    assert get_user(db_session, "user_1").email == "ada@example.com"


def test_set_subscription(db_session):
    ensure_user(db_session, "user_1", "Ada", "ada@example.com")

    user = set_subscription(db_session, "user_1", True)

    assert user.subscription is True


def test_set_subscription_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        set_subscription(db_session, "nobody", True)
