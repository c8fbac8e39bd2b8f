from datetime import timedelta

import jwt
import pytest

from app.auth import create_access_token, decode_access_token, issue_session_token
from app.models import UserSession
from tests.factories.booking_factories import create_user


def test_token_round_trips_user_id() -> None:
    token = create_access_token(42)

    assert decode_access_token(token)["userId"] == 42


def test_expired_token_is_rejected() -> None:
    token = create_access_token(42, expires_delta=timedelta(seconds=-1))

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = jwt.encode({"userId": 42}, "some-other-secret-that-is-long-enough", algorithm="HS256")

    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(token)


def test_issue_session_token_registers_session(db) -> None:
    user = create_user(db)

    token = issue_session_token(db, user.id)
    db.commit()

    session = db.query(UserSession).filter(UserSession.token == token).one()
    assert session.user_id == user.id
