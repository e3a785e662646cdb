from datetime import timedelta

import jwt
import pytest

from tutorlink.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    token_from_header,
    verify_password,
)
from tutorlink.core.config import settings
from tutorlink.core.exceptions import UnauthorizedException


def test_token_round_trip_carries_sub_and_role():
    payload = decode_access_token(create_access_token("user-1", "TEACHER"))
    assert payload["sub"] == "user-1"
    assert payload["role"] == "TEACHER"
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token("user-1", "STUDENT", expires_delta=timedelta(seconds=-5))
    with pytest.raises(UnauthorizedException):
        decode_access_token(token)


def test_token_without_role_is_rejected():
    token = jwt.encode(
        {"sub": "user-1"}, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )
    with pytest.raises(UnauthorizedException):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": "u", "role": "STUDENT"}, "another-key", algorithm="HS256")
    with pytest.raises(UnauthorizedException):
        decode_access_token(token)


def test_token_from_header():
    assert token_from_header("Bearer abc") == "abc"
    assert token_from_header("bearer  abc ") == "abc"
    assert token_from_header("Basic abc") is None
    assert token_from_header("Bearer ") is None
    assert token_from_header(None) is None


def test_password_hashing():
    hashed = get_password_hash("TestPassword123!")
    assert hashed != "TestPassword123!"
    assert verify_password("TestPassword123!", hashed)
    assert not verify_password("wrong-password", hashed)
    assert not verify_password("anything", "not-a-bcrypt-hash")
