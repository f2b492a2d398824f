from datetime import timedelta

import pytest
from fastapi import HTTPException

from services.auth_service import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("testpassword")
    assert hashed != "testpassword"
    assert verify_password("testpassword", hashed)
    assert not verify_password("wrongpassword", hashed)


def test_token_carries_user_id():
    token = create_access_token(data={"sub": "42"})
    assert decode_access_token(token).user_id == 42


def test_expired_token_is_rejected():
    token = create_access_token(data={"sub": "42"}, expires_delta=timedelta(minutes=-1))
    with pytest.raises(HTTPException) as exc_info:
        decode_access_token(token)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Not authorized, token failed"


def test_token_without_subject_is_rejected():
    token = create_access_token(data={"role": "admin"})
    with pytest.raises(HTTPException):
        decode_access_token(token)
