from datetime import timedelta

import jwt
import pytest

from nums_api.core.config import get_settings
from nums_api.core.errors import AuthenticationError, ValidationError
from nums_api.services.auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("secret1")

    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)
    assert not verify_password("", hashed)
    assert not verify_password("secret1", "not-a-bcrypt-hash")


def test_short_password_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        hash_password("12345")
    assert excinfo.value.error_code == "PASSWORD_POLICY_VIOLATION"


def test_token_carries_identity():
    identity = decode_access_token(create_access_token(42, "alice123"))

    assert identity.user_id == 42
    assert identity.username == "alice123"
    assert identity.role is None


def test_expired_token_is_rejected():
    token = create_access_token(1, "alice123", ttl=timedelta(seconds=-5))

    with pytest.raises(AuthenticationError) as excinfo:
        decode_access_token(token)
    assert excinfo.value.error_code == "TOKEN_VERIFICATION_FAILED"


def test_tampered_token_is_rejected():
    token = create_access_token(1, "alice123")
    header, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    with pytest.raises(AuthenticationError):
        decode_access_token(".".join([header, payload, flipped]))


def test_token_signed_with_other_secret_is_rejected():
    settings = get_settings()
    forged = jwt.encode(
        {"sub": "1", "username": "alice123", "type": "access", "exp": 9999999999},
        "some-other-secret-that-is-long-enough",
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(AuthenticationError):
        decode_access_token(forged)


def test_token_without_subject_is_rejected():
    settings = get_settings()
    token = jwt.encode(
        {"username": "alice123", "type": "access", "exp": 9999999999},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(AuthenticationError):
        decode_access_token(token)
