# tests/v1/test_security.py
"""Tests for password hashing and access tokens."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from mingle.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_is_salted_and_verifiable(self):
        first = hash_password("s3cret")
        second = hash_password("s3cret")

        assert first != "s3cret"
        assert first != second
        assert verify_password("s3cret", first)
        assert verify_password("s3cret", second)

    def test_wrong_password_is_rejected(self):
        assert not verify_password("nope", hash_password("s3cret"))

    def test_malformed_hash_is_rejected(self):
        assert not verify_password("s3cret", "not-a-hash")


class TestAccessTokens:
    def test_round_trip_returns_user_id(self, test_settings):
        token = create_access_token(42, test_settings)

        assert decode_access_token(token, test_settings) == 42

    def test_token_claims(self, test_settings):
        token = create_access_token(7, test_settings)
        payload = jwt.decode(
            token, test_settings.secret_key, algorithms=[test_settings.jwt_algorithm]
        )

        assert payload["sub"] == "7"
        lifetime = payload["exp"] - payload["iat"]
        assert lifetime == pytest.approx(30 * 24 * 60 * 60, abs=2)

    def test_wrong_key_is_rejected(self, test_settings):
        token = create_access_token(1, test_settings)
        other = test_settings.model_copy(update={"secret_key": "another-key"})

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, other)

    def test_expired_token_is_rejected(self, test_settings):
        past = datetime.now(UTC) - timedelta(days=1)
        token = jwt.encode(
            {"sub": "1", "iat": int(past.timestamp()), "exp": past},
            test_settings.secret_key,
            algorithm=test_settings.jwt_algorithm,
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, test_settings)

    def test_missing_subject_is_rejected(self, test_settings):
        token = jwt.encode({"foo": "bar"}, test_settings.secret_key, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, test_settings)

    def test_non_numeric_subject_is_rejected(self, test_settings):
        token = jwt.encode({"sub": "abc"}, test_settings.secret_key, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, test_settings)

    def test_garbage_is_rejected(self, test_settings):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not.a.token", test_settings)
