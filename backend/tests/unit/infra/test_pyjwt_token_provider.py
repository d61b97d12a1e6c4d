from __future__ import annotations

import jwt
import pytest
from freezegun import freeze_time

from pressroom.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from pressroom.services._shared.errors import TokenInvalid

CLAIMS = {"sub": "user-1", "email": "a@example.com", "role": "USER"}


@pytest.fixture()
def provider() -> PyJWTTokenProvider:
    return PyJWTTokenProvider(access_secret="access-secret", refresh_secret="refresh-secret")


def test_access_token_carries_claims_and_metadata(provider):
    token = provider.create_access_token(CLAIMS, expires_in=900)
    payload = provider.decode_access_token(token)

    assert payload["sub"] == "user-1"
    assert payload["email"] == "a@example.com"
    assert payload["role"] == "USER"
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 900
    assert payload["jti"]


def test_two_tokens_minted_together_differ(provider):
    with freeze_time("2026-01-01 00:00:00"):
        first = provider.create_refresh_token(CLAIMS, expires_in=60)
        second = provider.create_refresh_token(CLAIMS, expires_in=60)
    assert first != second


def test_refresh_token_is_rejected_as_access_token(provider):
    refresh = provider.create_refresh_token(CLAIMS, expires_in=60)
    with pytest.raises(TokenInvalid):
        provider.decode_access_token(refresh)


def test_access_token_is_rejected_as_refresh_token(provider):
    access = provider.create_access_token(CLAIMS, expires_in=60)
    with pytest.raises(TokenInvalid):
        provider.decode_refresh_token(access)


def test_wrong_type_claim_under_right_secret_is_rejected(provider):
    forged = jwt.encode({**CLAIMS, "type": "access", "exp": 4102444800}, "refresh-secret", algorithm="HS256")
    with pytest.raises(TokenInvalid, match="expected a refresh token"):
        provider.decode_refresh_token(forged)


def test_expired_refresh_token_is_rejected(provider):
    with freeze_time("2026-01-01 00:00:00"):
        token = provider.create_refresh_token(CLAIMS, expires_in=60)
    with freeze_time("2026-01-01 00:01:01"), pytest.raises(TokenInvalid):
        provider.decode_refresh_token(token)


def test_garbage_is_rejected(provider):
    with pytest.raises(TokenInvalid):
        provider.decode_refresh_token("not-a-jwt")


def test_missing_secret_refuses_to_sign():
    provider = PyJWTTokenProvider(access_secret="", refresh_secret="x")
    with pytest.raises(RuntimeError):
        provider.create_access_token(CLAIMS, expires_in=60)
