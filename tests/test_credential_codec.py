import time
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from myumkm.infrastructure.security import (
    ConfigurationError,
    CredentialCodec,
    InvalidCredentialError,
)
from conftest import JWT_SECRET, make_token


def _flip(char: str) -> str:
    return "A" if char != "A" else "B"


def test_issue_then_verify_round_trip(codec):
    token = codec.issue("user_abc123def456", "a@x.com", name="Alice")
    claims = codec.verify(token)

    assert claims.subject_id == "user_abc123def456"
    assert claims.email == "a@x.com"
    assert claims.name == "Alice"
    assert claims.issuer == "my-umkm"
    assert claims.audience == "user"
    assert claims.issued_at < claims.expires_at


def test_lifetime_is_thirty_days(codec):
    payload = jwt.decode(codec.issue("user_1", "a@x.com"), options={"verify_signature": False})
    assert payload["exp"] - payload["iat"] == 30 * 24 * 60 * 60
    assert "name" not in payload


def test_expired_token_is_rejected():
    long_ago = datetime.now(timezone.utc) - timedelta(days=31)
    old_codec = CredentialCodec(secret=JWT_SECRET, clock=lambda: long_ago)
    token = old_codec.issue("user_1", "a@x.com")

    with pytest.raises(InvalidCredentialError):
        CredentialCodec(secret=JWT_SECRET).verify(token)


@pytest.mark.parametrize("position", ["first", "middle"])
def test_tampered_signature_is_rejected(codec, position):
    header, payload, signature = codec.issue("user_1", "a@x.com").split(".")
    i = 0 if position == "first" else len(signature) // 2
    tampered_sig = signature[:i] + _flip(signature[i]) + signature[i + 1:]

    with pytest.raises(InvalidCredentialError):
        codec.verify(".".join([header, payload, tampered_sig]))


def test_wrong_secret_is_rejected(codec):
    other = CredentialCodec(secret="another-secret")
    with pytest.raises(InvalidCredentialError):
        codec.verify(other.issue("user_1", "a@x.com"))


@pytest.mark.parametrize(
    "overrides",
    [{"iss": "someone-else"}, {"aud": "admin"}],
)
def test_wrong_issuer_or_audience_is_rejected(codec, overrides):
    with pytest.raises(InvalidCredentialError):
        codec.verify(make_token(**overrides))


def test_missing_identity_claim_is_rejected(codec):
    now = int(time.time())
    token = jwt.encode(
        {"email": "a@x.com", "iss": "my-umkm", "aud": "user", "iat": now, "exp": now + 60},
        JWT_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidCredentialError):
        codec.verify(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_token_is_rejected(codec, token):
    with pytest.raises(InvalidCredentialError) as exc_info:
        codec.verify(token)
    assert str(exc_info.value) == "Invalid or expired token"


def test_missing_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        CredentialCodec(secret="")
