# File: tests/test_security.py

from datetime import timedelta

import pytest

from app.core.errors import AuthenticationError
from app.core.security import PasswordHasher, TokenCodec


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def codec():
    return TokenCodec(secret="unit-test-secret-that-is-long-enough", expire_minutes=5)


def test_hash_is_salted_and_verifiable(hasher):
    first = hasher.hash("Passw0rd")
    second = hasher.hash("Passw0rd")
    assert first != second
    assert hasher.verify("Passw0rd", first)
    assert not hasher.verify("passw0rd", first)


def test_long_passwords_are_truncated_consistently(hasher):
    password = "Aa1" + "x" * 100
    hashed = hasher.hash(password)
    assert hasher.verify(password, hashed)


def test_token_roundtrip(codec):
    token = codec.create_access_token("user-1", extra={"email": "jane@x.com"})
    payload = codec.decode(token)
    assert payload["sub"] == "user-1"
    assert payload["email"] == "jane@x.com"
    assert payload["exp"] > payload["iat"]


def test_any_tampered_character_invalidates_token(codec):
    token = codec.create_access_token("user-1")
    # the last char of a base64url segment may only carry padding bits
    positions = [
        i for i, ch in enumerate(token)
        if ch != "." and i + 1 < len(token) and token[i + 1] != "."
    ]
    for i in positions:
        swapped = "A" if token[i] != "A" else "B"
        tampered = token[:i] + swapped + token[i + 1:]
        with pytest.raises(AuthenticationError):
            codec.decode(tampered)


def test_expired_token(codec):
    token = codec.create_access_token("user-1", expires_delta=timedelta(seconds=-1))
    with pytest.raises(AuthenticationError) as exc:
        codec.decode(token)
    assert exc.value.message == "Token expired"


def test_token_signed_with_other_secret(codec):
    other = TokenCodec(secret="a-completely-different-secret-value")
    with pytest.raises(AuthenticationError) as exc:
        codec.decode(other.create_access_token("user-1"))
    assert exc.value.message == "Invalid token"


def test_garbage_token(codec):
    with pytest.raises(AuthenticationError):
        codec.decode("not-a-jwt")
