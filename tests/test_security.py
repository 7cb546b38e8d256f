from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from stockkeeper.core.config import settings
from stockkeeper.core.exceptions import InvalidToken
from stockkeeper.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_is_salted_and_verifies():
    first = get_password_hash("secret1")
    second = get_password_hash("secret1")

    assert first != "secret1"
    assert first != second
    assert verify_password("secret1", first)
    assert not verify_password("secret2", first)


def test_verify_password_rejects_garbage_digest():
    assert not verify_password("secret1", "not-a-bcrypt-hash")
    assert not verify_password("", get_password_hash("secret1"))


def test_fresh_token_round_trips_identity():
    token = create_access_token(user_id=42, username="alice")

    identity = decode_access_token(token)

    assert identity.user_id == 42
    assert identity.username == "alice"


def test_token_expires_after_24_hours():
    issued = datetime.now(timezone.utc)
    claims = jwt.get_unverified_claims(create_access_token(1, "alice", issued_at=issued))

    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_token_older_than_24_hours_is_rejected():
    token = create_access_token(1, "alice", issued_at=datetime.now(timezone.utc) - timedelta(hours=25))

    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {"sub": "1", "username": "alice", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        "someone-else",
        algorithm=settings.ALGORITHM,
    )

    with pytest.raises(InvalidToken):
        decode_access_token(forged)


@pytest.mark.parametrize("token", ["", "abc", "a.b.c"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_token_without_identity_claims_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"exp": int((now + timedelta(hours=1)).timestamp())},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_long_password_hashes_and_verifies():
    password = "p" * 80
    digest = get_password_hash(password)

    assert verify_password(password, digest)
    # Only the first 72 bytes count, same as bcrypt implementations that truncate
    assert verify_password("p" * 72 + "different", digest)
    assert not verify_password("p" * 71, digest)
