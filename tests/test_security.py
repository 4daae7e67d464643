import pytest
from jose import jwt

from app.core.exceptions import Unauthenticated
from app.core.security import TokenService, hash_password, verify_password


def test_password_hash_roundtrip():
    hashed = hash_password("pw123456", rounds=4)
    assert hashed != "pw123456"
    assert hashed.startswith("$2")
    assert verify_password("pw123456", hashed)
    assert not verify_password("wrong", hashed)


def test_password_hash_is_salted():
    assert hash_password("pw123456", rounds=4) != hash_password("pw123456", rounds=4)


def test_verify_password_rejects_garbage_hash_and_long_input():
    assert not verify_password("pw123456", "not-a-bcrypt-hash")
    hashed = hash_password("a" * 72, rounds=4)
    assert not verify_password("a" * 80, hashed)


def test_issue_and_verify_token():
    tokens = TokenService("secret-a")
    token = tokens.issue_token("user-1", "a@b.com")

    data = tokens.verify_token(token)
    assert data.user_id == "user-1"
    assert data.email == "a@b.com"

    claims = jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_tokens_are_unique_per_issue():
    tokens = TokenService("secret-a")
    assert tokens.issue_token("user-1", "a@b.com") != tokens.issue_token("user-1", "a@b.com")


def test_token_signed_with_other_secret_is_rejected():
    token = TokenService("secret-a").issue_token("user-1", "a@b.com")
    with pytest.raises(Unauthenticated):
        TokenService("secret-b").verify_token(token)


@pytest.mark.parametrize("token", ["", None, "garbage", "a.b.c", "Bearer x"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(Unauthenticated):
        TokenService("secret-a").verify_token(token)


def test_expired_token_is_rejected():
    tokens = TokenService("secret-a", expire_minutes=-1)
    token = tokens.issue_token("user-1", "a@b.com")
    with pytest.raises(Unauthenticated) as excinfo:
        tokens.verify_token(token)
    assert excinfo.value.status_code == 401


def test_token_without_identity_claims_is_rejected():
    token = jwt.encode({"sub": "user-1", "exp": 9999999999}, "secret-a", algorithm="HS256")
    with pytest.raises(Unauthenticated):
        TokenService("secret-a").verify_token(token)


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService("")
