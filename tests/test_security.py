import base64
import json
import time

from minilink_api.app.core.config import settings
from minilink_api.app.core.security import (
    create_access_token,
    create_user_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_is_salted():
    first = hash_password("secret1")
    second = hash_password("secret1")
    assert first != second
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)
    assert not verify_password("secret2", first)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("secret1", "")
    assert not verify_password("secret1", "nothex$nothex")


def test_user_token_claims(monkeypatch):
    monkeypatch.setattr(settings, "secret_key", "unit-secret")
    before = int(time.time())
    payload = decode_access_token(create_user_token(7))
    assert payload["sub"] == "7"
    assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60
    assert payload["iat"] >= before


def test_zero_lifetime_is_not_the_default(monkeypatch):
    monkeypatch.setattr(settings, "secret_key", "unit-secret")
    token = create_access_token({"sub": "7"}, expires_delta=0)
    _, payload, _ = token.split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    assert claims["exp"] == claims["iat"]


def test_decode_rejects_bad_tokens(monkeypatch):
    monkeypatch.setattr(settings, "secret_key", "unit-secret")
    token = create_user_token(1)
    header, payload, signature = token.split(".")
    other = create_user_token(2).split(".")[1]

    assert decode_access_token(f"{header}.{other}.{signature}") is None
    assert decode_access_token("only.two") is None
    assert decode_access_token("") is None
    assert decode_access_token(create_access_token({"sub": "1"}, expires_delta=-1)) is None

    monkeypatch.setattr(settings, "secret_key", "rotated")
    assert decode_access_token(token) is None
