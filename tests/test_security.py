from taskkeeper.utils.security import (
    hash_password,
    new_session_token,
    sign_session_token,
    unsign_session_token,
    verify_password,
)


def test_hash_is_salted_and_verifies():
    first = hash_password("password123")
    second = hash_password("password123")

    assert first != second
    assert "password123" not in first
    assert first.startswith("$scrypt$")
    assert verify_password("password123", first)
    assert not verify_password("password124", first)


def test_session_tokens_are_unique():
    assert len({new_session_token() for _ in range(50)}) == 50


def test_signed_token_round_trip():
    signed = sign_session_token("abc", "secret")

    assert unsign_session_token(signed, "secret") == "abc"


def test_tampered_or_foreign_cookie_is_rejected():
    signed = sign_session_token("abc", "secret")

    assert unsign_session_token(signed, "other-secret") is None
    head, _, _ = signed.rpartition(".")
    assert unsign_session_token(head + "." + "A" * 43, "secret") is None
    assert unsign_session_token("not-a-token", "secret") is None
