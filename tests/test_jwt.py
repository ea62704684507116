from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.jwt import ExpiredToken, InvalidToken, TokenError, issue_jwt, verify_jwt

SECRET = "unit-secret"


def test_issued_token_verifies_to_user_id():
    token = issue_jwt("user-1", SECRET)

    assert verify_jwt(token, SECRET) == "user-1"


def test_token_expires_one_hour_after_issuance():
    token = issue_jwt("user-1", SECRET)
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert payload["exp"] - payload["iat"] == 3600


def test_token_still_valid_just_before_expiry():
    issued = datetime.now(timezone.utc) - timedelta(minutes=59)
    token = issue_jwt("user-1", SECRET, now=issued)

    assert verify_jwt(token, SECRET) == "user-1"


def test_token_rejected_after_one_hour():
    issued = datetime.now(timezone.utc) - timedelta(minutes=61)
    token = issue_jwt("user-1", SECRET, now=issued)

    with pytest.raises(ExpiredToken):
        verify_jwt(token, SECRET)


def test_token_signed_with_other_secret_is_invalid():
    token = issue_jwt("user-1", "some-other-secret")

    with pytest.raises(InvalidToken):
        verify_jwt(token, SECRET)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_token_is_invalid(token):
    with pytest.raises(InvalidToken):
        verify_jwt(token, SECRET)


def test_token_without_subject_is_invalid():
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"exp": exp}, SECRET, algorithm="HS256")

    with pytest.raises(TokenError):
        verify_jwt(token, SECRET)
