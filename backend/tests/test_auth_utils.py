"""
Token issuance and verification tests.
"""

import time

import jwt
import pytest

from model.auth import VerifiedIdentity
from utils.auth import TokenIssuer, decode_token, issue_token
from utils.error_handler import TokenSigningError

DAY = 24 * 3600
TEST_SECRET = "test-secret-key-with-enough-length-0123"


def test_round_trip_claims(settings):
    issuer = TokenIssuer(settings)
    before = time.time()
    token = issuer.issue(VerifiedIdentity(username="u"))

    claims = decode_token(token.signed_payload, TEST_SECRET)
    assert claims["email"] == "u@ldap.lan"
    assert claims["name"] == "u"
    assert claims["exp"] - claims["iat"] == DAY
    assert before + DAY - 5 <= claims["exp"] <= time.time() + DAY + 5
    assert int(token.expires_at.timestamp()) == claims["exp"]


def test_verify_with_other_secret_fails(settings):
    token = TokenIssuer(settings).issue(VerifiedIdentity(username="u"))
    with pytest.raises(jwt.InvalidSignatureError):
        decode_token(token.signed_payload, "another-secret-key-of-similar-length-99")


def test_tampered_payload_rejected(settings):
    token = TokenIssuer(settings).issue(VerifiedIdentity(username="u"))
    forged = jwt.encode(
        {"email": "admin@ldap.lan", "name": "admin", "exp": 9999999999},
        "guessed-secret-key-that-is-long-enough-1",
        algorithm="HS256",
    )
    header, _, signature = token.signed_payload.split(".")
    spliced = ".".join([header, forged.split(".")[1], signature])
    with pytest.raises(jwt.InvalidTokenError):
        decode_token(spliced, TEST_SECRET)


def test_expired_token_rejected():
    token = issue_token(VerifiedIdentity(username="u"), TEST_SECRET, ttl_seconds=-10)
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_token(token.signed_payload, TEST_SECRET)


def test_same_identity_yields_independent_tokens(settings):
    issuer = TokenIssuer(settings)
    first = issuer.issue(VerifiedIdentity(username="alice"))
    second = issuer.issue(VerifiedIdentity(username="alice"))
    assert first.signed_payload != second.signed_payload
    assert issuer.verify(first.signed_payload)["name"] == "alice"
    assert issuer.verify(second.signed_payload)["name"] == "alice"


def test_configured_email_domain(settings):
    issuer = TokenIssuer(
        settings.model_copy(update={"JWT_EMAIL_DOMAIN": "corp.example"})
    )
    token = issuer.issue(VerifiedIdentity(username="bob"))
    assert issuer.verify(token.signed_payload)["email"] == "bob@corp.example"


def test_missing_secret_is_fatal():
    with pytest.raises(TokenSigningError):
        issue_token(VerifiedIdentity(username="u"), "", ttl_seconds=DAY)
