"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from model.auth import IssuedToken, VerifiedIdentity
from utils.auth_settings import AuthSettings
from utils.error_handler import TokenSigningError

DEFAULT_EMAIL_DOMAIN = "ldap.lan"


def build_claims(identity: VerifiedIdentity, email_domain: str) -> Dict[str, Any]:
    """
    Derive the public identity claims from a verified username.
    """

    return {
        "email": f"{identity.username}@{email_domain}",
        "name": identity.username,
    }


def issue_token(
    identity: VerifiedIdentity,
    secret: str,
    ttl_seconds: int,
    algorithm: str = "HS256",
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
    now: Optional[datetime] = None,
) -> IssuedToken:
    """
    Create a signed JWT for the given identity.

    ``exp`` is an absolute epoch-seconds claim inside the signed payload, so
    the claims and the expiry cannot be altered independently.
    """

    if not secret:
        raise TokenSigningError("JWT secret is not configured")

    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(seconds=ttl_seconds)
    to_encode = {
        **build_claims(identity, email_domain),
        "iat": issued_at,
        "exp": expire,
        "jti": uuid.uuid4().hex,
    }

    try:
        token = jwt.encode(to_encode, secret, algorithm=algorithm)
    except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
        raise TokenSigningError(f"Could not sign token: {exc}") from exc

    return IssuedToken(signed_payload=token, expires_at=expire)


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """
    Verify signature and expiry of a token and return its claims.

    Raises ``jwt.InvalidTokenError`` subclasses when the token is not valid.
    """

    payload: Dict[str, Any] = jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={"require": ["exp", "email", "name"]},
    )
    return payload


class TokenIssuer:
    """
    Mints identity tokens with the configured secret, algorithm and domain.
    """

    def __init__(self, settings: AuthSettings) -> None:
        self.secret = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.ttl_seconds = settings.JWT_EXPIRE_SECONDS
        self.email_domain = settings.JWT_EMAIL_DOMAIN or DEFAULT_EMAIL_DOMAIN

    def issue(
        self, identity: VerifiedIdentity, ttl_seconds: Optional[int] = None
    ) -> IssuedToken:
        return issue_token(
            identity,
            self.secret,
            self.ttl_seconds if ttl_seconds is None else ttl_seconds,
            algorithm=self.algorithm,
            email_domain=self.email_domain,
        )

    def verify(self, token: str) -> Dict[str, Any]:
        return decode_token(token, self.secret, self.algorithm)
