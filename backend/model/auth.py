"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from datetime import datetime
from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class LoginRequest(BaseModel):
    """
    Request body for LDAP login.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    username: StrictStr = Field(..., description="LDAP username")
    password: StrictStr = Field(..., description="Password", repr=False)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("blank")
        return value

    # Password is kept verbatim; only whitespace-only values are rejected
    @field_validator("password")
    @classmethod
    def reject_blank_password(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("blank")
        return value


class VerifiedIdentity(BaseModel):
    """
    Identity proven by a successful directory bind.
    """

    model_config = ConfigDict(frozen=True)

    username: str


class IssuedToken(BaseModel):
    """
    Signed identity token and its absolute expiry (UTC).
    """

    model_config = ConfigDict(frozen=True)

    signed_payload: str
    expires_at: datetime


class FieldError(BaseModel):
    field: str
    reason: str


class AuthSuccess(BaseModel):
    kind: Literal["success"] = "success"
    redirect: str


class AuthValidationFailure(BaseModel):
    kind: Literal["validation_failure"] = "validation_failure"
    errors: List[FieldError]


class AuthInvalidCredentials(BaseModel):
    kind: Literal["invalid_credentials"] = "invalid_credentials"
    username: str


class AuthServerError(BaseModel):
    kind: Literal["server_error"] = "server_error"


AuthOutcome = Union[
    AuthSuccess, AuthValidationFailure, AuthInvalidCredentials, AuthServerError
]


class LoginSuccessResponse(BaseModel):
    """
    Response payload after login.
    """

    success: bool = True
    redirect: str


class ErrorBody(BaseModel):
    """
    Response payload for every failed login.
    """

    success: bool = False
    error: str
    validationErrors: List[FieldError] = Field(default_factory=list)
