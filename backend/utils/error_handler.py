"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from starlette.responses import JSONResponse, Response

from model.auth import FieldError


class ErrorMessages:
    """Client-visible error discriminators"""

    VALIDATION_ERROR = "ValidationError"
    INVALID_CREDENTIALS = "InvalidCredentialsError"
    SERVER_ERROR = "ServerError"

    # Field validation reasons
    FIELD_REQUIRED = "Field is required"
    FIELD_NOT_STRING = "Must be a string"
    FIELD_BLANK = "Must not be empty or whitespace only"


class AuthError(Exception):
    """Base class for failures raised inside the authentication pipeline."""


class CredentialValidationError(AuthError):
    """The submitted login body is malformed; carries every field violation."""

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = errors
        super().__init__(
            "Invalid login request: "
            + ", ".join(error.field for error in errors)
        )


class InvalidCredentialsError(AuthError):
    """The directory rejected the bind for ``user``."""

    def __init__(self, user: str) -> None:
        self.user = user
        super().__init__(f'Invalid credentials for "{user}"')


class DirectoryUnavailableError(AuthError):
    """The directory could not be reached or answered with a protocol fault."""


class TokenSigningError(AuthError):
    """The identity token could not be signed."""


class ErrorResponse(HTTPException):
    """Single source of truth for standardized error payloads."""

    def __init__(
        self,
        status_code: int,
        error: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.error = error
        self.extra = extra
        self.payload: Dict[str, Any] = {
            "success": False,
            "error": error,
        }
        if extra:
            self.payload.update(extra)

        super().__init__(status_code=status_code, detail=self.payload)

    @staticmethod
    def phrase(status_code: int) -> str:
        try:
            return HTTPStatus(status_code).phrase
        except ValueError:
            return str(status_code)

    def to_response(self) -> JSONResponse:
        """Serialize the error into a standardized JSON response."""
        return JSONResponse(status_code=self.status_code, content=self.payload)

    @classmethod
    def validation_failed(cls, errors: List[Dict[str, str]]) -> "ErrorResponse":
        return cls(400, ErrorMessages.VALIDATION_ERROR, {"validationErrors": errors})

    @classmethod
    def invalid_credentials(cls) -> "ErrorResponse":
        return cls(400, ErrorMessages.INVALID_CREDENTIALS)

    @classmethod
    def internal_server_error(
        cls, error: str = ErrorMessages.SERVER_ERROR
    ) -> "ErrorResponse":
        return cls(500, error)


def not_acceptable_response() -> Response:
    """406 with an empty body, for clients that do not accept JSON."""
    return Response(status_code=406)
