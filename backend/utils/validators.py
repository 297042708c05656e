"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from typing import Any, Dict, List

from pydantic import ValidationError

from model.auth import FieldError, LoginRequest
from utils.error_handler import CredentialValidationError, ErrorMessages

LOGIN_FIELDS = ("username", "password")

_REASONS = {
    "missing": ErrorMessages.FIELD_REQUIRED,
    "string_type": ErrorMessages.FIELD_NOT_STRING,
    "value_error": ErrorMessages.FIELD_BLANK,
}


def _field_errors(exc: ValidationError) -> List[FieldError]:
    """Reduce pydantic errors to one entry per login field, without input values."""
    reasons: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else ""
        if field in LOGIN_FIELDS and field not in reasons:
            reasons[field] = _REASONS.get(error["type"], error["msg"])
    return [
        FieldError(field=field, reason=reasons[field])
        for field in LOGIN_FIELDS
        if field in reasons
    ]


def validate_login_request(raw: Any) -> LoginRequest:
    """
    Check the raw login body and return a well-formed LoginRequest.

    Every violated field is reported at once through CredentialValidationError.
    Anything that is not a JSON object is treated as an empty one.
    """

    data = raw if isinstance(raw, dict) else {}
    try:
        return LoginRequest.model_validate(data)
    except ValidationError as exc:
        raise CredentialValidationError(_field_errors(exc)) from None
