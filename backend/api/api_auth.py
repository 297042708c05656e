"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse, Response

from model.auth import (
    AuthInvalidCredentials,
    AuthOutcome,
    AuthSuccess,
    AuthValidationFailure,
    ErrorBody,
    LoginSuccessResponse,
)
from service.auth_service import AuthService, get_auth_service
from utils.converters import accepts_json, safe_json_loads
from utils.error_handler import ErrorResponse, not_acceptable_response

router = APIRouter()


def outcome_to_response(outcome: AuthOutcome) -> Response:
    """
    Map an authentication outcome to its single terminal HTTP response.
    """

    if isinstance(outcome, AuthSuccess):
        body = LoginSuccessResponse(redirect=outcome.redirect)
        return JSONResponse(status_code=200, content=body.model_dump())
    if isinstance(outcome, AuthValidationFailure):
        return ErrorResponse.validation_failed(
            [error.model_dump() for error in outcome.errors]
        ).to_response()
    if isinstance(outcome, AuthInvalidCredentials):
        return ErrorResponse.invalid_credentials().to_response()
    return ErrorResponse.internal_server_error().to_response()


@router.post(
    "/ldap",
    response_model=LoginSuccessResponse,
    responses={
        400: {"model": ErrorBody},
        406: {"description": "Client does not accept JSON"},
        500: {"model": ErrorBody},
    },
)
async def login_ldap(
    request: Request, service: AuthService = Depends(get_auth_service)
) -> Response:
    """
    Authenticate against LDAP and return a redirect carrying a signed JWT.
    """

    if not accepts_json(request.headers.get("accept")):
        return not_acceptable_response()

    raw_body = safe_json_loads(await request.body(), "login body", default={})
    client_ip = request.client.host if request.client else None
    outcome = await service.login(raw_body, client_ip=client_ip)
    return outcome_to_response(outcome)
