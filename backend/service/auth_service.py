"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from functools import lru_cache
from typing import Any, Optional

from starlette.concurrency import run_in_threadpool

from model.auth import (
    AuthInvalidCredentials,
    AuthOutcome,
    AuthServerError,
    AuthSuccess,
    AuthValidationFailure,
)
from service.directory_service import DirectoryClient
from utils.auth import TokenIssuer
from utils.auth_settings import AuthSettings, get_auth_settings
from utils.converters import add_query_params
from utils.error_handler import CredentialValidationError, InvalidCredentialsError
from utils.logger import logger
from utils.validators import validate_login_request


class AuthService:
    """
    Validate a login body, bind against the directory and mint a redirect token.

    Every call resolves to exactly one AuthOutcome; nothing is retried and no
    state is kept between calls.
    """

    def __init__(
        self,
        settings: AuthSettings,
        directory: Optional[DirectoryClient] = None,
        token_issuer: Optional[TokenIssuer] = None,
    ) -> None:
        self.settings = settings
        self.directory = directory or DirectoryClient(settings)
        self.token_issuer = token_issuer or TokenIssuer(settings)

    def build_redirect(self, token: str) -> str:
        return add_query_params(
            self.settings.APP_URL, {self.settings.JWT_QUERY_PARAM: token}
        )

    async def login(
        self, raw_body: Any, client_ip: Optional[str] = None
    ) -> AuthOutcome:
        log = logger.bind(client_ip=client_ip or "-")

        try:
            login_request = validate_login_request(raw_body)
        except CredentialValidationError as exc:
            return AuthValidationFailure(errors=exc.errors)

        try:
            # ldap3 blocks on the socket, keep it off the event loop
            identity = await run_in_threadpool(
                self.directory.authenticate,
                login_request.username,
                login_request.password,
            )
            log.info('Authenticated "{}"', identity.username)
            token = self.token_issuer.issue(identity)
            redirect = self.build_redirect(token.signed_payload)
        except InvalidCredentialsError as exc:
            log.info('Authentication failure for "{}"', exc.user)
            return AuthInvalidCredentials(username=exc.user)
        except Exception as exc:
            log.opt(exception=exc).error(
                "Unexpected error during LDAP login: {}", type(exc).__name__
            )
            return AuthServerError()

        return AuthSuccess(redirect=redirect)


@lru_cache()
def get_auth_service() -> AuthService:
    """
    Return the process-wide service built from the cached settings.
    """

    return AuthService(get_auth_settings())
