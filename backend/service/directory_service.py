"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from typing import Optional

from ldap3 import Connection, Server  # type: ignore[import-untyped]
from ldap3.core.exceptions import LDAPException  # type: ignore[import-untyped]
from ldap3.core.results import (  # type: ignore[import-untyped]
    RESULT_INAPPROPRIATE_AUTHENTICATION,
    RESULT_INVALID_CREDENTIALS,
    RESULT_SUCCESS,
)
from ldap3.utils.conv import escape_filter_chars  # type: ignore[import-untyped]
from ldap3.utils.dn import escape_rdn  # type: ignore[import-untyped]

from model.auth import VerifiedIdentity
from utils.auth_settings import AuthSettings, missing_ldap_settings
from utils.error_handler import DirectoryUnavailableError, InvalidCredentialsError
from utils.logger import logger

REJECTED_BIND_RESULTS = {
    RESULT_INVALID_CREDENTIALS,
    RESULT_INAPPROPRIATE_AUTHENTICATION,
}


def _release(conn: Connection) -> None:
    """Unbind and close; the bind outcome is already decided at this point."""
    try:
        conn.unbind()
    except LDAPException as exc:
        logger.warning("LDAP unbind failed: {}", exc)


class DirectoryClient:
    """
    Verify credentials with a simple bind against an LDAP directory.

    Stateless per call: each authentication opens its own connection and
    releases it before returning.
    """

    def __init__(self, settings: AuthSettings) -> None:
        self.settings = settings

    def _build_server(self) -> Server:
        return Server(
            self.settings.LDAP_SERVER,
            port=self.settings.LDAP_PORT,
            use_ssl=self.settings.LDAP_USE_SSL,
            connect_timeout=self.settings.LDAP_TIMEOUT,
        )

    def _connection(self, server: Server, user: str, password: str) -> Connection:
        return Connection(
            server,
            user=user,
            password=password,
            receive_timeout=self.settings.LDAP_TIMEOUT,
            raise_exceptions=False,
        )

    def _user_dn_from_template(self, username: str) -> str:
        return self.settings.LDAP_USER_DN_TEMPLATE.format(
            username=escape_rdn(username), base_dn=self.settings.LDAP_BASE_DN
        )

    def _search_user_dn(self, server: Server, username: str) -> Optional[str]:
        """
        Look up the user DN with the service account.
        """

        conn = self._connection(
            server, self.settings.LDAP_BIND_DN, self.settings.LDAP_BIND_PASSWORD
        )
        try:
            conn.open()
            if not conn.bind():
                raise DirectoryUnavailableError(
                    f"Service bind failed: {(conn.result or {}).get('description')}"
                )
            found = conn.search(
                search_base=self.settings.LDAP_BASE_DN,
                search_filter=self.settings.LDAP_SEARCH_FILTER.format(
                    username=escape_filter_chars(username)
                ),
                attributes=[],
                size_limit=1,
            )
            if found and conn.entries:
                return conn.entries[0].entry_dn
            # Only a completed search without a match means an unknown user
            result = conn.result or {}
            if result.get("result") == RESULT_SUCCESS:
                return None
            raise DirectoryUnavailableError(
                f"User search failed with result {result.get('result')}: "
                f"{result.get('description')}"
            )
        finally:
            _release(conn)

    def _resolve_user_dn(self, server: Server, username: str) -> str:
        if not self.settings.LDAP_BIND_DN:
            return self._user_dn_from_template(username)

        user_dn = self._search_user_dn(server, username)
        if not user_dn:
            raise InvalidCredentialsError(username)
        return user_dn

    def _bind_as_user(
        self, server: Server, user_dn: str, username: str, password: str
    ) -> None:
        conn = self._connection(server, user_dn, password)
        try:
            conn.open()
            if conn.bind():
                return
            result = conn.result or {}
            result_code = result.get("result")
            if result_code in REJECTED_BIND_RESULTS:
                raise InvalidCredentialsError(username)
            raise DirectoryUnavailableError(
                f"Bind for {user_dn} failed with result {result_code}: "
                f"{result.get('description')}"
            )
        finally:
            _release(conn)

    def authenticate(self, username: str, password: str) -> VerifiedIdentity:
        """
        Bind as ``username``; a successful bind is the only proof of the password.

        Raises InvalidCredentialsError when the directory rejects the bind and
        DirectoryUnavailableError on connection or protocol failures.
        """

        username = (username or "").strip()
        # An empty password would be an unauthenticated bind, which succeeds
        if not username or not password or not password.strip():
            raise InvalidCredentialsError(username)

        missing = missing_ldap_settings(self.settings)
        if missing:
            raise DirectoryUnavailableError(
                "LDAP configuration incomplete, missing: " + ", ".join(missing)
            )

        server = self._build_server()
        try:
            user_dn = self._resolve_user_dn(server, username)
            self._bind_as_user(server, user_dn, username, password)
        except LDAPException as exc:
            raise DirectoryUnavailableError(
                f"LDAP server {self.settings.LDAP_SERVER} unavailable: {exc}"
            ) from exc

        return VerifiedIdentity(username=username)
