"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# Resolve project directories so .env can be found regardless of cwd
BACKEND_DIR = Path(__file__).resolve().parent.parent
ENV_FILE_PATH = BACKEND_DIR / ".env"


class AuthSettings(BaseSettings):
    """
    Settings for JWT issuance and LDAP/AD integration.
    """

    # Downstream application receiving the token as a query parameter
    APP_URL: str = "http://localhost:7100/"

    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_SECONDS: int = 24 * 3600
    JWT_EMAIL_DOMAIN: str = "ldap.lan"
    JWT_QUERY_PARAM: str = "jwt"

    LDAP_SERVER: str = "ldap://localhost"
    LDAP_PORT: int = 389
    LDAP_USE_SSL: bool = False
    LDAP_TIMEOUT: int = 5
    LDAP_BASE_DN: str = ""
    LDAP_USER_DN_TEMPLATE: str = "uid={username},{base_dn}"
    LDAP_SEARCH_FILTER: str = "(uid={username})"
    # Service account used to look up the user DN before the user bind
    LDAP_BIND_DN: str = ""
    LDAP_BIND_PASSWORD: str = ""

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(ENV_FILE_PATH)
        case_sensitive = True
        extra = "ignore"
        frozen = True


@lru_cache()
def get_auth_settings() -> AuthSettings:
    """
    Return cached authentication settings.
    """

    return AuthSettings()


def missing_ldap_settings(settings: AuthSettings) -> List[str]:
    """
    Return the LDAP settings a bind cannot be attempted without.
    """

    missing = []
    if not settings.LDAP_SERVER:
        missing.append("LDAP_SERVER")
    if not settings.LDAP_USER_DN_TEMPLATE and not settings.LDAP_BIND_DN:
        missing.append("LDAP_USER_DN_TEMPLATE or LDAP_BIND_DN")
    if settings.LDAP_BIND_DN:
        if not settings.LDAP_BIND_PASSWORD:
            missing.append("LDAP_BIND_PASSWORD")
        if not settings.LDAP_BASE_DN:
            missing.append("LDAP_BASE_DN")
    elif "{base_dn}" in settings.LDAP_USER_DN_TEMPLATE and not settings.LDAP_BASE_DN:
        missing.append("LDAP_BASE_DN")
    return missing


def missing_settings(settings: AuthSettings) -> List[str]:
    """
    Return every setting a login cannot succeed without.
    """

    missing = missing_ldap_settings(settings)
    if not settings.JWT_SECRET_KEY:
        missing.append("JWT_SECRET_KEY")
    if not settings.APP_URL:
        missing.append("APP_URL")
    return missing
