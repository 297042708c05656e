"""
Shared pytest configuration for backend tests.
"""

import os
import sys
from pathlib import Path
from typing import List, Set, Tuple

import pytest

# Ensure tests run in test mode with a predictable environment
os.environ.setdefault("TESTING", "1")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-0123")
os.environ.setdefault("APP_URL", "https://app.example/")

# Make the backend packages importable when tests run from repository root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from model.auth import VerifiedIdentity  # noqa: E402
from utils.auth_settings import AuthSettings  # noqa: E402
from utils.error_handler import (  # noqa: E402
    DirectoryUnavailableError,
    InvalidCredentialsError,
)

TEST_SECRET = "test-secret-key-with-enough-length-0123"


class FakeDirectory:
    """In-memory stand-in for DirectoryClient that records every bind attempt."""

    def __init__(self, accepted: Set[Tuple[str, str]], unavailable: bool = False):
        self.accepted = accepted
        self.unavailable = unavailable
        self.calls: List[Tuple[str, str]] = []

    def authenticate(self, username: str, password: str) -> VerifiedIdentity:
        self.calls.append((username, password))
        if self.unavailable:
            raise DirectoryUnavailableError(
                "LDAP server ldap://10.0.0.7:389 unavailable: connection refused"
            )
        if (username, password) not in self.accepted:
            raise InvalidCredentialsError(username)
        return VerifiedIdentity(username=username)


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(
        APP_URL="https://app.example/",
        JWT_SECRET_KEY=TEST_SECRET,
        LDAP_SERVER="ldap://ldap.example.com",
        LDAP_BASE_DN="ou=people,dc=example,dc=com",
    )


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory({("alice", "correct")})


@pytest.fixture
def unavailable_directory() -> FakeDirectory:
    return FakeDirectory(set(), unavailable=True)
