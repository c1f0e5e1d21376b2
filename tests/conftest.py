"""
Pytest fixtures for stockroom tests
"""

import asyncio
import pytest
from typing import Dict, List, Optional

from stockroom.models.account import AccountIdentity, Session
from stockroom.models.errors import ProviderError, StoreError
from stockroom.schemas.auth import RegistrationRequest

# Configure pytest-asyncio mode for version 1.x
pytest_plugins = ('pytest_asyncio',)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


class FakeCredentialProvider:
    """In-memory credential provider recording every call"""

    def __init__(self, call_log: List[tuple]):
        self.call_log = call_log
        self.sign_up_error: Optional[Exception] = None
        self.sign_in_error: Optional[ProviderError] = None
        self.session: Optional[Session] = None
        self.sign_up_calls = 0
        self.sign_in_calls = 0

    async def sign_up(self, email: str, password: str) -> AccountIdentity:
        self.sign_up_calls += 1
        self.call_log.append(('sign_up', email))
        if self.sign_up_error:
            raise self.sign_up_error
        return AccountIdentity(user_id=f"user-{self.sign_up_calls}", email=email)

    async def sign_in(self, email: str, password: str) -> Session:
        self.sign_in_calls += 1
        self.call_log.append(('sign_in', email))
        if self.sign_in_error:
            raise self.sign_in_error
        self.session = Session(
            access_token="access-token",
            refresh_token="refresh-token",
            expires_at=4102444800,
            user_id="user-1",
            email=email
        )
        return self.session

    async def current_session(self) -> Optional[Session]:
        self.call_log.append(('current_session', None))
        return self.session


class FakeProfileStore:
    """In-memory profile table with optional per-username lookup delays"""

    def __init__(self, call_log: List[tuple]):
        self.call_log = call_log
        self.create_error: Optional[Exception] = None
        self.lookup_error: Optional[StoreError] = None
        self.rows: Dict[str, dict] = {}
        self.taken_usernames = set()
        self.lookup_delays: Dict[str, float] = {}
        self.create_calls = 0
        self.lookups: List[str] = []

    async def is_username_available(self, username: str) -> bool:
        self.lookups.append(username)
        await asyncio.sleep(self.lookup_delays.get(username, 0))
        if self.lookup_error:
            raise self.lookup_error
        return username not in self.taken_usernames

    async def create_profile(self, user_id: str, fields: dict):
        self.create_calls += 1
        self.call_log.append(('create_profile', user_id))
        if self.create_error:
            raise self.create_error
        self.rows[user_id] = dict(fields, user_id=user_id)
        self.taken_usernames.add(fields['username'])


@pytest.fixture
def call_log() -> List[tuple]:
    return []


@pytest.fixture
def credentials(call_log) -> FakeCredentialProvider:
    return FakeCredentialProvider(call_log)


@pytest.fixture
def profiles(call_log) -> FakeProfileStore:
    return FakeProfileStore(call_log)


@pytest.fixture
def registration() -> RegistrationRequest:
    """Well-formed signup submission"""
    return RegistrationRequest(
        email="a@b.com",
        password="Abcdef12",
        confirm_password="Abcdef12",
        full_name="A B",
        business_name="B Co",
        username="ab1",
        role="owner",
        terms_accepted=True
    )
