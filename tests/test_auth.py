"""
Authentication Tests
"""

import pytest

from stockroom.forms.login import LoginForm, LOGIN_SUCCESS_MESSAGE, DASHBOARD_PATH
from stockroom.models.errors import ProviderError, MissingFieldError, LoginRejectedError, LoginError
from stockroom.services.auth_service import AuthService


@pytest.fixture
def auth_service(credentials):
    return AuthService(credentials)


class TestAuthService:
    @pytest.mark.asyncio
    async def test_missing_email_fails_fast(self, auth_service, credentials):
        with pytest.raises(MissingFieldError) as exc_info:
            await auth_service.login("", "x")

        assert exc_info.value.field == "email"
        assert isinstance(exc_info.value, LoginError)
        assert credentials.sign_in_calls == 0

    @pytest.mark.asyncio
    async def test_missing_password_fails_fast(self, auth_service, credentials):
        with pytest.raises(MissingFieldError) as exc_info:
            await auth_service.login("a@b.com", "")

        assert exc_info.value.field == "password"
        assert credentials.sign_in_calls == 0

    @pytest.mark.asyncio
    async def test_login_success_returns_session(self, auth_service, credentials):
        session = await auth_service.login("a@b.com", "Abcdef12")

        assert session.access_token == "access-token"
        assert credentials.sign_in_calls == 1

    @pytest.mark.asyncio
    async def test_rejected_login_carries_provider_message(self, auth_service, credentials):
        credentials.sign_in_error = ProviderError("Invalid login credentials", status=400)

        with pytest.raises(LoginRejectedError) as exc_info:
            await auth_service.login("a@b.com", "wrong")

        assert exc_info.value.message == "Invalid login credentials"
        assert credentials.sign_in_calls == 1

    @pytest.mark.asyncio
    async def test_current_session_delegates_to_provider(self, auth_service, credentials):
        assert await auth_service.current_session() is None
        await auth_service.login("a@b.com", "Abcdef12")
        session = await auth_service.current_session()
        assert session.email == "a@b.com"


class TestLoginForm:
    @pytest.mark.asyncio
    async def test_success_navigates_to_dashboard(self, auth_service):
        navigations = []
        form = LoginForm(auth_service, navigations.append)

        session = await form.submit("a@b.com", "Abcdef12")

        assert session is not None
        assert form.success == LOGIN_SUCCESS_MESSAGE
        assert form.error == ""
        assert not form.loading
        assert navigations == [DASHBOARD_PATH]

    @pytest.mark.asyncio
    async def test_missing_field_shows_error_without_provider_call(self, auth_service, credentials):
        navigations = []
        form = LoginForm(auth_service, navigations.append)

        assert await form.submit("", "x") is None

        assert form.error == "Email is required"
        assert credentials.sign_in_calls == 0
        assert navigations == []

    @pytest.mark.asyncio
    async def test_rejection_shows_provider_message(self, auth_service, credentials):
        credentials.sign_in_error = ProviderError("Invalid login credentials")
        navigations = []
        form = LoginForm(auth_service, navigations.append)

        await form.submit("a@b.com", "wrong")

        assert form.error == "Invalid login credentials"
        assert not form.loading
        assert navigations == []
