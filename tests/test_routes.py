"""
Unit tests for API routes
"""

import pytest
from fastapi.testclient import TestClient

from stockroom.main import app
from stockroom.models.errors import (
    ProviderError, StoreConflictError, StoreTransportError
)
from stockroom.services.auth_service import AuthService
from stockroom.services.provisioning_service import ProvisioningService
from stockroom.utils.dependencies import (
    get_provisioning_service, get_auth_service, get_profile_store
)

SIGNUP_PAYLOAD = {
    "email": "a@b.com",
    "password": "Abcdef12",
    "confirm_password": "Abcdef12",
    "full_name": "A B",
    "business_name": "B Co",
    "username": "ab1",
    "role": "owner",
    "terms_accepted": True
}


@pytest.fixture
def client(credentials, profiles):
    """Test client with fake provider and store injected"""
    app.dependency_overrides[get_provisioning_service] = lambda: ProvisioningService(credentials, profiles)
    app.dependency_overrides[get_auth_service] = lambda: AuthService(credentials)
    app.dependency_overrides[get_profile_store] = lambda: profiles
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestSignupRoute:
    def test_signup_success(self, client, credentials, profiles, call_log):
        response = client.post("/auth/signup", json=SIGNUP_PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["user"]["email"] == "a@b.com"
        assert data["redirect_to"] == "/login"
        assert data["redirect_after"] == 2.0
        assert [name for name, _ in call_log] == ["sign_up", "create_profile"]

    def test_signup_validation_errors(self, client, credentials):
        payload = dict(SIGNUP_PAYLOAD, confirm_password="Other123", terms_accepted=False)

        response = client.post("/auth/signup", json=payload)

        assert response.status_code == 422
        data = response.json()
        assert data["success"] is False
        assert set(data["errors"]) == {"confirm_password", "terms_accepted"}
        assert credentials.sign_up_calls == 0

    def test_signup_provider_rejection(self, client, credentials, profiles):
        credentials.sign_up_error = ProviderError("User already registered")

        response = client.post("/auth/signup", json=SIGNUP_PAYLOAD)

        assert response.status_code == 400
        assert response.json()["message"] == "User already registered"
        assert profiles.create_calls == 0

    @pytest.mark.parametrize("error", [
        StoreConflictError("Profile save failed"),
        StoreTransportError("Profile save failed"),
    ])
    def test_signup_partial_provisioning(self, client, profiles, error):
        profiles.create_error = error

        response = client.post("/auth/signup", json=SIGNUP_PAYLOAD)

        assert response.status_code == 424
        data = response.json()
        assert data["partial"] is True
        assert data["user"]["email"] == "a@b.com"
        assert "Your account was created" in data["message"]
        assert "redirect_to" not in data

    def test_each_signup_request_gets_its_own_orchestrator(self, client, credentials):
        first = client.post("/auth/signup", json=SIGNUP_PAYLOAD)
        second = client.post("/auth/signup", json=dict(SIGNUP_PAYLOAD, email="c@d.com", username="cd1"))

        assert first.status_code == 201
        assert second.status_code == 201
        assert credentials.sign_up_calls == 2


class TestLoginRoute:
    def test_login_missing_field(self, client, credentials):
        response = client.post("/auth/login", json={"email": "", "password": "x"})

        assert response.status_code == 400
        assert response.json()["message"] == "Email is required"
        assert credentials.sign_in_calls == 0

    def test_login_rejected(self, client, credentials):
        credentials.sign_in_error = ProviderError("Invalid login credentials")

        response = client.post("/auth/login", json={"email": "a@b.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid login credentials"

    def test_login_success(self, client, credentials):
        response = client.post("/auth/login", json={"email": "A@B.com", "password": "Abcdef12"})

        assert response.status_code == 200
        data = response.json()
        assert data["tokens"]["access_token"] == "access-token"
        assert data["user"]["email"] == "a@b.com"
        assert credentials.sign_in_calls == 1


class TestSessionRoute:
    def test_no_session(self, client):
        response = client.get("/auth/session")
        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "session": None}

    def test_session_after_login(self, client):
        client.post("/auth/login", json={"email": "a@b.com", "password": "Abcdef12"})

        data = client.get("/auth/session").json()

        assert data["authenticated"] is True
        assert data["session"]["email"] == "a@b.com"


class TestUsernameAvailabilityRoute:
    def test_available(self, client):
        response = client.get("/auth/username-availability", params={"username": "ab1"})
        assert response.json() == {"username": "ab1", "available": True}

    def test_taken(self, client, profiles):
        profiles.taken_usernames = {"ab1"}
        response = client.get("/auth/username-availability", params={"username": "ab1"})
        assert response.json()["available"] is False

    def test_store_unreachable(self, client, profiles):
        profiles.lookup_error = StoreTransportError("Unable to check username availability")
        response = client.get("/auth/username-availability", params={"username": "ab1"})
        assert response.status_code == 503


class TestServiceRoutes:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_runtime_config(self, client):
        data = client.get("/api/config").json()
        assert "SUPABASE_URL" in data
        assert data["ROUTES"]["login"] == "/login"

    def test_provider_not_configured(self):
        """Without the lifespan there is no provider connection"""
        response = TestClient(app).post("/auth/signup", json=SIGNUP_PAYLOAD)
        assert response.status_code == 503
        assert response.json()["error"] is True
