"""
Tests for Account Authentication

Tests the /api/v1/auth endpoints:
- Registration returns a usable access token
- Login with correct/incorrect credentials
- Password change for the signed-in account
"""

from fastapi import status

from catalog.services.credentials import AccountVerifier

REGISTRATION = {
    "username": "newreader",
    "email": "newreader@example.com",
    "password": "SecurePass123",
    "firstname": "New",
    "lastname": "Reader",
    "phone": "555-0100",
}


class TestRegister:
    """Tests for POST /api/v1/auth/register endpoint."""

    def test_register_success(self, client):
        response = client.post("/api/v1/auth/register", json=REGISTRATION)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["accessToken"]
        assert isinstance(data["id"], int)

    def test_register_token_opens_book_routes(self, client):
        token = client.post("/api/v1/auth/register", json=REGISTRATION).json()["accessToken"]

        response = client.post(
            "/api/v1/books/pagination/offset",
            json={},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_register_duplicate_username(self, client, sample_account):
        response = client.post(
            "/api/v1/auth/register",
            json={**REGISTRATION, "username": sample_account.username},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Username exists"}

    def test_register_duplicate_email(self, client, sample_account):
        response = client.post(
            "/api/v1/auth/register",
            json={**REGISTRATION, "email": sample_account.email},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Email exists"}

    def test_register_weak_password(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={**REGISTRATION, "password": "alllowercase1"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "message": "Invalid or missing password - please refer to documentation"
        }

    def test_register_invalid_email(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={**REGISTRATION, "email": "not-an-email"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestLogin:
    """Tests for POST /api/v1/auth/login endpoint."""

    def test_login_success(self, client, sample_account):
        response = client.post(
            "/api/v1/auth/login",
            json={"username": "testreader", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["accessToken"]
        assert data["user"] == {
            "name": "Test",
            "email": "testreader@example.com",
            "role": 1,
            "id": sample_account.account_id,
        }

    def test_login_wrong_password(self, client, sample_account):
        response = client.post(
            "/api/v1/auth/login",
            json={"username": "testreader", "password": "WrongPass123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid Credentials"}

    def test_login_unknown_user(self, client):
        response = client.post(
            "/api/v1/auth/login",
            json={"username": "nobody", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid Credentials"}

    def test_login_missing_password(self, client):
        response = client.post("/api/v1/auth/login", json={"username": "testreader"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "message": "Invalid or missing password - please refer to documentation"
        }


class TestAccountVerifier:
    def test_verify_returns_account(self, db_session, sample_account):
        account = AccountVerifier(db_session).verify("testreader", "SecurePass123")

        assert account is not None
        assert account.account_id == sample_account.account_id

    def test_verify_wrong_password(self, db_session, sample_account):
        assert AccountVerifier(db_session).verify("testreader", "nope") is None


class TestChangePassword:
    """Tests for PATCH /api/v1/auth/change-password endpoint."""

    def test_change_password_success(self, client, auth_headers):
        response = client.patch(
            "/api/v1/auth/change-password",
            json={"oldPassword": "SecurePass123", "newPassword": "EvenBetter456"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Password updated"}

        login = client.post(
            "/api/v1/auth/login",
            json={"username": "testreader", "password": "EvenBetter456"},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_change_password_wrong_old_password(self, client, auth_headers):
        response = client.patch(
            "/api/v1/auth/change-password",
            json={"oldPassword": "NotMyPass123", "newPassword": "EvenBetter456"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid Credentials"}

    def test_change_password_requires_token(self, client):
        response = client.patch(
            "/api/v1/auth/change-password",
            json={"oldPassword": "SecurePass123", "newPassword": "EvenBetter456"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
