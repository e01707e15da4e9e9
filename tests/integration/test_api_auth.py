"""
Integration tests for POST /auth/register.
Uses TestClient with in-memory user store and a temp upload directory (no real DB).
"""
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration
from fastapi.testclient import TestClient

from onboarding.core.config import Settings
from onboarding.core.security import verify_password
from onboarding.di.container import DIContainer
from onboarding.domain.exceptions import CryptoFailure, StorageFailure
from onboarding.domain.repositories.file_storage import FileStorage
from onboarding.domain.repositories.user_repository import UserRepository
from onboarding.infrastructure.storage.local_file_storage import LocalFileStorage
from onboarding.main import create_application


@pytest.fixture
def upload_storage(settings):
    return LocalFileStorage(settings.upload_dir)


@pytest.fixture
def client(settings, user_repo, upload_storage):
    """Create test client with in-memory repository and local upload storage."""
    container = DIContainer(settings, overrides={
        UserRepository: user_repo,
        FileStorage: upload_storage,
    })
    app = create_application(settings, container)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def failing_upload_client(settings, user_repo, failing_file_storage):
    """Test client whose upload storage rejects every write."""
    container = DIContainer(settings, overrides={
        UserRepository: user_repo,
        FileStorage: failing_file_storage,
    })
    with TestClient(create_application(settings, container)) as c:
        yield c


@pytest.fixture
def original_naming_settings(tmp_path):
    return Settings({
        "UPLOAD_DIR": str(tmp_path / "assets"),
        "UPLOAD_NAMING": "original",
        "HASH_COST": "4",
        "LOG_LEVEL": "WARNING",
    })


@pytest.fixture
def original_naming_client(original_naming_settings, user_repo):
    """Test client that stores pictures under the client filename."""
    container = DIContainer(original_naming_settings, overrides={
        UserRepository: user_repo,
        FileStorage: LocalFileStorage(original_naming_settings.upload_dir),
    })
    with TestClient(create_application(original_naming_settings, container)) as c:
        yield c


class TestRegisterAPI:
    """Tests for /auth/register"""

    def test_register_success(self, client, user_repo, registration_form):
        response = client.post("/auth/register", data=registration_form)

        assert response.status_code == 201
        data = response.json()
        assert data["firstName"] == "Ada"
        assert data["email"] == "ada@example.com"
        assert data["picturePath"] is None
        assert data["friends"] == []
        assert "password" not in data
        assert "hashedPassword" not in data
        assert len(user_repo.users) == 1

        stored = user_repo.users[data["id"]]
        assert stored.hashed_password != registration_form["password"]
        assert verify_password(registration_form["password"], stored.hashed_password)

    def test_counters_in_range_and_not_from_client(self, client, registration_form):
        form = {**registration_form, "viewedProfile": "123456", "impressions": "-1"}
        data = client.post("/auth/register", data=form).json()
        assert 0 <= data["viewedProfile"] < 10000
        assert 0 <= data["impressions"] < 10000

    def test_register_with_picture(self, client, settings, registration_form):
        response = client.post(
            "/auth/register",
            data=registration_form,
            files={"picture": ("avatar.PNG", b"\x89PNG fake image", "image/png")},
        )

        assert response.status_code == 201
        picture_path = response.json()["picturePath"]
        assert picture_path.endswith(".png")
        stored = LocalFileStorage(settings.upload_dir).path_for(picture_path)
        assert stored.read_bytes() == b"\x89PNG fake image"

    def test_register_with_friends(self, client, registration_form):
        response = client.post(
            "/auth/register",
            data={**registration_form, "friends": ["u-1", "u-2"]},
            files={"picture": ("a.png", b"x", "image/png")},
        )
        assert response.status_code == 201
        assert response.json()["friends"] == ["u-1", "u-2"]

    def test_register_duplicate_returns_409(self, client, user_repo, registration_form):
        first = client.post("/auth/register", data=registration_form)
        second = client.post(
            "/auth/register",
            data={**registration_form, "email": "ADA@example.com"},
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error"] == "ConflictFailure"
        assert len(user_repo.users) == 1

    def test_missing_field_returns_400(self, client, user_repo, settings, registration_form):
        registration_form.pop("email")
        response = client.post(
            "/auth/register",
            data=registration_form,
            files={"picture": ("avatar.png", b"bytes", "image/png")},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationFailure"
        assert body["fields"] == ["email"]
        assert user_repo.users == {}
        assert LocalFileStorage(settings.upload_dir).root.exists() is False

    def test_json_body_returns_400(self, client, registration_form):
        response = client.post("/auth/register", json=registration_form)
        assert response.status_code == 400
        assert response.json()["error"] == "MalformedUpload"

    def test_multipart_without_boundary_returns_400(self, client):
        response = client.post(
            "/auth/register",
            content=b"garbage",
            headers={"content-type": "multipart/form-data"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "MalformedUpload"

    def test_storage_failure_returns_500_without_details(self, client, user_repo, registration_form):
        user_repo.fail_with = StorageFailure("connection refused at 10.0.0.5:27017")
        response = client.post("/auth/register", data=registration_form)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "StorageFailure"
        assert "10.0.0.5" not in response.text
        assert "Traceback" not in response.text

    def test_upload_write_failure_returns_500_without_details(
        self, failing_upload_client, user_repo, registration_form
    ):
        response = failing_upload_client.post(
            "/auth/register",
            data=registration_form,
            files={"picture": ("avatar.png", b"bytes", "image/png")},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "IOFailure"
        assert "Disk full" not in response.text
        assert "avatar.png" not in response.text
        assert user_repo.users == {}

    def test_hashing_failure_returns_500_without_details(self, client, user_repo, registration_form):
        with patch(
            "onboarding.application.use_cases.auth.registration_flow.hash_password",
            side_effect=CryptoFailure("bcrypt backend missing: libcrypt.so.1"),
        ):
            response = client.post("/auth/register", data=registration_form)

        assert response.status_code == 500
        assert response.json()["error"] == "CryptoFailure"
        assert "libcrypt" not in response.text
        assert user_repo.users == {}

    def test_failed_duplicate_keeps_earlier_users_picture(
        self, original_naming_client, original_naming_settings, registration_form
    ):
        picture = {"picture": ("avatar.png", b"\x89PNG first", "image/png")}
        first = original_naming_client.post("/auth/register", data=registration_form, files=picture)
        second = original_naming_client.post("/auth/register", data=registration_form, files=picture)

        assert first.status_code == 201
        assert first.json()["picturePath"] == "avatar.png"
        assert second.status_code == 409
        stored = LocalFileStorage(original_naming_settings.upload_dir).path_for("avatar.png")
        assert stored.exists()


class TestHealthCheckAPI:
    """Tests for /health_check"""

    def test_health_check(self, client):
        response = client.get("/health_check/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
