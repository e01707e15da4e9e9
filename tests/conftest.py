"""
Shared pytest fixtures for onboarding tests.

In-memory fakes stand in for MongoDB and the upload directory so the
registration pipeline can run end to end without external services.
"""
import asyncio
import dataclasses
import os
import uuid
from typing import Dict, List, Optional
from unittest.mock import patch

import pytest

from onboarding.core.config import Settings
from onboarding.domain.exceptions import ConflictFailure, IOFailure, RegistrationError
from onboarding.domain.models.user import User
from onboarding.domain.repositories.file_storage import FileStorage
from onboarding.domain.repositories.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """UserRepository fake enforcing email uniqueness under a lock"""

    def __init__(self, fail_with: Optional[RegistrationError] = None) -> None:
        self.users: Dict[str, User] = {}
        self.insert_calls = 0
        self.fail_with = fail_with
        self._lock = asyncio.Lock()

    async def insert(self, user: User) -> User:
        async with self._lock:
            self.insert_calls += 1
            if self.fail_with is not None:
                raise self.fail_with
            email = user.email.lower()
            if any(existing.email == email for existing in self.users.values()):
                raise ConflictFailure("Email is already registered")
            stored = dataclasses.replace(user, id=uuid.uuid4().hex, email=email)
            self.users[stored.id] = stored
            return stored

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email == email.lower():
                return user
        return None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)


class InMemoryFileStorage(FileStorage):
    """FileStorage fake keeping bytes in a dict"""

    def __init__(self, fail_writes: bool = False) -> None:
        self.files: Dict[str, bytes] = {}
        self.writes: List[str] = []
        self.deletes: List[str] = []
        self.fail_writes = fail_writes

    async def write(self, name: str, data: bytes) -> str:
        self.writes.append(name)
        if self.fail_writes:
            raise IOFailure(f"Disk full while writing {name}")
        self.files[name] = data
        return name

    async def exists(self, name: str) -> bool:
        return name in self.files

    async def delete(self, name: str) -> None:
        self.deletes.append(name)
        self.files.pop(name, None)


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URL": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_onboarding_db",
        "HASH_COST": "4",
        "UPLOAD_DIR": "test-uploads",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def settings(tmp_path):
    """Settings with a temp upload dir and the cheapest bcrypt cost."""
    return Settings({
        "MONGO_URL": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_onboarding_db",
        "UPLOAD_DIR": str(tmp_path / "assets"),
        "HASH_COST": "4",
        "LOG_LEVEL": "WARNING",
    })


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def file_storage():
    return InMemoryFileStorage()


@pytest.fixture
def registration_form():
    """Valid registration fields as a client would post them."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "password": "analytical-engine",
        "location": "London",
        "occupation": "Mathematician",
    }


@pytest.fixture
def failing_file_storage():
    """File storage whose writes always fail with IOFailure."""
    return InMemoryFileStorage(fail_writes=True)
