"""
Pytest fixtures for membership service tests
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from membership_service.config import Settings
from membership_service.exceptions import ConflictError, StoreError
from membership_service.models.member import MemberRecord, MemberSummary
from membership_service.utils.security import PasswordHasher


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


class InMemoryMemberDatabase:
    """
    Stand-in for MemberDatabase with the same uniqueness rules and errors.

    Set ``fail_with`` to an exception to make every operation raise it.
    """

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.fail_with: Optional[Exception] = None
        self._next_id = 1
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _check_failure(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def ping(self) -> bool:
        self._check_failure()
        return True

    async def insert_member(self, member_data: Dict[str, Any]) -> MemberSummary:
        self._check_failure()
        for key in ('email', 'phone', 'id_number'):
            if any(row[key] == member_data[key] for row in self.rows):
                raise ConflictError(key=key, message=f"duplicate {key}")

        self._clock += timedelta(seconds=1)
        row = {
            'id': self._next_id,
            'first_name': member_data['first_name'],
            'last_name': member_data['last_name'],
            'email': member_data['email'],
            'phone': member_data['phone'],
            'id_number': member_data['id_number'],
            'county': member_data['county'],
            'role': 'user',
            'created_at': self._clock,
            'password_hash': member_data.get('password_hash'),
        }
        self._next_id += 1
        self.rows.append(row)
        return MemberSummary(
            id=row['id'],
            first_name=row['first_name'],
            last_name=row['last_name'],
            email=row['email'],
            county=row['county'],
        )

    async def list_members(self) -> List[MemberRecord]:
        self._check_failure()
        rows = sorted(self.rows, key=lambda r: r['created_at'], reverse=True)
        return [MemberRecord(**{k: v for k, v in row.items() if k != 'password_hash'}) for row in rows]

    async def get_member_by_email(self, email: str) -> Optional[MemberRecord]:
        self._check_failure()
        for row in self.rows:
            if row['email'] == email:
                return MemberRecord(**row)
        return None

    def add_member_without_password(self, **overrides) -> Dict[str, Any]:
        """Seed a record that has no usable login"""
        self._clock += timedelta(seconds=1)
        row = {
            'id': self._next_id,
            'first_name': 'Admin',
            'last_name': 'Seeded',
            'email': 'seeded@example.com',
            'phone': '0700000000',
            'id_number': '99999999',
            'county': 'Mombasa',
            'role': 'admin',
            'created_at': self._clock,
            'password_hash': None,
        }
        row.update(overrides)
        self._next_id += 1
        self.rows.append(row)
        return row


@pytest.fixture
def jane_payload() -> Dict[str, Any]:
    """Valid registration payload"""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "phone": "0712345678",
        "idNumber": "12345678",
        "county": "Nairobi",
        "password": "secret1",
    }


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url=None,
        postgres_host="localhost",
        postgres_db="test_membership",
        db_service_user="test_user",
        db_service_password="test_password",
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    """Cheap work factor keeps the suite fast"""
    return PasswordHasher(rounds=4)


@pytest.fixture
def memory_db() -> InMemoryMemberDatabase:
    return InMemoryMemberDatabase()


@pytest.fixture
def failing_db() -> InMemoryMemberDatabase:
    db = InMemoryMemberDatabase()
    db.fail_with = StoreError("connection refused")
    return db


@pytest.fixture
def mock_db_pool():
    """Mock asyncpg database pool"""
    pool = MagicMock()
    conn = AsyncMock()

    # Configure connection context manager
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool, conn


@pytest.fixture
def app_client(memory_db, hasher):
    """TestClient wired to the in-memory store; lifespan is not run"""
    from fastapi.testclient import TestClient

    from membership_service.main import app
    from membership_service.utils.dependencies import get_database, get_password_hasher

    app.dependency_overrides[get_database] = lambda: memory_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    yield TestClient(app)
    app.dependency_overrides.clear()
