"""
Database utilities for membership service
asyncpg pool and the registration table operations
"""

import asyncio
from typing import Any, Dict, List, Optional

import asyncpg
import structlog
from asyncpg import Pool

from membership_service.config import Settings
from membership_service.exceptions import ConflictError, StoreError
from membership_service.models.member import MemberRecord, MemberSummary

logger = structlog.get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS registration (
    id SERIAL PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    phone TEXT NOT NULL UNIQUE,
    id_number TEXT NOT NULL UNIQUE,
    county TEXT NOT NULL,
    password TEXT,
    role TEXT DEFAULT 'user',
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""

MEMBER_COLUMNS = """
    id, first_name, last_name, email, phone, id_number, county, role, created_at
"""

# Natural keys guarded by unique constraints, most specific name first
UNIQUE_KEYS = ('id_number', 'email', 'phone')

# Faults that mean the store is unreachable or misbehaving
STORE_FAULTS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def conflict_key(error: asyncpg.UniqueViolationError) -> Optional[str]:
    """Work out which natural key a unique violation collided on"""
    for hint in (getattr(error, 'constraint_name', None), getattr(error, 'detail', None)):
        if not hint:
            continue
        for key in UNIQUE_KEYS:
            if key in hint:
                return key
    return None


class MemberDatabase:
    """Database connection and operations for member registrations"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pool: Optional[Pool] = None

    async def initialize(self):
        """Initialize database connection pool"""
        try:
            self.pool = await asyncpg.create_pool(
                dsn=self.settings.dsn,
                min_size=self.settings.db_pool_min_size,
                max_size=self.settings.db_pool_max_size,
                command_timeout=self.settings.db_command_timeout,
            )
            logger.info("Database pool created", database=self.settings.postgres_db)

            # Test connection
            async with self.pool.acquire() as conn:
                await conn.execute('SELECT 1')
                logger.info("Database connection test successful")

        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

        if self.settings.db_create_schema:
            await self.ensure_schema()

    async def close(self):
        """Close database connection pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    def _get_pool(self) -> Pool:
        if not self.pool:
            raise StoreError("Database pool not initialized")
        return self.pool

    async def ensure_schema(self):
        """Create the registration table if it does not exist"""
        try:
            async with self._get_pool().acquire() as conn:
                await conn.execute(SCHEMA_SQL)
            logger.info("Registration schema ensured")
        except STORE_FAULTS as e:
            logger.error("Failed to ensure schema", error=str(e))
            raise StoreError(str(e)) from e

    async def ping(self) -> bool:
        """Check the store answers a trivial query"""
        try:
            async with self._get_pool().acquire() as conn:
                return await conn.fetchval('SELECT 1') == 1
        except STORE_FAULTS as e:
            logger.error("Database ping failed", error=str(e))
            raise StoreError(str(e)) from e

    # ===== MEMBER OPERATIONS =====

    async def insert_member(self, member_data: Dict[str, Any]) -> MemberSummary:
        """
        Insert a new member row

        Args:
            member_data: column values, with the password already hashed

        Returns:
            MemberSummary: id, names, email and county of the new row

        Raises:
            ConflictError: email, phone or id number already registered
            StoreError: any other store failure
        """
        try:
            async with self._get_pool().acquire() as conn:
                row = await conn.fetchrow(
                    """
                    INSERT INTO registration
                        (first_name, last_name, email, phone, id_number, county, password)
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    RETURNING id, first_name, last_name, email, county
                    """,
                    member_data['first_name'],
                    member_data['last_name'],
                    member_data['email'],
                    member_data['phone'],
                    member_data['id_number'],
                    member_data['county'],
                    member_data.get('password_hash'),
                )
        except asyncpg.UniqueViolationError as e:
            key = conflict_key(e)
            logger.warning("Unique violation on insert", key=key, detail=getattr(e, 'detail', None))
            raise ConflictError(key=key, message=str(e)) from e
        except STORE_FAULTS as e:
            logger.error("Failed to insert member", error=str(e))
            raise StoreError(str(e)) from e

        logger.info("Member created", member_id=row['id'])
        return MemberSummary(**dict(row))

    async def list_members(self) -> List[MemberRecord]:
        """All members, newest first; the password column is never selected"""
        try:
            async with self._get_pool().acquire() as conn:
                rows = await conn.fetch(
                    f"SELECT {MEMBER_COLUMNS} FROM registration ORDER BY created_at DESC"
                )
        except STORE_FAULTS as e:
            logger.error("Failed to list members", error=str(e))
            raise StoreError(str(e)) from e

        return [MemberRecord(**dict(row)) for row in rows]

    async def get_member_by_email(self, email: str) -> Optional[MemberRecord]:
        """
        Get member by email address

        Returns:
            MemberRecord including the password hash, or None if not found
        """
        try:
            async with self._get_pool().acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {MEMBER_COLUMNS}, password AS password_hash "
                    "FROM registration WHERE email = $1",
                    email,
                )
        except STORE_FAULTS as e:
            logger.error("Failed to look up member", error=str(e))
            raise StoreError(str(e)) from e

        if row:
            return MemberRecord(**dict(row))
        return None
