"""
Password hashing utilities
bcrypt hashing and verification, run off the event loop
"""

import asyncio

import bcrypt
import structlog

logger = structlog.get_logger(__name__)

# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72
DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Salted bcrypt hashing with a configurable work factor"""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode('utf-8')[:BCRYPT_MAX_BYTES]

    def hash_password_sync(self, password: str) -> str:
        """Synchronous bcrypt hash (CPU-bound)"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(self._encode(password), salt)
        return hashed.decode('utf-8')

    def verify_password_sync(self, password: str, hashed_password: str) -> bool:
        """
        Synchronous bcrypt verify (CPU-bound)

        A stored hash that bcrypt cannot parse never matches.
        """
        try:
            return bcrypt.checkpw(self._encode(password), hashed_password.encode('utf-8'))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Stored password hash could not be parsed", error=str(e))
            return False

    async def hash_password(self, password: str) -> str:
        """Hash password using bcrypt in thread pool to avoid blocking"""
        return await asyncio.to_thread(self.hash_password_sync, password)

    async def verify_password(self, password: str, hashed_password: str) -> bool:
        """Verify password against hash in thread pool to avoid blocking"""
        return await asyncio.to_thread(self.verify_password_sync, password, hashed_password)
