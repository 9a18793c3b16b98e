"""
Registration Service
New-member sign-up and the admin listing
"""

from typing import Any, List

import structlog

from membership_service.exceptions import ConflictError, InternalError, StoreError, ValidationFailure
from membership_service.models.member import MemberRecord, MemberSummary
from membership_service.utils.database import MemberDatabase
from membership_service.utils.security import PasswordHasher
from membership_service.utils.validators import validate_registration


class RegistrationService:
    """Validate, hash and persist new members"""

    def __init__(self, db: MemberDatabase, hasher: PasswordHasher, logger=None):
        self.db = db
        self.hasher = hasher
        self.logger = logger or structlog.get_logger(__name__)

    async def register(self, payload: Any) -> MemberSummary:
        """
        Register a new member from a raw request payload

        Args:
            payload: decoded JSON body, any shape

        Returns:
            MemberSummary: the sanitized new record

        Raises:
            ValidationFailure: one entry per violated field
            ConflictError: email, phone or id number already registered
            InternalError: store or infrastructure failure
        """
        try:
            submission = validate_registration(payload)
        except ValidationFailure as e:
            self.logger.warning("Validation error", errors=e.errors)
            raise

        try:
            password_hash = await self.hasher.hash_password(submission.password)
            member = await self.db.insert_member(submission.to_record_data(password_hash))
        except ConflictError as e:
            self.logger.warning("Unique violation", key=e.key, detail=e.message)
            raise
        except StoreError as e:
            self.logger.error("Registration failed", error=e.message)
            raise InternalError() from e
        except Exception as e:
            self.logger.error("Registration failed", error=str(e), exc_info=True)
            raise InternalError() from e

        self.logger.info("Member registered", member_id=member.id)
        return member

    async def list_registrations(self) -> List[MemberRecord]:
        """All registrations, newest first"""
        self.logger.info("Fetching registrations")
        try:
            members = await self.db.list_members()
        except StoreError as e:
            self.logger.error("Error fetching registrations", error=e.message)
            raise InternalError() from e

        self.logger.info("Found registrations", count=len(members))
        return members
