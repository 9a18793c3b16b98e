"""
Authentication Service
Member login against stored password hashes
"""

import structlog

from membership_service.exceptions import AccountNotUsable, InternalError, InvalidCredentials, StoreError
from membership_service.models.member import MemberProfile
from membership_service.utils.database import MemberDatabase
from membership_service.utils.security import PasswordHasher


class AuthService:
    """Member authentication service"""

    def __init__(self, db: MemberDatabase, hasher: PasswordHasher, logger=None):
        self.db = db
        self.hasher = hasher
        self.logger = logger or structlog.get_logger(__name__)

    async def login(self, email: str, password: str) -> MemberProfile:
        """
        Authenticate a member

        Unknown email and wrong password raise the same error so responses
        do not reveal which accounts exist. Each call is a single attempt.

        Returns:
            MemberProfile: sanitized profile including the stored role

        Raises:
            InvalidCredentials: no such member, or the password does not match
            AccountNotUsable: the member has no password hash set
            InternalError: store failure during lookup
        """
        self.logger.info("Login attempt", email=email)

        try:
            member = await self.db.get_member_by_email(email)
        except StoreError as e:
            self.logger.error("Login error", error=e.message)
            raise InternalError() from e

        if member is None:
            self.logger.info("User not found")
            raise InvalidCredentials()

        self.logger.info("User found", member_id=member.id)

        if not member.can_login:
            self.logger.info("User has no password set", member_id=member.id)
            raise AccountNotUsable()

        if not await self.hasher.verify_password(password, member.password_hash):
            self.logger.info("Password mismatch", member_id=member.id)
            raise InvalidCredentials()

        self.logger.info("Login successful", member_id=member.id)
        return member.to_profile()
