"""
FastAPI Dependencies
Shared resources held on app.state and the services built from them
"""

from typing import Any

from fastapi import Depends, Request

from membership_service.services.auth_service import AuthService
from membership_service.services.registration_service import RegistrationService
from membership_service.utils.database import MemberDatabase
from membership_service.utils.logger import LogBuffer
from membership_service.utils.security import PasswordHasher


def get_database(request: Request) -> MemberDatabase:
    """Dependency to get database instance"""
    return request.app.state.db


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_log_buffer(request: Request) -> LogBuffer:
    return request.app.state.log_buffer


def get_registration_service(
    db: MemberDatabase = Depends(get_database),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> RegistrationService:
    return RegistrationService(db, hasher)


def get_auth_service(
    db: MemberDatabase = Depends(get_database),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(db, hasher)


async def get_json_body(request: Request) -> Any:
    """
    Decoded JSON body, or None when the body is empty or not valid JSON.

    Routes validate the result themselves so malformed bodies get the same
    error shape as bad field values.
    """
    try:
        return await request.json()
    except ValueError:
        return None
