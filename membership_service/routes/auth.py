"""
Authentication routes
Member login
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends

from membership_service.exceptions import InvalidCredentials, ValidationFailure
from membership_service.models.member import ErrorResponse, LoginResponse
from membership_service.services.auth_service import AuthService
from membership_service.utils.dependencies import get_auth_service, get_json_body
from membership_service.utils.validators import parse_login

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def login_member(
    payload: Any = Depends(get_json_body),
    service: AuthService = Depends(get_auth_service),
):
    """Member login with email and password"""
    try:
        credentials = parse_login(payload)
    except ValidationFailure as e:
        logger.info("Malformed login request", errors=e.errors)
        raise InvalidCredentials() from e

    profile = await service.login(credentials.email, credentials.password)
    return LoginResponse(user=profile)
