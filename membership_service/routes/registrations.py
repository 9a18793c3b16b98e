"""
Registration routes
Member sign-up and the admin dashboard listing
"""

from typing import Any, List

from fastapi import APIRouter, Depends

from membership_service.models.member import ErrorResponse, MemberRecord, RegistrationResponse
from membership_service.services.registration_service import RegistrationService
from membership_service.utils.dependencies import get_json_body, get_registration_service

router = APIRouter()


@router.get(
    "/registrations",
    response_model=List[MemberRecord],
    responses={500: {"model": ErrorResponse}},
)
async def list_registrations(
    service: RegistrationService = Depends(get_registration_service),
):
    """List every registration, newest first"""
    return await service.list_registrations()


@router.post(
    "/register",
    response_model=RegistrationResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def register_member(
    payload: Any = Depends(get_json_body),
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Register new member

    Body fields: firstName, lastName, email, phone, idNumber, county, password
    """
    member = await service.register(payload)
    return RegistrationResponse(user=member)
