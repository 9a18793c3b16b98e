"""
Data models for membership service
"""

from .member import (
    ErrorResponse,
    LoginResponse,
    LoginSubmission,
    MemberProfile,
    MemberRecord,
    MemberSummary,
    RegistrationResponse,
    RegistrationSubmission,
)

__all__ = [
    "ErrorResponse",
    "LoginResponse",
    "LoginSubmission",
    "MemberProfile",
    "MemberRecord",
    "MemberSummary",
    "RegistrationResponse",
    "RegistrationSubmission",
]
