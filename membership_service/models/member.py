"""
Member data models and schemas
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Union

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, Field


def _check_email_syntax(value: str) -> str:
    """Reject malformed addresses but keep the value exactly as submitted"""
    validate_email(value, check_deliverability=False)
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email_syntax)]


# Registration submission (API request, camelCase on the wire)
class RegistrationSubmission(BaseModel):
    """Schema for a new-member sign-up"""

    first_name: str = Field(..., alias="firstName", min_length=2)
    last_name: str = Field(..., alias="lastName", min_length=2)
    email: EmailAddress
    phone: str = Field(..., min_length=10)
    id_number: str = Field(..., alias="idNumber", min_length=5)
    county: str = Field(..., min_length=2)
    password: str = Field(..., min_length=6)

    def to_record_data(self, password_hash: str) -> Dict[str, Any]:
        """Column values for the store, with the password replaced by its hash"""
        return {
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'id_number': self.id_number,
            'county': self.county,
            'password_hash': password_hash,
        }


class LoginSubmission(BaseModel):
    """Schema for member login"""
    email: str
    password: str


# Store representations
class MemberSummary(BaseModel):
    """Sanitized member returned after sign-up"""
    id: int
    first_name: str
    last_name: str
    email: str
    county: str


class MemberProfile(MemberSummary):
    """Sanitized member returned after login"""
    role: Optional[str] = None


class MemberRecord(BaseModel):
    """Full member row; the password hash is never serialized"""
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    id_number: str
    county: str
    role: Optional[str] = None
    created_at: datetime
    password_hash: Optional[str] = Field(default=None, exclude=True, repr=False)

    @property
    def can_login(self) -> bool:
        return bool(self.password_hash)

    def to_profile(self) -> MemberProfile:
        return MemberProfile(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            county=self.county,
            role=self.role,
        )


# API responses
class RegistrationResponse(BaseModel):
    success: bool = True
    user: MemberSummary


class LoginResponse(BaseModel):
    success: bool = True
    user: MemberProfile


class ErrorResponse(BaseModel):
    error: Union[str, List[Dict[str, Any]]]
