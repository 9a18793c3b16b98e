"""
Validation utilities for member submissions
"""

from typing import Any, Dict, List

from pydantic import ValidationError

from membership_service.exceptions import ValidationFailure
from membership_service.models.member import LoginSubmission, RegistrationSubmission


def _violations(error: ValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into one entry per violated field"""
    violations = []
    for item in error.errors(include_url=False, include_input=False):
        loc = item.get('loc') or ()
        violations.append({
            'field': '.'.join(str(part) for part in loc) or 'body',
            'message': item.get('msg', 'Invalid value'),
            'code': item.get('type', 'value_error'),
        })
    return violations


def validate_registration(payload: Any) -> RegistrationSubmission:
    """
    Validate a raw sign-up payload.

    Every violated field is reported, not just the first one. No store access
    happens here, so an email that is already registered still passes.

    Raises:
        ValidationFailure: with the full list of violations
    """
    try:
        return RegistrationSubmission.model_validate(payload)
    except ValidationError as e:
        raise ValidationFailure(_violations(e)) from e


def parse_login(payload: Any) -> LoginSubmission:
    """
    Parse a raw login payload.

    Raises:
        ValidationFailure: when email or password is missing or not a string
    """
    try:
        return LoginSubmission.model_validate(payload)
    except ValidationError as e:
        raise ValidationFailure(_violations(e)) from e
