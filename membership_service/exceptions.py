"""
Error taxonomy for the membership service.

Every error carries the HTTP status it maps to and a ``detail`` that is safe
to hand to a caller. Anything operator-facing (driver text, constraint names,
the colliding key) stays on the exception object and goes to the logs only.
"""

from typing import Any, Dict, List, Optional


class MembershipError(Exception):
    """Base class for all membership service errors"""

    status_code = 500
    default_detail: Any = "Internal server error"

    def __init__(self, detail: Any = None):
        self.detail = self.default_detail if detail is None else detail
        super().__init__(self.detail if isinstance(self.detail, str) else self.__class__.__name__)


class ValidationFailure(MembershipError):
    """The submission violated one or more field rules"""

    status_code = 400
    default_detail = "Invalid submission"

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__(errors)


class ConflictError(MembershipError):
    """A unique natural key (email, phone or id number) is already taken"""

    status_code = 409
    default_detail = "User already registered (Email, Phone, or ID)"

    def __init__(self, key: Optional[str] = None, message: Optional[str] = None):
        self.key = key
        self.message = message
        super().__init__()


class StoreError(MembershipError):
    """The store failed for a reason other than a uniqueness violation"""

    def __init__(self, message: str = "store failure"):
        self.message = message
        super().__init__()


class InternalError(MembershipError):
    """Generic failure surfaced to callers when infrastructure misbehaves"""


class InvalidCredentials(MembershipError):
    """Unknown email or wrong password; the two are indistinguishable"""

    status_code = 401
    default_detail = "Invalid credentials"


class AccountNotUsable(MembershipError):
    """The record exists but has no password hash to log in with"""

    status_code = 401
    default_detail = "Account not set up for login. Please contact admin."
