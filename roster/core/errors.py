# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy raised by the stores and the service layer.

Each failure kind is its own class. The API boundary maps classes to HTTP
statuses through ``ERROR_STATUS`` in ``roster.controllers.errors``; nothing
inspects error codes or names at runtime.
"""
from typing import List, Optional


class RosterError(Exception):
    """Base class. ``message`` is safe to show to API users."""

    message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class MemberValidationError(RosterError):
    """A required field is missing or malformed."""

    def __init__(self, fields: List[str], message: Optional[str] = None):
        self.fields = list(fields)
        super().__init__(message or f"Missing required fields: {', '.join(self.fields)}")

    def to_dict(self) -> dict:
        return {"message": self.message, "fields": self.fields}


class DuplicateMember(RosterError):
    message = "Member with this email already exists"


class MemberNotFound(RosterError):
    message = "Member not found"


class UploadNotFound(RosterError):
    message = "File not found"


class UnsupportedUploadType(RosterError):
    message = "Only image files are allowed"


class UploadTooLarge(RosterError):
    message = "File is too large. Maximum size is 2MB"


class MissingUpload(RosterError):
    message = "Profile image is required"


class StoreUnavailable(RosterError):
    message = "Database unavailable"
