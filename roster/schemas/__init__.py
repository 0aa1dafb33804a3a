# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MemberOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    role: str
    email: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    profileImage: str
    createdAt: str
    updatedAt: str


class MemberFields(BaseModel):
    """Text parts of the multipart create form; validation happens in the store."""

    name: Optional[str] = None
    role: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None


class ImageUpload(BaseModel):
    data: bytes
    content_type: str = ""
    filename: str = ""


class ErrorResponse(BaseModel):
    message: str
    fields: Optional[List[str]] = None
    error: Optional[str] = None
