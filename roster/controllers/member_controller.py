# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: member list, detail, and multipart create."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from roster.repositories.upload_store import UploadStore
from roster.schemas import ErrorResponse, ImageUpload, MemberFields, MemberOut
from roster.services.member_service import MemberService
from roster.core.dependencies import get_member_service, get_upload_store

router = APIRouter(prefix="/api", tags=["Members"])


@router.get("/members", response_model=List[MemberOut], response_model_exclude_none=True)
def list_members(service: MemberService = Depends(get_member_service)):
    return service.list_members()


@router.get("/members/{member_id}", response_model=MemberOut,
            response_model_exclude_none=True,
            responses={404: {"model": ErrorResponse}})
def get_member(member_id: str, service: MemberService = Depends(get_member_service)):
    return service.get_member(member_id)


@router.post("/members", status_code=201, response_model=MemberOut,
             response_model_exclude_none=True,
             responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}})
async def create_member(
    name: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    service: MemberService = Depends(get_member_service),
    uploads: UploadStore = Depends(get_upload_store),
):
    fields = MemberFields(name=name, role=role, email=email, phone=phone, bio=bio)
    image = None
    if profile_image is not None and profile_image.filename:
        # One byte past the limit is enough to reject.
        data = await profile_image.read(uploads.max_bytes + 1)
        image = ImageUpload(data=data, content_type=profile_image.content_type or "",
                            filename=profile_image.filename)
    return service.register_member(fields, image)
