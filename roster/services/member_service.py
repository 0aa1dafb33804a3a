# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for registering and reading members."""
from typing import Any, Dict, List, Optional

from roster.core.errors import (
    DuplicateMember, MemberValidationError, MissingUpload, RosterError,
    UnsupportedUploadType, UploadTooLarge,
)
from roster.core.logging import get_logger
from roster.metrics import MEMBER_CREATE_REJECTIONS, MEMBERS_CREATED, MEMBERS_TOTAL, UPLOAD_BYTES
from roster.repositories.member_store import MemberStore
from roster.repositories.upload_store import UploadStore
from roster.schemas import ImageUpload, MemberFields

logger = get_logger(__name__)

REJECTION_REASONS = {
    MissingUpload: "missing_image",
    UploadTooLarge: "too_large",
    UnsupportedUploadType: "unsupported_type",
    MemberValidationError: "validation",
    DuplicateMember: "duplicate",
}


class MemberService:
    def __init__(self, member_store: MemberStore, upload_store: UploadStore):
        self._members = member_store
        self._uploads = upload_store

    def seed_gauges(self):
        MEMBERS_TOTAL.set(self._members.count())
        logger.info("Prometheus gauges loaded from DB")

    def list_members(self) -> List[Dict[str, Any]]:
        return self._members.list_members()

    def get_member(self, member_id: str) -> Dict[str, Any]:
        return self._members.get_member(member_id)

    def register_member(self, fields: MemberFields,
                        image: Optional[ImageUpload]) -> Dict[str, Any]:
        """Store the image, then persist the member pointing at it."""
        try:
            if image is None or not image.filename:
                raise MissingUpload()
            filename = self._uploads.save_upload(image.data, image.content_type, image.filename)
            member = self._members.create_member(fields.model_dump(), filename)
        except RosterError as exc:
            reason = REJECTION_REASONS.get(type(exc))
            if reason:
                MEMBER_CREATE_REJECTIONS.labels(reason=reason).inc()
                logger.info("Member rejected reason=%s detail=%s", reason, exc.message)
            raise

        MEMBERS_CREATED.inc()
        MEMBERS_TOTAL.inc()
        UPLOAD_BYTES.observe(len(image.data))
        logger.info("Member created id=%s image=%s", member["_id"], filename)
        return member
