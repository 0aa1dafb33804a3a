# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: read-only access to stored profile images."""
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from roster.repositories.upload_store import UploadStore
from roster.core.dependencies import get_upload_store

router = APIRouter(prefix="/api", tags=["Uploads"])


@router.get("/uploads/{filename}")
def get_upload(filename: str, uploads: UploadStore = Depends(get_upload_store)):
    return FileResponse(uploads.resolve_upload(filename))
