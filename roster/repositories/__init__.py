# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the member and upload stores."""
from roster.repositories.member_store import MemberStore
from roster.repositories.upload_store import UploadStore

__all__ = ["MemberStore", "UploadStore"]
