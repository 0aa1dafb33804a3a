# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency functions.

The stores are built and connected by the process entry point (see
``main.lifespan``) and attached to ``app.state``; nothing here creates them.
"""
from fastapi import Request

from roster.core.config import Settings
from roster.repositories.member_store import MemberStore
from roster.repositories.upload_store import UploadStore
from roster.services.member_service import MemberService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_member_store(request: Request) -> MemberStore:
    return request.app.state.member_store


def get_upload_store(request: Request) -> UploadStore:
    return request.app.state.upload_store


def get_member_service(request: Request) -> MemberService:
    return request.app.state.member_service
