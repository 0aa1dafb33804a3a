# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints — health, readiness, metrics."""
from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from roster.core.config import Settings
from roster.core.dependencies import get_member_store, get_settings
from roster.core.errors import StoreUnavailable
from roster.repositories.member_store import MemberStore

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    return {"status": "ok", "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION}


@router.get("/health/ready")
def readiness_check(store: MemberStore = Depends(get_member_store)):
    try:
        store.verify_connection()
    except StoreUnavailable as exc:
        raise HTTPException(status_code=503, detail=f"Database unavailable: {exc.__cause__ or exc}")
    return {"status": "ok", "database": "connected"}


@router.get("/metrics")
def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
