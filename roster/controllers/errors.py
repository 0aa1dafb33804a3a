# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Maps the error taxonomy onto HTTP responses."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roster.core.errors import (
    DuplicateMember, MemberNotFound, MemberValidationError, MissingUpload,
    RosterError, StoreUnavailable, UnsupportedUploadType, UploadNotFound,
    UploadTooLarge,
)
from roster.core.logging import get_logger

logger = get_logger(__name__)

# One entry per RosterError subclass.
ERROR_STATUS: dict[type, int] = {
    MemberValidationError: 400,
    DuplicateMember: 400,
    MissingUpload: 400,
    UnsupportedUploadType: 400,
    UploadTooLarge: 413,
    MemberNotFound: 404,
    UploadNotFound: 404,
    StoreUnavailable: 503,
}


async def roster_error_handler(request: Request, exc: RosterError):
    status = ERROR_STATUS[type(exc)]
    if status >= 500:
        logger.error("Store failure on %s %s: %s", request.method, request.url.path,
                     exc.__cause__ or exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Framework errors (unparseable bodies, unknown routes) use the same {"message"} shape.
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)},
                        headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    logger.warning("Rejected request on %s %s fields=%s", request.method, request.url.path, fields)
    return JSONResponse(status_code=400, content={"message": "Invalid request", "fields": fields})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path,
                     exc_info=exc)
    body = {"message": "Something went wrong!"}
    if request.app.state.settings.is_development:
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RosterError, roster_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
