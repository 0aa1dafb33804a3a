# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""HTTP client the roster front end uses to talk to the member API."""
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Tuple, Union

import httpx

from roster.core.config import settings
from roster.core.logging import get_logger

logger = get_logger(__name__)

# (filename, content, content_type)
ImageFile = Tuple[str, Union[bytes, BinaryIO], str]

STATUS_MESSAGES = {
    400: ("bad_request", "Invalid request: {message}"),
    404: ("not_found", "Resource not found"),
    413: ("too_large", "File size too large. Please upload a smaller image."),
    415: ("unsupported_type", "Unsupported file type. Please upload a valid image file."),
    422: ("validation", "Validation error: {message}"),
    429: ("rate_limited", "Too many requests. Please try again later."),
    500: ("server_error", "Server error. Please try again later."),
}


class ApiError(Exception):
    """A failed API call, reduced to a category and a human-readable message."""

    def __init__(self, category: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.category = category
        self.message = message
        self.status_code = status_code


def error_from_response(response: httpx.Response) -> ApiError:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    message = ""
    if isinstance(payload, dict):
        message = payload.get("message") or ""
    message = message or response.reason_phrase or f"HTTP {response.status_code}"

    category, template = STATUS_MESSAGES.get(
        response.status_code, ("request_failed", "Request failed: {message}")
    )
    return ApiError(category, template.format(message=message), response.status_code)


def error_from_exception(exc: Exception) -> ApiError:
    if isinstance(exc, httpx.TimeoutException):
        return ApiError("timeout", "Request timed out. Please check your connection and try again.")
    if isinstance(exc, httpx.TransportError):
        return ApiError("network", "Network error. Please check if the server is running and accessible.")
    return ApiError("unknown", "An unexpected error occurred. Please try again.")


class MemberApiClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.CLIENT_TIMEOUT,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_all_members(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/members")

    def get_member(self, member_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/members/{member_id}")

    def add_member(self, fields: Mapping[str, str], image: Optional[ImageFile]) -> Dict[str, Any]:
        data = {k: fields.get(k, "") for k in ("name", "role", "email", "phone", "bio")}
        files = {"profileImage": image} if image else None
        logger.info("Submitting member to %s", self.base_url)
        return self._request("POST", "/members", data=data, files=files)

    def image_url(self, filename: str) -> str:
        return f"{self.base_url}/uploads/{filename}"

    def image_available(self, filename: str) -> bool:
        if not filename:
            return False
        try:
            response = self._client.get(f"/uploads/{filename}")
        except httpx.HTTPError as exc:
            logger.warning("Image fetch failed filename=%s: %s", filename, exc)
            return False
        return response.status_code == 200

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise error_from_exception(exc) from exc
        if response.status_code >= 400:
            error = error_from_response(response)
            logger.warning("%s %s returned %d: %s", method, path,
                           response.status_code, error.message)
            raise error
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body content_type=%s", method, path,
                           response.headers.get("content-type", ""))
            raise ApiError("unknown", "An unexpected error occurred. Please try again.",
                           response.status_code) from exc
