"""Front-end data layer for the member API."""
from roster.client.api_client import ApiError, MemberApiClient

__all__ = ["ApiError", "MemberApiClient"]
