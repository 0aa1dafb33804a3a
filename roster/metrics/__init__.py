# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Prometheus metrics for the member API."""
from prometheus_client import Counter, Gauge, Histogram

MEMBERS_CREATED = Counter(
    "members_created_total", "Total members created"
)
MEMBERS_TOTAL = Gauge(
    "members_total", "Members currently stored"
)
MEMBER_CREATE_REJECTIONS = Counter(
    "member_create_rejections_total",
    "Member submissions rejected before persisting",
    ["reason"],
)
UPLOAD_BYTES = Histogram(
    "member_upload_bytes",
    "Size of accepted profile image uploads",
    buckets=[10_240, 102_400, 262_144, 524_288, 1_048_576, 2_097_152],
)
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)
