# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Local-disk storage for uploaded profile images."""
import os
import re
import secrets
import time
from pathlib import Path

from roster.core.config import MIB
from roster.core.errors import UnsupportedUploadType, UploadNotFound, UploadTooLarge
from roster.core.logging import get_logger

logger = get_logger(__name__)

EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")
FILENAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
MAX_NAME_ATTEMPTS = 5


def upload_extension(original_filename: str) -> str:
    ext = os.path.splitext(original_filename or "")[1]
    return ext if EXTENSION_RE.match(ext) else ""


def generate_upload_name(extension: str) -> str:
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"


class UploadStore:
    def __init__(self, directory: str, max_bytes: int = 2 * MIB):
        self._directory = Path(directory)
        self._max_bytes = max_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def ensure_directory(self) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)

    def save_upload(self, data: bytes, mime_type: str, original_filename: str) -> str:
        if not (mime_type or "").lower().startswith("image/"):
            raise UnsupportedUploadType()
        if len(data) > self._max_bytes:
            raise UploadTooLarge(
                f"File is too large. Maximum size is {self._max_bytes // MIB}MB"
                if self._max_bytes >= MIB else
                f"File is too large. Maximum size is {self._max_bytes} bytes"
            )

        extension = upload_extension(original_filename)
        self.ensure_directory()
        # Exclusive create: a clashing name is regenerated, never overwritten.
        for _ in range(MAX_NAME_ATTEMPTS):
            filename = generate_upload_name(extension)
            try:
                with open(self._directory / filename, "xb") as fh:
                    fh.write(data)
            except FileExistsError:
                continue
            logger.info("Upload stored filename=%s bytes=%d mime=%s",
                        filename, len(data), mime_type)
            return filename
        raise FileExistsError(f"Could not allocate a unique upload name in {self._directory}")

    def resolve_upload(self, filename: str) -> Path:
        if not filename or not FILENAME_RE.match(filename) or ".." in filename:
            raise UploadNotFound()
        path = self._directory / filename
        if not path.is_file():
            raise UploadNotFound()
        return path

