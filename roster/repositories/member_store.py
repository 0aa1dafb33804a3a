# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for member records."""
import itertools
import os
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import (
    Column, DateTime, Index, MetaData, String, Table, Text,
    create_engine, delete, func, insert, select, text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.pool import StaticPool

from roster.core.errors import (
    DuplicateMember, MemberNotFound, MemberValidationError, StoreUnavailable,
)
from roster.core.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "role", "email")
OPTIONAL_FIELDS = ("phone", "bio")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MEMBER_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

metadata = MetaData()

members = Table(
    "members",
    metadata,
    Column("id", String(24), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("role", String(255), nullable=False),
    Column("email", String(320), nullable=False, unique=True),
    Column("phone", String(64)),
    Column("bio", Text),
    Column("profile_image", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)
Index("ix_members_created_at", members.c.created_at)

# 12-byte ids: 4-byte seconds, 5 random bytes fixed per process, 3-byte counter.
_PROCESS_RANDOM = os.urandom(5)
_id_counter = itertools.count(int.from_bytes(os.urandom(3), "big") >> 1)


def new_member_id() -> str:
    seq = next(_id_counter) & 0xFFFFFF
    raw = int(time.time()).to_bytes(4, "big") + _PROCESS_RANDOM + seq.to_bytes(3, "big")
    return raw.hex()


def is_valid_member_id(member_id: str) -> bool:
    return bool(member_id) and MEMBER_ID_RE.match(member_id) is not None


def _iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _row_to_dict(row) -> Dict[str, Any]:
    member = {
        "_id": row.id,
        "name": row.name,
        "role": row.role,
        "email": row.email,
        "profileImage": row.profile_image,
        "createdAt": _iso(row.created_at),
        "updatedAt": _iso(row.updated_at),
    }
    if row.phone is not None:
        member["phone"] = row.phone
    if row.bio is not None:
        member["bio"] = row.bio
    return member


def validate_member_fields(fields: Mapping[str, Optional[str]]) -> Dict[str, Optional[str]]:
    """Return stripped field values, or raise MemberValidationError."""
    cleaned: Dict[str, Optional[str]] = {}
    for name in REQUIRED_FIELDS + OPTIONAL_FIELDS:
        value = fields.get(name)
        cleaned[name] = value.strip() if isinstance(value, str) else None

    missing = [name for name in REQUIRED_FIELDS if not cleaned[name]]
    if missing:
        raise MemberValidationError(missing)
    if not EMAIL_RE.match(cleaned["email"]):
        raise MemberValidationError(["email"], "Invalid email format")

    for name in OPTIONAL_FIELDS:
        cleaned[name] = cleaned[name] or None
    return cleaned


class MemberStore:
    """Persistent member collection. Call ``connect()`` before use and ``close()`` after."""

    def __init__(self, database_url: str, pool_recycle: int = 300,
                 engine: Optional[Engine] = None):
        self._database_url = database_url
        self._pool_recycle = pool_recycle
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StoreUnavailable()
        return self._engine

    # ── Lifecycle ──────────────────────────────────────────────────────

    def connect(self) -> None:
        if self._engine is None:
            self._engine = self._build_engine()
        try:
            metadata.create_all(self._engine)
        except OperationalError as exc:
            raise StoreUnavailable() from exc
        logger.info("Member store connected url=%s", self._engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Member store disconnected")

    def verify_connection(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except OperationalError as exc:
            raise StoreUnavailable() from exc

    # ── Write ──────────────────────────────────────────────────────────

    def create_member(self, fields: Mapping[str, Optional[str]],
                      profile_image: str) -> Dict[str, Any]:
        cleaned = validate_member_fields(fields)
        if not profile_image:
            raise MemberValidationError(["profileImage"])

        now = datetime.now(timezone.utc)
        values = {
            "id": new_member_id(),
            "name": cleaned["name"],
            "role": cleaned["role"],
            "email": cleaned["email"],
            "phone": cleaned["phone"],
            "bio": cleaned["bio"],
            "profile_image": profile_image,
            "created_at": now,
            "updated_at": now,
        }
        # The UNIQUE constraint on email is the only duplicate guard.
        try:
            with self.engine.begin() as conn:
                conn.execute(insert(members).values(**values))
                row = conn.execute(
                    select(members).where(members.c.id == values["id"])
                ).one()
        except IntegrityError as exc:
            raise DuplicateMember() from exc
        except OperationalError as exc:
            raise StoreUnavailable() from exc
        return _row_to_dict(row)

    def clear(self) -> int:
        try:
            with self.engine.begin() as conn:
                return conn.execute(delete(members)).rowcount or 0
        except OperationalError as exc:
            raise StoreUnavailable() from exc

    # ── Read ───────────────────────────────────────────────────────────

    def list_members(self) -> List[Dict[str, Any]]:
        query = select(members).order_by(members.c.created_at.desc(), members.c.id.desc())
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).fetchall()
        except OperationalError as exc:
            raise StoreUnavailable() from exc
        return [_row_to_dict(r) for r in rows]

    def get_member(self, member_id: str) -> Dict[str, Any]:
        if not is_valid_member_id(member_id):
            raise MemberNotFound()
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(members).where(members.c.id == member_id.lower())
                ).fetchone()
        except OperationalError as exc:
            raise StoreUnavailable() from exc
        if row is None:
            raise MemberNotFound()
        return _row_to_dict(row)

    def count(self) -> int:
        try:
            with self.engine.connect() as conn:
                return conn.execute(select(func.count()).select_from(members)).scalar() or 0
        except OperationalError as exc:
            raise StoreUnavailable() from exc

    # ── Private ────────────────────────────────────────────────────────

    def _build_engine(self) -> Engine:
        url = self._database_url
        if url.startswith("sqlite"):
            kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(url, **kwargs)
        return create_engine(url, pool_pre_ping=True, pool_recycle=self._pool_recycle)
