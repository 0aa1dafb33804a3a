# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
View models for the roster front end.

Each view holds exactly one ``ViewState``: Loading, Error, Empty or Loaded.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from roster.client.api_client import ApiError, ImageFile, MemberApiClient
from roster.core.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_IMAGE_URL = (
    "https://images.pexels.com/photos/1181345/pexels-photo-1181345.jpeg"
    "?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=1"
)
REDIRECT_PATH = "/members"
REDIRECT_DELAY_SECONDS = 2.0


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Error:
    message: str
    category: str = "unknown"


@dataclass(frozen=True)
class Empty:
    reason: str = "no-members"


@dataclass(frozen=True)
class Loaded:
    data: Any


ViewState = Union[Loading, Error, Empty, Loaded]


def filter_members(members: List[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    """Case-insensitive substring match on name or role."""
    needle = term.lower()
    return [
        m for m in members
        if needle in (m.get("name") or "").lower() or needle in (m.get("role") or "").lower()
    ]


def image_source(client: MemberApiClient, member: Dict[str, Any]) -> str:
    filename = member.get("profileImage") or ""
    if client.image_available(filename):
        return client.image_url(filename)
    return PLACEHOLDER_IMAGE_URL


class MemberListView:
    def __init__(self, client: MemberApiClient):
        self._client = client
        self._members: List[Dict[str, Any]] = []
        self._search_term = ""
        self._fetch_state: ViewState = Loading()

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def state(self) -> ViewState:
        if not isinstance(self._fetch_state, Loaded):
            return self._fetch_state
        if not self._members:
            return Empty("no-members")
        visible = filter_members(self._members, self._search_term)
        if not visible:
            return Empty("no-matches")
        return Loaded(visible)

    def load(self) -> ViewState:
        self._fetch_state = Loading()
        try:
            self._members = self._client.get_all_members()
        except ApiError as exc:
            logger.warning("Error fetching members: %s", exc.message)
            self._fetch_state = Error("Failed to load team members. Please try again.", exc.category)
        else:
            self._fetch_state = Loaded(self._members)
        return self.state

    retry = load

    def search(self, term: str) -> ViewState:
        self._search_term = term
        return self.state


class MemberDetailView:
    def __init__(self, client: MemberApiClient, member_id: str):
        self._client = client
        self.member_id = member_id
        self.state: ViewState = Loading()

    def load(self) -> ViewState:
        self.state = Loading()
        try:
            member = self._client.get_member(self.member_id)
        except ApiError as exc:
            logger.warning("Error fetching member id=%s: %s", self.member_id, exc.message)
            if exc.category == "not_found":
                self.state = Error("Member not found.", "not_found")
            else:
                self.state = Error("Failed to load member details. Please try again.", exc.category)
        else:
            self.state = Loaded(member)
        return self.state

    retry = load


@dataclass
class SubmitResult:
    ok: bool
    message: str
    member: Optional[Dict[str, Any]] = None
    navigate_to: Optional[str] = None
    delay_seconds: float = 0.0


@dataclass
class MemberForm:
    client: MemberApiClient
    name: str = ""
    role: str = ""
    email: str = ""
    phone: str = ""
    bio: str = ""
    image: Optional[ImageFile] = None
    submitting: bool = field(default=False, init=False)

    def fields(self) -> Dict[str, str]:
        return {"name": self.name, "role": self.role, "email": self.email,
                "phone": self.phone, "bio": self.bio}

    def clear(self) -> None:
        self.name = self.role = self.email = self.phone = self.bio = ""
        self.image = None

    def submit(self) -> SubmitResult:
        if not (self.name and self.role and self.email):
            return SubmitResult(False, "Please fill in all required fields.")
        if self.image is None:
            return SubmitResult(False, "Please upload a profile image.")

        self.submitting = True
        try:
            member = self.client.add_member(self.fields(), self.image)
        except ApiError as exc:
            logger.warning("Error adding member: %s", exc.message)
            return SubmitResult(False, "Failed to add team member. Please try again.")
        finally:
            self.submitting = False

        self.clear()
        return SubmitResult(True, "Team member added successfully!", member=member,
                            navigate_to=REDIRECT_PATH, delay_seconds=REDIRECT_DELAY_SECONDS)
