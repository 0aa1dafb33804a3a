"""
Front-end data layer — Unit Tests
==================================
Run:  pytest test_client.py -v
"""
import logging

import httpx
import pytest

from roster.client.api_client import ApiError, MemberApiClient
from roster.client.views import (
    PLACEHOLDER_IMAGE_URL, REDIRECT_DELAY_SECONDS, Empty, Error, Loaded, Loading,
    MemberDetailView, MemberForm, MemberListView, filter_members, image_source,
)

BASE = "http://roster.test/api"

ADA = {"_id": "a" * 24, "name": "Ada Lovelace", "role": "Engineer",
       "email": "ada@example.com", "profileImage": "1-1.png"}
GRACE = {"_id": "b" * 24, "name": "Grace Hopper", "role": "Admiral",
         "email": "grace@example.com", "profileImage": "1-2.png"}


def _client(handler):
    return MemberApiClient(BASE, timeout=10.0, transport=httpx.MockTransport(handler))


def _json(status, payload):
    return lambda request: httpx.Response(status, json=payload)


def _raise(exc_type):
    def handler(request):
        raise exc_type("boom", request=request)
    return handler


# ═══════════════════════════════════════════════════════════════════════════
# API CLIENT
# ═══════════════════════════════════════════════════════════════════════════
class TestApiClient:
    def test_get_all_members(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json=[ADA, GRACE])

        assert _client(handler).get_all_members() == [ADA, GRACE]
        assert seen == [f"{BASE}/members"]

    def test_get_member(self):
        def handler(request):
            assert request.url.path == f"/api/members/{ADA['_id']}"
            return httpx.Response(200, json=ADA)

        assert _client(handler).get_member(ADA["_id"]) == ADA

    def test_add_member_sends_multipart(self):
        captured = {}

        def handler(request):
            captured["content_type"] = request.headers["content-type"]
            captured["body"] = request.read()
            return httpx.Response(201, json=ADA)

        client = _client(handler)
        result = client.add_member({"name": "Ada", "role": "Engineer", "email": "ada@example.com"},
                                   ("ada.png", b"\x89PNG", "image/png"))
        assert result == ADA
        assert captured["content_type"].startswith("multipart/form-data")
        assert b'name="profileImage"; filename="ada.png"' in captured["body"]
        assert b'name="email"' in captured["body"]

    def test_default_timeout(self):
        client = MemberApiClient(BASE)
        assert client._client.timeout.read == 10.0
        client.close()

    @pytest.mark.parametrize("status,category,message", [
        (400, "bad_request", "Invalid request: Invalid email format"),
        (404, "not_found", "Resource not found"),
        (413, "too_large", "File size too large. Please upload a smaller image."),
        (415, "unsupported_type", "Unsupported file type. Please upload a valid image file."),
        (422, "validation", "Validation error: Invalid email format"),
        (429, "rate_limited", "Too many requests. Please try again later."),
        (500, "server_error", "Server error. Please try again later."),
        (418, "request_failed", "Request failed: Invalid email format"),
    ])
    def test_status_mapping(self, status, category, message):
        client = _client(_json(status, {"message": "Invalid email format"}))
        with pytest.raises(ApiError) as err:
            client.get_all_members()
        assert err.value.category == category
        assert err.value.message == message
        assert err.value.status_code == status

    def test_status_without_json_body(self):
        client = _client(lambda request: httpx.Response(400, text="<html>"))
        with pytest.raises(ApiError) as err:
            client.get_all_members()
        assert err.value.message == "Invalid request: Bad Request"

    def test_timeout(self):
        with pytest.raises(ApiError) as err:
            _client(_raise(httpx.ReadTimeout)).get_all_members()
        assert err.value.category == "timeout"
        assert err.value.message.startswith("Request timed out")

    def test_network_down(self):
        with pytest.raises(ApiError) as err:
            _client(_raise(httpx.ConnectError)).get_all_members()
        assert err.value.category == "network"
        assert err.value.message.startswith("Network error")

    def test_success_without_json_body(self):
        client = _client(lambda request: httpx.Response(
            200, text="<html>proxy page</html>", headers={"content-type": "text/html"}))
        with pytest.raises(ApiError) as err:
            client.get_all_members()
        assert err.value.category == "unknown"
        assert err.value.message == "An unexpected error occurred. Please try again."
        assert err.value.status_code == 200

    def test_add_member_log_omits_email(self):
        lines = []
        handler = logging.Handler()
        handler.emit = lambda record: lines.append(record.getMessage())
        log = logging.getLogger("roster.client.api_client")
        log.addHandler(handler)
        try:
            _client(_json(201, ADA)).add_member(
                {"name": "Ada", "role": "Engineer", "email": "ada@example.com"},
                ("ada.png", b"\x89PNG", "image/png"))
        finally:
            log.removeHandler(handler)
        assert lines
        assert not any("ada@example.com" in line for line in lines)


# ═══════════════════════════════════════════════════════════════════════════
# VIEWS
# ═══════════════════════════════════════════════════════════════════════════
class TestFilter:
    def test_matches_name_or_role_case_insensitively(self):
        members = [ADA, GRACE]
        assert filter_members(members, "LOVE") == [ADA]
        assert filter_members(members, "admiral") == [GRACE]
        assert filter_members(members, "") == members
        assert filter_members(members, "zzz") == []


class TestMemberListView:
    def test_initially_loading(self):
        assert isinstance(MemberListView(_client(_json(200, []))).state, Loading)

    def test_loaded(self):
        view = MemberListView(_client(_json(200, [ADA, GRACE])))
        assert view.load() == Loaded([ADA, GRACE])

    def test_no_members(self):
        view = MemberListView(_client(_json(200, [])))
        assert view.load() == Empty("no-members")
        assert view.search("ada") == Empty("no-members")

    def test_search_recomputed_each_keystroke(self):
        view = MemberListView(_client(_json(200, [ADA, GRACE])))
        view.load()
        assert view.search("g") == Loaded([ADA, GRACE])
        assert view.search("gr") == Loaded([GRACE])
        assert view.search("grx") == Empty("no-matches")
        assert view.search("") == Loaded([ADA, GRACE])

    def test_error_then_retry(self):
        calls = iter([httpx.Response(500, json={"message": "x"}), httpx.Response(200, json=[ADA])])
        view = MemberListView(_client(lambda request: next(calls)))
        state = view.load()
        assert isinstance(state, Error)
        assert state.message == "Failed to load team members. Please try again."
        assert view.retry() == Loaded([ADA])

    def test_search_term_survives_reload(self):
        view = MemberListView(_client(_json(200, [ADA, GRACE])))
        view.search("hopper")
        assert view.load() == Loaded([GRACE])
        assert view.search_term == "hopper"


class TestMemberDetailView:
    def test_loaded(self):
        view = MemberDetailView(_client(_json(200, ADA)), ADA["_id"])
        assert isinstance(view.state, Loading)
        assert view.load() == Loaded(ADA)

    def test_not_found_distinct_from_transient(self):
        missing = MemberDetailView(_client(_json(404, {"message": "Member not found"})), "x")
        assert missing.load().category == "not_found"
        flaky = MemberDetailView(_client(_raise(httpx.ConnectError)), ADA["_id"])
        state = flaky.load()
        assert state.category == "network"
        assert state.message == "Failed to load member details. Please try again."

    def test_retry(self):
        calls = iter([httpx.Response(503, json={"message": "Database unavailable"}),
                      httpx.Response(200, json=ADA)])
        view = MemberDetailView(_client(lambda request: next(calls)), ADA["_id"])
        assert isinstance(view.load(), Error)
        assert view.retry() == Loaded(ADA)


class TestMemberForm:
    IMAGE = ("ada.png", b"\x89PNG", "image/png")

    def _form(self, handler, **values):
        defaults = {"name": "Ada", "role": "Engineer", "email": "ada@example.com",
                    "image": self.IMAGE}
        defaults.update(values)
        return MemberForm(_client(handler), **defaults)

    def test_required_fields_checked_locally(self):
        def handler(request):
            raise AssertionError("no request expected")

        result = self._form(handler, role="").submit()
        assert not result.ok
        assert result.message == "Please fill in all required fields."

    def test_image_required_locally(self):
        def handler(request):
            raise AssertionError("no request expected")

        result = self._form(handler, image=None).submit()
        assert result.message == "Please upload a profile image."

    def test_success_clears_and_redirects(self):
        form = self._form(_json(201, ADA), bio="Analyst")
        result = form.submit()
        assert result.ok
        assert result.member == ADA
        assert result.navigate_to == "/members"
        assert result.delay_seconds == REDIRECT_DELAY_SECONDS
        assert form.fields() == {"name": "", "role": "", "email": "", "phone": "", "bio": ""}
        assert form.image is None
        assert not form.submitting

    def test_failure_keeps_entered_data(self):
        form = self._form(_json(400, {"message": "Member with this email already exists"}),
                          phone="555")
        result = form.submit()
        assert not result.ok
        assert result.message == "Failed to add team member. Please try again."
        assert form.name == "Ada"
        assert form.phone == "555"
        assert form.image == self.IMAGE


class TestImageSource:
    def test_uses_upload_when_available(self):
        client = _client(lambda request: httpx.Response(200, content=b"img"))
        assert image_source(client, ADA) == f"{BASE}/uploads/1-1.png"

    def test_placeholder_when_missing(self):
        client = _client(lambda request: httpx.Response(404, json={"message": "File not found"}))
        assert image_source(client, ADA) == PLACEHOLDER_IMAGE_URL

    def test_placeholder_when_unreachable(self):
        client = _client(_raise(httpx.ConnectError))
        assert image_source(client, ADA) == PLACEHOLDER_IMAGE_URL
