"""
Demo Seed — Tests
=================
Run:  pytest test_seed.py -v
"""
import pytest

from roster.core.errors import UploadNotFound
from roster.repositories.member_store import MemberStore
from roster.repositories.upload_store import UploadStore
from seed_db import DEFAULT_PROFILE_IMAGE, TEAM_MEMBERS, seed


@pytest.fixture
def store():
    s = MemberStore("sqlite://")
    s.connect()
    yield s
    s.close()


@pytest.fixture
def uploads(tmp_path):
    return UploadStore(tmp_path / "uploads")


def _existing(store):
    return store.create_member(
        {"name": "Old", "role": "Tester", "email": "old@example.com"}, "1-1.png"
    )


class TestSeed:
    def test_replaces_members_when_image_present(self, store, uploads):
        uploads.ensure_directory()
        (uploads.directory / DEFAULT_PROFILE_IMAGE).write_bytes(b"\xff\xd8jpeg")
        _existing(store)

        created = seed(store, uploads)

        assert len(created) == len(TEAM_MEMBERS) == 3
        listed = store.list_members()
        assert {m["email"] for m in listed} == {m["email"] for m in TEAM_MEMBERS}
        assert all(m["profileImage"] == DEFAULT_PROFILE_IMAGE for m in listed)

    def test_missing_image_leaves_members_untouched(self, store, uploads):
        old = _existing(store)

        with pytest.raises(UploadNotFound):
            seed(store, uploads)

        assert store.list_members() == [old]

    def test_seeded_image_resolves(self, store, uploads):
        uploads.ensure_directory()
        (uploads.directory / DEFAULT_PROFILE_IMAGE).write_bytes(b"\xff\xd8jpeg")
        for member in seed(store, uploads):
            assert uploads.resolve_upload(member["profileImage"]).is_file()
