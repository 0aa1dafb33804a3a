"""
Seed the member store with the demo team.

Clears every existing member first. Profile images point at
``default-profile.jpg``, which must already exist in the uploads
directory; seeding stops without changes when it is missing.

Run:  python seed_db.py
"""
import sys

from roster.core.config import settings
from roster.core.errors import UploadNotFound
from roster.core.logging import get_logger
from roster.repositories.member_store import MemberStore
from roster.repositories.upload_store import UploadStore

logger = get_logger("seed")

DEFAULT_PROFILE_IMAGE = "default-profile.jpg"

TEAM_MEMBERS = [
    {
        "name": "Ayush Panwar",
        "role": "Full Stack Developer",
        "email": "ayush.panwar@example.com",
        "phone": "+91 98765 43210",
        "bio": "Experienced full stack developer with expertise in React and Node.js. "
               "Passionate about creating scalable web applications.",
    },
    {
        "name": "Harhit Rustagi",
        "role": "Frontend Developer",
        "email": "harhit.rustagi@example.com",
        "phone": "+91 98765 43211",
        "bio": "Frontend specialist with a keen eye for design and user experience. "
               "Skilled in React and modern CSS frameworks.",
    },
    {
        "name": "Siddharth Patni",
        "role": "Backend Developer",
        "email": "siddharth.patni@example.com",
        "phone": "+91 98765 43212",
        "bio": "Backend developer focused on building robust and efficient server-side "
               "applications. Expert in Node.js and MongoDB.",
    },
]


def seed(store: MemberStore, uploads: UploadStore) -> list:
    """Replace every member with the demo team.

    Raises UploadNotFound before touching the store when the default
    profile image is missing.
    """
    uploads.ensure_directory()
    uploads.resolve_upload(DEFAULT_PROFILE_IMAGE)
    removed = store.clear()
    logger.info("Cleared existing members count=%d", removed)
    created = [store.create_member(member, DEFAULT_PROFILE_IMAGE) for member in TEAM_MEMBERS]
    logger.info("Added team members count=%d", len(created))
    return created


def main() -> int:
    uploads = UploadStore(settings.UPLOADS_DIR, max_bytes=settings.MAX_UPLOAD_BYTES)
    store = MemberStore(settings.DATABASE_URL, pool_recycle=settings.POOL_RECYCLE)
    store.connect()
    try:
        seed(store, uploads)
    except UploadNotFound:
        logger.error("Seeding aborted: %s not found in %s",
                     DEFAULT_PROFILE_IMAGE, uploads.directory)
        return 1
    finally:
        store.close()
    logger.info("Seeding completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
