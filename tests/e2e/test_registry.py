"""End-to-end tests for the account and video registry against Postgres."""

import psycopg
import pytest

from vidhost.db.accounts import get_account, lookup_role, record_account_created
from vidhost.db.connection import Database
from vidhost.db.videos import create_video, get_media_id, get_video, list_videos
from vidhost.errors import UpstreamError


def _count_accounts(db: Database, account_id: str) -> int:
    with db.cursor() as cursor:
        cursor.execute("SELECT COUNT(*) FROM accounts WHERE id = %s", (account_id,))
        return cursor.fetchone()[0]


@pytest.mark.e2e
def test_account_creation_is_idempotent(db: Database):
    assert record_account_created(db, "u1", "a@x.com") is True
    assert record_account_created(db, "u1", "a@x.com") is False

    assert _count_accounts(db, "u1") == 1
    account = get_account(db, "u1")
    assert account is not None
    assert account.role == "viewer"
    assert lookup_role(db, "u1") == "viewer"


@pytest.mark.e2e
def test_unknown_account(db: Database):
    assert get_account(db, "missing") is None
    assert lookup_role(db, "missing") is None


@pytest.mark.e2e
def test_role_changed_out_of_band(db: Database):
    record_account_created(db, "u1", "a@x.com")
    with db.cursor() as cursor:
        cursor.execute("UPDATE accounts SET role = 'admin' WHERE id = %s", ("u1",))

    assert lookup_role(db, "u1") == "admin"


@pytest.mark.e2e
def test_invalid_role_rejected(db: Database):
    record_account_created(db, "u1", "a@x.com")
    with pytest.raises(UpstreamError):
        with db.cursor() as cursor:
            cursor.execute("UPDATE accounts SET role = 'owner' WHERE id = %s", ("u1",))


@pytest.mark.e2e
def test_videos_newest_first(db: Database):
    record_account_created(db, "u1", "a@x.com")
    first = create_video(db, "u1", "First", "", "media-1")
    second = create_video(db, "u1", "Second", "desc", "media-2")

    videos = list_videos(db)

    assert [video.id for video in videos] == [second.id, first.id]
    assert get_media_id(db, first.id) == "media-1"
    assert get_video(db, second.id) == second
    assert get_media_id(db, "not-a-video") is None


@pytest.mark.e2e
def test_video_requires_existing_owner(db: Database):
    with pytest.raises(UpstreamError) as exc_info:
        create_video(db, "ghost", "Title", "", "media-1")

    assert isinstance(exc_info.value.__cause__, psycopg.errors.ForeignKeyViolation)
    assert list_videos(db) == []


@pytest.mark.e2e
def test_media_id_is_unique(db: Database):
    record_account_created(db, "u1", "a@x.com")
    create_video(db, "u1", "Title", "", "media-1")

    with pytest.raises(UpstreamError):
        create_video(db, "u1", "Other", "", "media-1")
