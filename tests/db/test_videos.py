"""Tests for video database operations."""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from vidhost.db.videos import create_video, get_media_id, get_video, list_videos
from vidhost.models.video import Video, VideoSummary

CREATED_AT = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def _row(video_id: str = "v1", created_at: datetime = CREATED_AT) -> tuple:
    return (video_id, "Title", "Description", created_at, "u1", "media-1")


@pytest.fixture
def mock_cursor() -> MagicMock:
    return MagicMock()


@pytest.fixture
def mock_db(mock_cursor: MagicMock) -> MagicMock:
    db = MagicMock()
    db.cursor.return_value.__enter__.return_value = mock_cursor
    return db


class TestCreateVideo:
    """Test create_video function."""

    def test_inserts_row_with_media_id(self, mock_db, mock_cursor):
        mock_cursor.fetchone.side_effect = lambda: _row(
            mock_cursor.execute.call_args[0][1][0]
        )

        video = create_video(
            mock_db,
            owner_id="u1",
            title="Title",
            description="Description",
            external_media_id="media-1",
        )

        sql, params = mock_cursor.execute.call_args[0]
        assert "INSERT INTO videos" in sql
        generated_id, title, description, created_at, owner_id, media_id = params
        uuid.UUID(generated_id)  # Raises if not a UUID
        assert (title, description, owner_id, media_id) == (
            "Title",
            "Description",
            "u1",
            "media-1",
        )
        assert created_at.tzinfo is not None
        assert video.id == generated_id
        assert video.external_media_id == "media-1"

    def test_generates_distinct_ids(self, mock_db, mock_cursor):
        mock_cursor.fetchone.side_effect = lambda: _row(
            mock_cursor.execute.call_args[0][1][0]
        )

        first = create_video(mock_db, "u1", "Title", "Description", "media-1")
        second = create_video(mock_db, "u1", "Title", "Description", "media-2")

        assert first.id != second.id


class TestListVideos:
    """Test list_videos function."""

    def test_orders_newest_first(self, mock_db, mock_cursor):
        mock_cursor.fetchall.return_value = [_row("v2"), _row("v1")]

        videos = list_videos(mock_db)

        sql = mock_cursor.execute.call_args[0][0]
        assert "ORDER BY created_at DESC" in sql
        assert [video.id for video in videos] == ["v2", "v1"]

    def test_empty(self, mock_db, mock_cursor):
        mock_cursor.fetchall.return_value = []
        assert list_videos(mock_db) == []


class TestGetVideo:
    """Test get_video function."""

    def test_found(self, mock_db, mock_cursor):
        mock_cursor.fetchone.return_value = _row()

        video = get_video(mock_db, "v1")

        assert video == Video(
            id="v1",
            title="Title",
            description="Description",
            created_at=CREATED_AT,
            owner_id="u1",
            external_media_id="media-1",
        )
        assert video.summary() == VideoSummary(
            id="v1",
            title="Title",
            description="Description",
            external_media_id="media-1",
        )

    def test_uuid_id_is_stringified(self, mock_db, mock_cursor):
        video_id = uuid.uuid4()
        mock_cursor.fetchone.return_value = _row(video_id)  # type: ignore[arg-type]

        video = get_video(mock_db, str(video_id))

        assert video is not None
        assert video.id == str(video_id)

    def test_naive_timestamp_gets_utc(self, mock_db, mock_cursor):
        mock_cursor.fetchone.return_value = _row(
            created_at=datetime(2024, 1, 15, 10, 0, 0)
        )

        video = get_video(mock_db, "v1")

        assert video is not None
        assert video.created_at.tzinfo == timezone.utc

    def test_not_found(self, mock_db, mock_cursor):
        mock_cursor.fetchone.return_value = None
        assert get_video(mock_db, "missing") is None


class TestGetMediaId:
    """Test get_media_id function."""

    def test_found(self, mock_db, mock_cursor):
        mock_cursor.fetchone.return_value = ("media-1",)

        assert get_media_id(mock_db, "v1") == "media-1"
        sql, params = mock_cursor.execute.call_args[0]
        assert "SELECT external_media_id FROM videos" in sql
        assert params == ("v1",)

    def test_not_found(self, mock_db, mock_cursor):
        mock_cursor.fetchone.return_value = None
        assert get_media_id(mock_db, "missing") is None
