"""Database operations for videos."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from vidhost.models.video import Video
from .connection import Database

logger = logging.getLogger(__name__)

_VIDEO_COLUMNS = "id, title, description, created_at, owner_id, external_media_id"


def create_video(
    db: Database,
    owner_id: str,
    title: str,
    description: str,
    external_media_id: str,
) -> Video:
    """Insert a video row bound to a platform media id.

    The media id must already be known: a row is never written without one.

    Returns:
        The created Video.
    """
    video_id = str(uuid.uuid4())
    with db.cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO videos (id, title, description, created_at, owner_id, external_media_id)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {_VIDEO_COLUMNS}
            """,
            (
                video_id,
                title,
                description,
                datetime.now(timezone.utc),
                owner_id,
                external_media_id,
            ),
        )
        row = cursor.fetchone()
    video = _row_to_video(row)
    logger.info(
        f"Created video id={video.id} owner={owner_id} media_id={external_media_id}"
    )
    return video


def list_videos(db: Database) -> list[Video]:
    """Get all videos, newest first."""
    with db.cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_VIDEO_COLUMNS}
            FROM videos
            ORDER BY created_at DESC
            """
        )
        rows = cursor.fetchall()
        return [_row_to_video(row) for row in rows]


def get_video(db: Database, video_id: str) -> Optional[Video]:
    with db.cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_VIDEO_COLUMNS}
            FROM videos
            WHERE id = %s
            """,
            (video_id,),
        )
        row = cursor.fetchone()
        return _row_to_video(row) if row else None


def get_media_id(db: Database, video_id: str) -> Optional[str]:
    """Get the platform media id for a video, or None if the video is unknown."""
    with db.cursor() as cursor:
        cursor.execute(
            "SELECT external_media_id FROM videos WHERE id = %s",
            (video_id,),
        )
        row = cursor.fetchone()
        return row[0] if row else None


def _row_to_video(row) -> Video:
    id, title, description, created_at, owner_id, external_media_id = row
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Video(
        id=str(id),
        title=title,
        description=description,
        created_at=created_at,
        owner_id=owner_id,
        external_media_id=external_media_id,
    )
