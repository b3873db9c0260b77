"""Video listing and playback routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from vidhost.db.connection import Database
from vidhost.db.videos import get_media_id, get_video, list_videos
from vidhost.errors import NotFoundError
from vidhost.models.video import VideoSummary
from vidhost.app.auth import authorize
from vidhost.app.dependencies import get_db, playback_signer
from vidhost.app.models import PlaybackTokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("", response_model=list[VideoSummary])
def read_videos(
    _account_id: str = Depends(authorize),
    db: Database = Depends(get_db),
) -> list[VideoSummary]:
    """Get all videos, newest first."""
    return [video.summary() for video in list_videos(db)]


@router.get("/{video_id}", response_model=VideoSummary)
def read_video(
    video_id: str,
    _account_id: str = Depends(authorize),
    db: Database = Depends(get_db),
) -> VideoSummary:
    video = get_video(db, video_id)
    if video is None:
        raise NotFoundError(
            f"Video {video_id} not found", public_detail="Video not found"
        )
    return video.summary()


@router.get("/{video_id}/playback", response_model=PlaybackTokenResponse)
def read_playback_token(
    video_id: str,
    request: Request,
    account_id: str = Depends(authorize),
    db: Database = Depends(get_db),
) -> PlaybackTokenResponse:
    """Issue a signed playback token for one video.

    The token is scoped to the video's media id and expires one hour after
    issuance.
    """
    media_id = get_media_id(db, video_id)
    if media_id is None:
        raise NotFoundError(
            f"Video {video_id} not found", public_detail="Video not found"
        )

    signer = playback_signer(request)
    token = signer.sign(media_id, now=datetime.now(timezone.utc))
    logger.info(f"Issued playback token for video {video_id} to {account_id}")
    return PlaybackTokenResponse(token=token)
