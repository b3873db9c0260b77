"""Upload slot routes (admin only)."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from vidhost.db.connection import Database
from vidhost.db.videos import create_video
from vidhost.errors import UpstreamError
from vidhost.integrations.stream.client import StreamClient
from vidhost.models.account import Account
from vidhost.app.auth import require_admin
from vidhost.app.dependencies import get_db, stream_client
from vidhost.app.models import UploadRequest, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=UploadResponse)
async def create_upload(
    request: UploadRequest,
    account: Account = Depends(require_admin),
    client: StreamClient = Depends(stream_client),
    db: Database = Depends(get_db),
) -> UploadResponse:
    """Reserve a resumable upload slot at the streaming platform.

    Requires authentication with admin role. The video row is written only
    after the platform returns its media id.

    The platform call and the database write are not atomic: if the write
    fails, the slot stays reserved at the platform with no local row. The
    orphaned media id is logged for manual cleanup.
    """
    slot = await client.create_upload_slot(request.display_name, request.size)

    try:
        await asyncio.to_thread(
            create_video,
            db,
            owner_id=account.id,
            title=request.title,
            description=request.description,
            external_media_id=slot.media_id,
        )
    except UpstreamError:
        logger.error(
            f"Orphaned upload slot: media id {slot.media_id} reserved for "
            f"account {account.id} but the video row could not be written"
        )
        raise

    return UploadResponse(upload_url=slot.upload_url)
