"""Client for the video streaming platform's direct creator upload API."""

import base64
from dataclasses import dataclass, field
import logging
from typing import Optional

import httpx

from vidhost.errors import UpstreamError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.cloudflare.com/client/v4"
TUS_VERSION = "1.0.0"


@dataclass(frozen=True)
class UploadSlot:
    """A resumable upload location reserved at the platform."""

    upload_url: str
    media_id: str


def encode_upload_metadata(name: str) -> str:
    """Build the tus `Upload-Metadata` header value.

    The name is base64 encoded (UTF-8) and the `requiresignedurls` flag is
    always set, so the uploaded video can only be played with a signed token.
    """
    encoded_name = base64.b64encode(name.encode("utf-8")).decode("ascii")
    return f"name {encoded_name}, requiresignedurls"


@dataclass
class StreamClient:
    """Client for creating upload slots on the streaming platform.

    Authenticates with an account-scoped API token.
    """

    account_id: str
    api_token: str = field(repr=False)
    base_url: str = BASE_URL
    timeout: float = 10
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_token}"}

    @property
    def direct_upload_url(self) -> str:
        return f"{self.base_url}/accounts/{self.account_id}/stream?direct_user=true"

    async def create_upload_slot(self, name: str, size_bytes: int) -> UploadSlot:
        """Reserve a tus upload slot for a video of `size_bytes` bytes.

        Args:
            name: Human readable name stored with the video at the platform.
            size_bytes: Total size of the upload.

        Returns:
            The upload URL and the media id the platform assigned.

        Raises:
            UpstreamError: If the platform rejects the request or omits the
                location or media id headers.
        """
        headers = {
            **self._auth_headers(),
            "Tus-Resumable": TUS_VERSION,
            "Upload-Length": str(size_bytes),
            "Upload-Metadata": encode_upload_metadata(name),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(self.direct_upload_url, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"Upload slot request failed: exception_type={type(e).__name__}, error={e}"
            ) from e

        if not response.is_success:
            logger.error(
                f"Streaming platform error creating upload slot: "
                f"{response.status_code} {response.text}"
            )
            raise UpstreamError(
                f"Upload slot request returned status {response.status_code}",
                public_detail="Failed to create upload URL",
            )

        upload_url = response.headers.get("Location")
        media_id = response.headers.get("Stream-Media-Id")
        if not upload_url or not media_id:
            raise UpstreamError(
                "Upload slot response missing Location or Stream-Media-Id header",
                public_detail="Failed to get upload URL from streaming platform",
            )

        logger.info(f"Reserved upload slot for media id {media_id}")
        return UploadSlot(upload_url=upload_url, media_id=media_id)
