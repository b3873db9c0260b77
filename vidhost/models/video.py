from datetime import datetime

from pydantic import BaseModel


class Video(BaseModel):
    """An uploaded video's metadata bound to its streaming platform media id."""

    id: str
    title: str
    description: str
    created_at: datetime
    owner_id: str
    external_media_id: str

    def summary(self) -> "VideoSummary":
        return VideoSummary(
            id=self.id,
            title=self.title,
            description=self.description,
            external_media_id=self.external_media_id,
        )


class VideoSummary(BaseModel):
    """Public view of a video, as returned by the listing routes."""

    id: str
    title: str
    description: str
    external_media_id: str
