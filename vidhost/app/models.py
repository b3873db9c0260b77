from pydantic import BaseModel, ConfigDict, Field, model_validator

from vidhost.models.account import Role
from .env_loader import EnvironmentName


class UploadRequest(BaseModel):
    """Request model to reserve an upload slot for a new video."""

    name: str = ""
    title: str = ""
    description: str = ""
    size: int = Field(gt=0, description="Upload size in bytes")

    @model_validator(mode="after")
    def check_has_name(self) -> "UploadRequest":
        if not self.display_name:
            raise ValueError("Either title or name must be given")
        return self

    @property
    def display_name(self) -> str:
        """Name stored with the video at the platform."""
        return self.title or self.name


class UploadResponse(BaseModel):
    """Response model for the upload endpoint.

    Serialized as `uploadURL`, the key tus clients in the dashboard expect.
    """

    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(alias="uploadURL")


class RoleResponse(BaseModel):
    role: Role


class PlaybackTokenResponse(BaseModel):
    """A signed playback token for one video."""

    token: str


class EmailAddress(BaseModel):
    email_address: str


class WebhookUserData(BaseModel):
    id: str = ""
    email_addresses: list[EmailAddress] = []

    @property
    def primary_email(self) -> str | None:
        if not self.email_addresses:
            return None
        return self.email_addresses[0].email_address or None


class WebhookEvent(BaseModel):
    """An identity provider webhook event envelope."""

    type: str
    data: dict = {}


class WebhookResponse(BaseModel):
    message: str


class EnvironmentResponse(BaseModel):
    """Response model for the environment endpoint."""

    environment: EnvironmentName
