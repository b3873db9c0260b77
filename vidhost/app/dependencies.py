import logging

from fastapi import Request

from vidhost.db.connection import Database
from vidhost.integrations.identity.webhooks import WebhookVerifier
from vidhost.integrations.stream.client import StreamClient
from vidhost.integrations.stream.playback import PlaybackTokenSigner
from vidhost.errors import ConfigurationError
from .config import AppConfig

logger = logging.getLogger(__name__)


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_db(request: Request) -> Database:
    return request.app.state.db


def stream_client(request: Request) -> StreamClient:
    """Build a streaming platform client from the configured credentials."""
    config = get_config(request)
    return StreamClient(
        account_id=config.require("stream_account_id"),
        api_token=config.require("stream_api_token"),
    )


def playback_signer(request: Request) -> PlaybackTokenSigner:
    """Get the playback token signer built at startup."""
    signer = request.app.state.signer
    if signer is None:
        raise ConfigurationError(
            "Playback signing requires STREAM_KEY_ID and STREAM_SIGNING_KEY"
        )
    return signer


def webhook_verifier(request: Request) -> WebhookVerifier:
    config = get_config(request)
    secret = config.require("webhook_secret")
    try:
        return WebhookVerifier(secret)
    except ValueError as e:
        raise ConfigurationError(f"Webhook secret is malformed: {e}") from e
