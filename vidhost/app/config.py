"""Application configuration.

Built once at startup and passed to the app factory; handlers read it from
`request.app.state.config` through dependencies, never from module globals.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from vidhost.errors import ConfigurationError
from .env_loader import EnvironmentName, get_current_environment

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
)


def _split_list(value: Optional[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class AppConfig:
    """Settings for one running instance of the API.

    Secrets that only some routes need are optional here; the routes that
    need them raise `ConfigurationError` when they are missing.
    """

    database_url: str
    identity_provider_url: str
    environment: EnvironmentName = "dev"
    jwt_audience: Optional[str] = None
    authorized_parties: tuple[str, ...] = ()
    webhook_secret: Optional[str] = field(default=None, repr=False)
    stream_account_id: Optional[str] = None
    stream_api_token: Optional[str] = field(default=None, repr=False)
    stream_key_id: Optional[str] = None
    stream_signing_key: Optional[str] = field(default=None, repr=False)
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Read configuration from environment variables.

        DATABASE_URL and IDENTITY_PROVIDER_URL are required (validated at
        startup by `env_loader`).
        """
        return cls(
            database_url=os.environ["DATABASE_URL"],
            identity_provider_url=os.environ["IDENTITY_PROVIDER_URL"].rstrip("/"),
            environment=get_current_environment(),
            jwt_audience=os.getenv("JWT_AUDIENCE") or None,
            authorized_parties=_split_list(os.getenv("AUTHORIZED_PARTIES")),
            webhook_secret=os.getenv("IDENTITY_WEBHOOK_SECRET") or None,
            stream_account_id=os.getenv("STREAM_ACCOUNT_ID") or None,
            stream_api_token=os.getenv("STREAM_API_TOKEN") or None,
            stream_key_id=os.getenv("STREAM_KEY_ID") or None,
            stream_signing_key=os.getenv("STREAM_SIGNING_KEY") or None,
            cors_origins=_split_list(os.getenv("CORS_ORIGINS"))
            or DEFAULT_CORS_ORIGINS,
            log_level=os.getenv("LOG_LEVEL") or None,
        )

    def require(self, name: str) -> str:
        """Get an optional setting that the current operation needs.

        Raises:
            ConfigurationError: If the setting is not configured.
        """
        value = getattr(self, name)
        if not value:
            raise ConfigurationError(f"{name} is not configured")
        return value
