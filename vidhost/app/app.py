"""FastAPI application setup for the video hosting API.

Exposes routes for the identity provider webhook, admin upload slots, role
lookup, video listing and signed playback tokens, all under `/api`.
Collaborators (config, database handle, identity verifier, playback signer)
are built once in `create_app` and passed to handlers through `app.state`.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vidhost.db.connection import Database
from vidhost.errors import AuthenticationError, VidhostError
from vidhost.integrations.stream.playback import PlaybackTokenSigner
from .auth import IdentityVerifier, authorize
from .config import AppConfig
from .models import EnvironmentResponse
from .routers import upload_router, user_router, video_router, webhook_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(log_level: Optional[str]) -> None:
    """Configure basic logging, and the API's own level if one is given."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(filename)s:%(lineno)d",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if log_level is None:
        return
    try:
        level = LOG_LEVELS[log_level.upper()]
    except KeyError:
        raise ValueError(f"Invalid log level: {log_level}")
    logging.getLogger("vidhost").setLevel(level)


async def handle_vidhost_error(request: Request, exc: VidhostError) -> JSONResponse:
    """Map application errors to their status with a generic message.

    The internal message is logged; only `public_detail` reaches the caller.
    """
    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
    else:
        logger.info(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}"
        )

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.public_detail},
        headers=headers,
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(f"Malformed request on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": "Invalid request"})


def create_app(
    config: AppConfig,
    verifier: Optional[IdentityVerifier] = None,
) -> FastAPI:
    """Build the FastAPI application for one configuration.

    Args:
        config: Application settings.
        verifier: Identity verifier; built from `config` when not given.
    """
    configure_logging(config.log_level)

    app = FastAPI(title="vidhost")
    app.state.config = config
    app.state.db = Database(config.database_url)
    app.state.verifier = verifier or IdentityVerifier(
        config.identity_provider_url,
        audience=config.jwt_audience,
        authorized_parties=config.authorized_parties,
    )
    app.state.signer = None
    if config.stream_key_id and config.stream_signing_key:
        app.state.signer = PlaybackTokenSigner(
            key_id=config.stream_key_id,
            signing_key=config.stream_signing_key,
        )

    for router in (webhook_router, upload_router, user_router, video_router):
        app.include_router(router, prefix=API_PREFIX)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(VidhostError, handle_vidhost_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        handle_request_validation_error,  # type: ignore[arg-type]
    )

    @app.get("/health")
    @app.options("/health")
    def health_check(response: Response) -> dict[str, str]:
        """Health check endpoint that returns 200 status with CORS from anywhere."""
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "*"
        return {"status": "healthy"}

    @app.get("/environment", response_model=EnvironmentResponse)
    def get_environment(_account_id: str = Depends(authorize)) -> EnvironmentResponse:
        """Get the current environment configuration."""
        return EnvironmentResponse(environment=config.environment)

    return app
