"""Error taxonomy shared by the API surface.

Every error carries the HTTP status it maps to and a generic public message.
The exception handler in `vidhost.app.app` logs the internal message and only
returns `public_detail` to the caller.
"""

from fastapi import status


class VidhostError(Exception):
    """Base class for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_detail: str = "Internal Server Error"

    def __init__(self, message: str = "", public_detail: str | None = None):
        super().__init__(message or self.public_detail)
        if public_detail is not None:
            self.public_detail = public_detail


class ConfigurationError(VidhostError):
    """A required secret or credential is not configured."""


class ValidationError(VidhostError):
    status_code = status.HTTP_400_BAD_REQUEST
    public_detail = "Invalid request"


class AuthenticationError(VidhostError):
    """Missing, malformed or unverifiable identity assertion."""

    status_code = status.HTTP_401_UNAUTHORIZED
    public_detail = "Unauthorized"


class AuthorizationError(VidhostError):
    """Valid identity whose role does not allow the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    public_detail = "Forbidden"


class NotFoundError(VidhostError):
    status_code = status.HTTP_404_NOT_FOUND
    public_detail = "Not found"


class ConflictError(VidhostError):
    status_code = status.HTTP_409_CONFLICT
    public_detail = "Already exists"


class UpstreamError(VidhostError):
    """The video platform or the database failed."""


class TokenSigningError(VidhostError):
    """Base class for playback token signing failures."""


class KeyImportError(TokenSigningError):
    """The signing key material could not be imported as an RS256 private key."""


class SigningError(TokenSigningError):
    """The signing operation itself rejected the input."""
