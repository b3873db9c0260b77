"""Session authentication and role-based authorization."""

from .oauth import (
    IdentityVerifier,
    authorize,
    get_current_account,
    require_role,
    require_admin,
)

# Export for use in routers
__all__ = [
    "IdentityVerifier",
    "authorize",
    "get_current_account",
    "require_role",
    "require_admin",
]
