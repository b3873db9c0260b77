"""Session token verification and role-based authorization."""

import logging
from typing import Any, Callable, Dict, Optional

import jwt
from jwt import PyJWKClient
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from vidhost.db.accounts import get_account
from vidhost.db.connection import Database
from vidhost.errors import AuthenticationError, AuthorizationError
from vidhost.models.account import Account, Role
from .dependencies import get_db

logger = logging.getLogger(__name__)
oauth_scheme = HTTPBearer(auto_error=False)

JWKS_CACHE_DURATION = 3600  # 1 hour
SESSION_TOKEN_ALGORITHMS = ["RS256"]


class IdentityVerifier:
    """Validates identity provider session tokens locally using its JWKS.

    One instance is created at startup and shared through `app.state`; the
    underlying JWKS client caches signing keys for `JWKS_CACHE_DURATION`.
    """

    def __init__(
        self,
        provider_url: str,
        audience: Optional[str] = None,
        authorized_parties: tuple[str, ...] = (),
        jwks_client: Optional[PyJWKClient] = None,
    ):
        self.provider_url = provider_url.rstrip("/")
        self.audience = audience
        self.authorized_parties = authorized_parties
        if jwks_client is None:
            jwks_url = f"{self.provider_url}/.well-known/jwks.json"
            jwks_client = PyJWKClient(
                jwks_url, cache_keys=True, lifespan=JWKS_CACHE_DURATION
            )
            logger.info(f"Created JWKS client for {jwks_url}")
        self.jwks_client = jwks_client

    def validate_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Validate a session token.

        Returns decoded claims if valid, None if invalid.
        """
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            decoded = jwt.decode(
                token,
                signing_key.key,
                algorithms=SESSION_TOKEN_ALGORITHMS,
                issuer=self.provider_url,
                audience=self.audience,
                options={
                    "require": ["exp", "iss", "sub"],
                    "verify_aud": self.audience is not None,
                },
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Session token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid session token: {e}")
            return None
        except Exception as e:
            logger.error(f"Session token validation error: {e}")
            return None

        azp = decoded.get("azp")
        if self.authorized_parties and azp not in self.authorized_parties:
            logger.warning(f"Session token issued for unauthorized party: {azp}")
            return None
        return decoded


def get_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.verifier


def authorize(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth_scheme),
    verifier: IdentityVerifier = Depends(get_verifier),
) -> str:
    """FastAPI dependency verifying the caller's bearer session token.

    Returns the account id (the token's `sub` claim).

    Raises:
        AuthenticationError: If the token is missing, invalid, or has no subject.
    """
    if not credentials:
        raise AuthenticationError("Missing authorization header")

    claims = verifier.validate_token(credentials.credentials)
    if not claims:
        raise AuthenticationError("Invalid or expired token")

    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub.strip():
        raise AuthenticationError("Token missing subject claim")

    return sub


def get_current_account(
    account_id: str = Depends(authorize),
    db: Database = Depends(get_db),
) -> Account:
    """FastAPI dependency resolving the caller's local account.

    An account that exists at the identity provider but has not been
    replicated by the webhook yet is treated as unauthenticated.

    Raises:
        AuthenticationError: If no local account exists for the caller.
    """
    account = get_account(db, account_id)
    if account is None:
        raise AuthenticationError(f"Account {account_id} not replicated locally")
    return account


def require_role(
    required_role: Role,
) -> Callable[..., Account]:
    """Build a FastAPI dependency requiring the caller to have `required_role`."""

    def dependency(account: Account = Depends(get_current_account)) -> Account:
        if account.role != required_role:
            raise AuthorizationError(
                f"Account {account.id} has role {account.role}, needs {required_role}",
                public_detail=f"Forbidden: {required_role} role required",
            )
        return account

    return dependency


require_admin = require_role("admin")
