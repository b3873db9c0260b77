"""Signed playback tokens for videos that require signed URLs.

A playback token is a compact RS256 JWS whose subject is the platform media
id. The platform verifies it with the public half of the signing key
registered under `kid`.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from jwt.algorithms import RSAAlgorithm
from jwt.exceptions import InvalidKeyError
from jwt.utils import base64url_encode

from vidhost.errors import KeyImportError, SigningError

logger = logging.getLogger(__name__)

TOKEN_LIFETIME_SECONDS = 60 * 60
ALLOW_ANY_ACCESS_RULES: list[dict[str, str]] = [{"type": "any", "action": "allow"}]


def _encode_segment(obj: dict[str, Any]) -> str:
    """JSON-encode compactly (keys in insertion order) and base64url without padding."""
    raw = json.dumps(obj, separators=(",", ":")).encode("utf-8")
    return base64url_encode(raw).decode("ascii")


def _to_epoch_seconds(now: int | float | datetime) -> int:
    if isinstance(now, datetime):
        if now.tzinfo is None:
            raise ValueError("now must be timezone-aware")
        return int(now.timestamp())
    return int(now)


def load_private_key(signing_key: str) -> rsa.RSAPrivateKey:
    """Import RS256 private key material.

    Accepts a PEM private key, a JWK as JSON, or a JWK as base64-encoded
    JSON (the form the streaming platform returns when a signing key is
    created).

    Raises:
        KeyImportError: If the material is not a usable RSA private key.
    """
    material = signing_key.strip() if signing_key else ""
    if not material:
        raise KeyImportError("Signing key is empty")

    try:
        if material.startswith("-----BEGIN"):
            key = serialization.load_pem_private_key(
                material.encode("utf-8"), password=None
            )
        else:
            key = RSAAlgorithm.from_jwk(_parse_jwk(material))
    except (
        InvalidKeyError,
        UnsupportedAlgorithm,
        ValueError,
        TypeError,
        KeyError,
    ) as e:
        # Never include the material itself in the message.
        raise KeyImportError(
            f"Could not import signing key: exception_type={type(e).__name__}"
        ) from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyImportError("Signing key is not an RSA private key")
    return key


def _parse_jwk(material: str) -> dict[str, Any]:
    if not material.startswith("{"):
        try:
            material = base64.b64decode(material, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError("JWK is neither JSON nor base64-encoded JSON") from e
    jwk = json.loads(material)
    if not isinstance(jwk, dict):
        raise ValueError("JWK must be a JSON object")
    return jwk


def sign(
    subject: str,
    key_id: str,
    signing_key: str | rsa.RSAPrivateKey,
    now: int | float | datetime,
    lifetime_seconds: int = TOKEN_LIFETIME_SECONDS,
) -> str:
    """Create a signed playback token scoped to one media id.

    Args:
        subject: The platform media id the token grants playback for.
        key_id: Id of the signing key registered at the platform.
        signing_key: Private key material (see `load_private_key`) or an
            already imported RSA private key.
        now: Issuance time, epoch seconds or a timezone-aware datetime.
        lifetime_seconds: Seconds until expiry, one hour by default.

    Returns:
        The compact `header.payload.signature` token.

    Raises:
        KeyImportError: If the key material cannot be imported.
        SigningError: If the signing operation fails.
    """
    if isinstance(signing_key, rsa.RSAPrivateKey):
        private_key = signing_key
    else:
        private_key = load_private_key(signing_key)

    header = {"alg": "RS256", "kid": key_id}
    payload = {
        "sub": subject,
        "kid": key_id,
        "exp": _to_epoch_seconds(now) + lifetime_seconds,
        "accessRules": ALLOW_ANY_ACCESS_RULES,
    }
    signing_input = f"{_encode_segment(header)}.{_encode_segment(payload)}"

    try:
        signature = private_key.sign(
            signing_input.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256()
        )
    except (UnsupportedAlgorithm, ValueError, TypeError) as e:
        raise SigningError(
            f"RS256 signing failed: exception_type={type(e).__name__}, error={e}"
        ) from e

    return f"{signing_input}.{base64url_encode(signature).decode('ascii')}"


@dataclass
class PlaybackTokenSigner:
    """Signs playback tokens with one configured platform signing key.

    The key is imported once, on first use.
    """

    key_id: str
    signing_key: str = field(repr=False)
    lifetime_seconds: int = TOKEN_LIFETIME_SECONDS
    _private_key: rsa.RSAPrivateKey | None = field(
        default=None, init=False, repr=False
    )

    def sign(self, media_id: str, now: int | float | datetime) -> str:
        if self._private_key is None:
            self._private_key = load_private_key(self.signing_key)
        token = sign(
            media_id,
            self.key_id,
            self._private_key,
            now,
            lifetime_seconds=self.lifetime_seconds,
        )
        logger.debug(f"Issued playback token for media id {media_id}")
        return token
