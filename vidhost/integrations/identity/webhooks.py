"""Signature verification for identity provider webhooks.

The identity provider delivers webhooks through svix: each delivery carries
`svix-id`, `svix-timestamp` and `svix-signature` headers, and the signature is
an HMAC-SHA256 over `"{id}.{timestamp}.{body}"` keyed with the base64 secret
that follows the `whsec_` prefix.
"""

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any, Mapping, Optional

SECRET_PREFIX = "whsec_"
SIGNATURE_VERSION = "v1"
DEFAULT_TOLERANCE_SECONDS = 5 * 60

WEBHOOK_ID_HEADER = "svix-id"
WEBHOOK_TIMESTAMP_HEADER = "svix-timestamp"
WEBHOOK_SIGNATURE_HEADER = "svix-signature"


class WebhookVerificationError(Exception):
    """Raised when a webhook delivery cannot be verified."""


class WebhookVerifier:
    """Verifies signed webhook deliveries against a shared secret."""

    def __init__(self, secret: str, tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS):
        """Initialize the verifier.

        Args:
            secret: Shared signing secret, with or without the `whsec_` prefix.
            tolerance_seconds: Maximum clock difference accepted for the timestamp.
        """
        if secret.startswith(SECRET_PREFIX):
            secret = secret[len(SECRET_PREFIX) :]
        try:
            self._key = base64.b64decode(secret, validate=True)
        except binascii.Error as e:
            raise ValueError("Webhook secret is not valid base64") from e
        self.tolerance_seconds = tolerance_seconds

    def sign(self, msg_id: str, timestamp: int, payload: bytes) -> str:
        """Compute the `v1,<signature>` value for a delivery."""
        to_sign = f"{msg_id}.{timestamp}.".encode("utf-8") + payload
        digest = hmac.new(self._key, to_sign, hashlib.sha256).digest()
        return f"{SIGNATURE_VERSION},{base64.b64encode(digest).decode('ascii')}"

    def verify(
        self,
        payload: bytes,
        headers: Mapping[str, str],
        now: Optional[float] = None,
    ) -> dict[str, Any]:
        """Verify a delivery and return the decoded JSON event.

        Args:
            payload: The exact raw request body.
            headers: Request headers (lower-case names).
            now: Current epoch time, defaults to `time.time()`.

        Raises:
            WebhookVerificationError: If headers are missing, the timestamp is
                outside the tolerance, no signature matches, or the body is not
                a JSON object.
        """
        msg_id = headers.get(WEBHOOK_ID_HEADER)
        timestamp = headers.get(WEBHOOK_TIMESTAMP_HEADER)
        signature_header = headers.get(WEBHOOK_SIGNATURE_HEADER)
        if not msg_id or not timestamp or not signature_header:
            raise WebhookVerificationError("Missing required headers")

        sent_at = self._validate_timestamp(timestamp, now)
        expected = self.sign(msg_id, sent_at, payload).split(",", 1)[1]

        for versioned in signature_header.split(" "):
            version, _, signature = versioned.partition(",")
            if version != SIGNATURE_VERSION:
                continue
            if hmac.compare_digest(expected, signature):
                break
        else:
            raise WebhookVerificationError("No matching signature found")

        try:
            event = json.loads(payload)
        except (ValueError, UnicodeDecodeError) as e:
            raise WebhookVerificationError("Payload is not valid JSON") from e
        if not isinstance(event, dict):
            raise WebhookVerificationError("Payload is not a JSON object")
        return event

    def _validate_timestamp(self, timestamp: str, now: Optional[float]) -> int:
        try:
            sent_at = int(timestamp)
        except ValueError as e:
            raise WebhookVerificationError("Invalid timestamp header") from e

        current_time = time.time() if now is None else now
        if abs(current_time - sent_at) > self.tolerance_seconds:
            raise WebhookVerificationError("Message timestamp outside tolerance")
        return sent_at


def has_signature_headers(headers: Mapping[str, str]) -> bool:
    return all(
        headers.get(name)
        for name in (
            WEBHOOK_ID_HEADER,
            WEBHOOK_TIMESTAMP_HEADER,
            WEBHOOK_SIGNATURE_HEADER,
        )
    )
