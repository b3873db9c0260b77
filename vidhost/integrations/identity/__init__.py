"""Identity provider integration: session verification and signed webhooks."""

from .webhooks import WebhookVerifier, WebhookVerificationError, has_signature_headers

__all__ = [
    "WebhookVerifier",
    "WebhookVerificationError",
    "has_signature_headers",
]
