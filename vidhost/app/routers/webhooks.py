"""Identity provider webhook routes."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError as PydanticValidationError

from vidhost.db.accounts import record_account_created
from vidhost.db.connection import Database
from vidhost.errors import ConflictError, ValidationError
from vidhost.integrations.identity.webhooks import (
    WebhookVerifier,
    WebhookVerificationError,
    has_signature_headers,
)
from vidhost.app.dependencies import get_db, webhook_verifier
from vidhost.app.models import WebhookEvent, WebhookResponse, WebhookUserData

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

# `account.created` is an alias for the identity provider's `user.created`.
ACCOUNT_CREATED_EVENTS = frozenset({"user.created", "account.created"})


@router.post(
    "/identity",
    response_model=WebhookResponse,
    status_code=status.HTTP_201_CREATED,
)
async def receive_identity_webhook(
    request: Request,
    response: Response,
    verifier: WebhookVerifier = Depends(webhook_verifier),
    db: Database = Depends(get_db),
) -> WebhookResponse:
    """Replicate newly created identity provider users as local accounts.

    The signature is checked against the exact raw body. Only account creation
    events are handled; other event types are acknowledged with 200 so the
    sender does not retry them. A replayed creation event returns 409.
    """
    if not has_signature_headers(request.headers):
        raise ValidationError(
            "Webhook delivery missing signature headers",
            public_detail="Missing webhook signature headers",
        )

    payload = await request.body()
    try:
        event = WebhookEvent.model_validate(verifier.verify(payload, request.headers))
    except (WebhookVerificationError, PydanticValidationError) as e:
        logger.warning(f"Error verifying webhook: {e}")
        raise ValidationError(
            f"Webhook verification failed: {e}",
            public_detail="Could not verify webhook",
        ) from e

    if event.type not in ACCOUNT_CREATED_EVENTS:
        logger.info(f"Ignoring webhook event type: {event.type}")
        response.status_code = status.HTTP_200_OK
        return WebhookResponse(message="Event type not handled")

    try:
        user = WebhookUserData.model_validate(event.data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Malformed user data: {e}", public_detail="Invalid event data"
        ) from e

    email = user.primary_email
    if not user.id or not email:
        raise ValidationError(
            f"{event.type} event without id or email",
            public_detail="Invalid event data",
        )

    if not await asyncio.to_thread(record_account_created, db, user.id, email):
        raise ConflictError(
            f"Account {user.id} already exists",
            public_detail="User already exists",
        )

    return WebhookResponse(message="User created successfully")
