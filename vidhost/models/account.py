"""Account model mirrored from the identity provider."""

from __future__ import annotations
from datetime import datetime
from typing import Literal

from pydantic import BaseModel


Role = Literal["viewer", "admin"]


class Account(BaseModel):
    """Application account with role-based access control.

    Accounts are created by the identity provider's "user created" webhook.
    The id is the identity provider's user id and is never generated here.
    Roles are changed out-of-band, directly in the database.
    """

    id: str
    email: str
    role: Role
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        """Check if account has admin role."""
        return self.role == "admin"
