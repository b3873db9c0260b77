"""Database operations for accounts."""

import logging
from datetime import datetime, timezone
from typing import Optional

from vidhost.models.account import Account, Role
from .connection import Database

logger = logging.getLogger(__name__)


def record_account_created(db: Database, account_id: str, email: str) -> bool:
    """Insert a new account with the 'viewer' role.

    Duplicate ids are left untouched: the identity provider may deliver the
    same "user created" event more than once.

    Args:
        db: Database handle.
        account_id: The identity provider's user id.
        email: The account's primary email address.

    Returns:
        True if the account was created, False if it already existed.
    """
    with db.cursor() as cursor:
        cursor.execute(
            """
            INSERT INTO accounts (id, email, role, created_at)
            VALUES (%s, %s, 'viewer', %s)
            ON CONFLICT (id) DO NOTHING
            RETURNING id
            """,
            (account_id, email, datetime.now(timezone.utc)),
        )
        row = cursor.fetchone()

    if row is None:
        logger.info(f"Account {account_id} already exists, skipping insert")
        return False
    logger.info(f"Created account {account_id}")
    return True


def get_account(db: Database, account_id: str) -> Optional[Account]:
    with db.cursor() as cursor:
        cursor.execute(
            """
            SELECT id, email, role, created_at
            FROM accounts
            WHERE id = %s
            """,
            (account_id,),
        )
        row = cursor.fetchone()
        return _row_to_account(row) if row else None


def lookup_role(db: Database, account_id: str) -> Optional[Role]:
    """Get an account's role, or None if the account is not replicated yet."""
    with db.cursor() as cursor:
        cursor.execute(
            "SELECT role FROM accounts WHERE id = %s",
            (account_id,),
        )
        row = cursor.fetchone()
        return row[0] if row else None


def _row_to_account(row) -> Account:
    """Convert a database row to an Account object."""
    id, email, role, created_at = row
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Account(id=id, email=email, role=role, created_at=created_at)
