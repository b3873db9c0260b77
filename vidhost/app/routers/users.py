from fastapi import APIRouter, Depends

from vidhost.db.accounts import lookup_role
from vidhost.db.connection import Database
from vidhost.errors import NotFoundError
from vidhost.app.auth import authorize
from vidhost.app.dependencies import get_db
from vidhost.app.models import RoleResponse

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/role", response_model=RoleResponse)
def read_role(
    account_id: str = Depends(authorize),
    db: Database = Depends(get_db),
) -> RoleResponse:
    """Get the caller's role.

    Returns 404 while the identity provider's webhook has not created the
    local account yet.
    """
    role = lookup_role(db, account_id)
    if role is None:
        raise NotFoundError(
            f"Account {account_id} not replicated locally",
            public_detail="User not found in database",
        )
    return RoleResponse(role=role)
