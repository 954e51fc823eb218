"""Who is calling, and may they touch this resource.

Identity is issued upstream: an authenticating gateway validates the caller's
token and forwards the result as ``X-User-Id`` and ``X-User-Role`` headers.
This module only reads that result and enforces ownership and privilege.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException

from storefront.errors import AccessDenied

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class User:
    """The authenticated caller."""

    id: str
    is_admin: bool = False


def is_admin(user: User | None) -> bool:
    return user is not None and user.is_admin


def current_user(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> User | None:
    """Resolve the caller from the gateway headers, or None if anonymous."""
    if not x_user_id:
        return None
    return User(id=x_user_id, is_admin=(x_user_role or "").strip().lower() == ADMIN_ROLE)


def require_user(user: Annotated[User | None, Depends(current_user)]) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def require_admin(user: Annotated[User, Depends(require_user)]) -> User:
    if not is_admin(user):
        raise AccessDenied("Admin access required")
    return user


def ensure_owner_or_admin(user: User, owner_id, resource: str) -> None:
    """Raise ``AccessDenied`` unless ``user`` owns the resource or is an admin."""
    if is_admin(user) or str(owner_id) == str(user.id):
        return
    raise AccessDenied(f"You are not authorized to access {resource}")
