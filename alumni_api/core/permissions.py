"""
Ownership-based authorization.

Admins may act on anything. Everyone else may only act on resources owned
by their own user account; ``owner_user_id`` is the user id the resource
resolves to (the alumni's ``user_id`` for alumni-scoped data, the uploader
for files). ``None`` means the resource has no resolvable owner.
"""

from enum import Enum
from typing import Optional

from alumni_api.core.errors import ForbiddenError
from alumni_api.schemas.schemas import CurrentUser


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def authorize(actor: CurrentUser, owner_user_id: Optional[str]) -> Decision:
    if actor.is_admin:
        return Decision.ALLOW
    if owner_user_id is not None and str(owner_user_id) == actor.user_id:
        return Decision.ALLOW
    return Decision.DENY


def ensure_allowed(actor: CurrentUser, owner_user_id: Optional[str], message: str = None) -> None:
    if authorize(actor, owner_user_id) is Decision.DENY:
        raise ForbiddenError(message)
