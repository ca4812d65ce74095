"""Ownership authorizer.

Learn: Single-owner access control. A principal may touch a record only
if the record's owner id equals the principal's user id. Ids are
normalized first, so a UUID object, its canonical string and an
upper-cased variant all compare equal.

Callers must look the record up before calling this: "does not exist"
(404) is decided first, "exists but not yours" (403) second.
"""

import enum
import uuid

import structlog

from taskboard.auth.dependencies import AuthenticatedPrincipal
from taskboard.errors import ForbiddenError

logger = structlog.get_logger()


class Decision(enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


def normalize_id(value) -> str:
    text = str(value).strip()
    try:
        return str(uuid.UUID(text))
    except ValueError:
        return text.lower()


def authorize(principal: AuthenticatedPrincipal, resource_owner_id) -> Decision:
    if resource_owner_id is None:
        return Decision.DENY
    if normalize_id(principal.user_id) == normalize_id(resource_owner_id):
        return Decision.ALLOW
    return Decision.DENY


def require_owner(principal: AuthenticatedPrincipal, resource_owner_id) -> None:
    """Raise ForbiddenError unless the principal owns the resource."""
    if authorize(principal, resource_owner_id) is Decision.DENY:
        logger.warning("auth.ownership_denied", user_id=principal.user_id)
        raise ForbiddenError()
