"""Profile API — read and update the signed-in user's account.

Learn: The profile is always the principal's own record, but updates
still go through require_owner() like every other mutation, so the
ownership rule has exactly one implementation.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.dependencies import AuthenticatedPrincipal, get_current_user
from taskboard.auth.ownership import normalize_id, require_owner
from taskboard.db.engine import get_db
from taskboard.errors import ConflictError, NotFoundError, ValidationError
from taskboard.schemas.auth import ProfileUpdate, user_payload
from taskboard.services.auth_service import validate_profile
from taskboard.services.user_service import UserService

router = APIRouter(prefix="/profile")


def _user_svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("")
async def get_profile(
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    user = await svc.get_user(principal.user_id)
    if not user:
        raise NotFoundError("User not found")
    return {"success": True, **user_payload(user, include_created=True)}


@router.patch("")
async def update_profile(
    body: ProfileUpdate,
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    """Update full name and/or email. Email must stay unique."""
    errors = validate_profile(body.full_name, body.email)
    if errors:
        raise ValidationError(errors)

    user = await svc.get_user(principal.user_id)
    if not user:
        raise NotFoundError("User not found")
    require_owner(principal, user.id)

    if body.email is not None:
        existing = await svc.find_by_email(body.email)
        if existing and normalize_id(existing.id) != normalize_id(user.id):
            raise ConflictError("Email already registered")

    user = await svc.update_profile(user, full_name=body.full_name, email=body.email)
    return {"success": True, **user_payload(user, include_created=True)}
