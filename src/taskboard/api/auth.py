"""Auth API — registration, login, logout, current user.

Learn: Routes for cookie-based sessions:
- POST /auth/register → create account, set session cookie (201)
- POST /auth/login → check credentials, set session cookie
- POST /auth/logout → delete session cookie (always succeeds)
- GET /auth/me → current user info (requires a session)

Register, login and logout are on the session gate's public allow-list;
/auth/me is not.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.cookies import attach_session, clear_session
from taskboard.auth.dependencies import AuthenticatedPrincipal, get_current_user
from taskboard.auth.jwt import SessionTokenCodec, get_session_codec
from taskboard.auth.password import PasswordHasher, get_password_hasher
from taskboard.db.engine import get_db
from taskboard.errors import NotFoundError
from taskboard.schemas.auth import LoginRequest, RegisterRequest, user_payload
from taskboard.services.auth_service import AuthResult, AuthService
from taskboard.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _auth_svc(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: SessionTokenCodec = Depends(get_session_codec),
) -> AuthService:
    return AuthService(UserService(db), hasher=hasher, codec=codec)


def _session_response(result: AuthResult, status_code: int) -> JSONResponse:
    response = JSONResponse(
        status_code=status_code,
        content={"success": True, "user": result.display_info},
    )
    attach_session(response, result.token)
    return response


# ─── Register ────────────────────────────────────────────


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, svc: AuthService = Depends(_auth_svc)):
    """Create a new account and start a session for it."""
    result = await svc.register(
        full_name=body.full_name,
        email=body.email,
        password=body.password,
        confirm_password=body.confirm_password,
    )
    return _session_response(result, status_code=201)


# ─── Login / Logout ──────────────────────────────────────


@router.post("/login")
async def login(body: LoginRequest, svc: AuthService = Depends(_auth_svc)):
    """Login with email and password → session cookie."""
    result = await svc.login(email=body.email, password=body.password)
    return _session_response(result, status_code=200)


@router.post("/logout")
async def logout():
    """Drop the client's session cookie.

    Learn: Idempotent and never fails. The token itself stays
    cryptographically valid until it expires; only the client's copy
    is removed.
    """
    response = JSONResponse(content={"success": True})
    clear_session(response)
    return response


# ─── Current user ───────────────────────────────────────


@router.get("/me")
async def get_me(
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the current authenticated user's info."""
    user = await UserService(db).get_user(principal.user_id)
    if not user:
        raise NotFoundError("User not found")
    return {"success": True, "user": user_payload(user, include_created=True)}
