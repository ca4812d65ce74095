"""Session gate middleware — runs before every route.

Learn: Each request goes Unchecked → one of three terminal outcomes:

    PUBLIC         path is on the static allow-list → forwarded untouched
    REJECTED       no valid session → 401 JSON (API) or redirect to /login (pages)
    AUTHENTICATED  session cookie verified → forwarded

Anything not on the allow-list is protected, including paths nobody has
classified yet (fail-closed). Rejections outside the named protected
namespaces are logged with fail_closed=True, which makes allow-list gaps
visible.

The outcome is recorded on request.state.session_gate.
"""

import enum

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from taskboard.auth.cookies import read_session
from taskboard.auth.jwt import SessionTokenCodec, session_codec
from taskboard.errors import UnauthorizedError, error_response

logger = structlog.get_logger()

API_PREFIX = "/api/"
LOGIN_PAGE = "/login"

PUBLIC_PATHS = frozenset({
    "/",
    "/login",
    "/register",
    "/api/v1/health",
    "/api/v1/auth/login",
    "/api/v1/auth/register",
    "/api/v1/auth/logout",
    "/docs",
    "/docs/oauth2-redirect",
    "/redoc",
    "/openapi.json",
})

PROTECTED_PREFIXES = (
    "/dashboard",
    "/api/v1/tasks",
    "/api/v1/profile",
    "/api/v1/auth/me",
)


class GateOutcome(str, enum.Enum):
    PUBLIC = "public"
    REJECTED = "rejected"
    AUTHENTICATED = "authenticated"


def normalize_path(path: str) -> str:
    return path.rstrip("/") or "/"


def is_public(path: str) -> bool:
    return normalize_path(path) in PUBLIC_PATHS


def is_api_path(path: str) -> bool:
    return path.startswith(API_PREFIX)


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Reject requests to protected paths that carry no valid session."""

    def __init__(self, app, codec: SessionTokenCodec = session_codec):
        super().__init__(app)
        self.codec = codec

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path

        if is_public(path):
            request.state.session_gate = GateOutcome.PUBLIC
            return await call_next(request)

        subject = self.codec.verify(read_session(request))
        if subject is None:
            request.state.session_gate = GateOutcome.REJECTED
            logger.info(
                "session.rejected",
                path=path,
                fail_closed=not path.startswith(PROTECTED_PREFIXES),
            )
            if is_api_path(path):
                return error_response(UnauthorizedError())
            return RedirectResponse(url=LOGIN_PAGE, status_code=307)

        request.state.session_gate = GateOutcome.AUTHENTICATED
        return await call_next(request)
