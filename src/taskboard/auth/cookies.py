"""Session cookie transport.

Learn: The token lives only in the client's `session` cookie. These
helpers attach it to a response, read it from a request and delete it.
They never look inside the token — that is the codec's job.
"""

from typing import Optional

from starlette.requests import HTTPConnection
from starlette.responses import Response

from taskboard.config import settings


def attach_session(response: Response, token: str) -> None:
    """Set the session cookie: HTTP-only, SameSite=Lax, secure in production."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def read_session(conn: HTTPConnection) -> Optional[str]:
    return conn.cookies.get(settings.session_cookie_name) or None


def clear_session(response: Response) -> None:
    """Delete the session cookie. Safe to call when none was set."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
