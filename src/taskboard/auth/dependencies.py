"""FastAPI auth dependencies.

Learn: Route handlers declare `Depends(get_current_user)` to receive the
AuthenticatedPrincipal for the request. The session gate middleware has
already rejected requests without a valid cookie, but verification is
stateless and cheap, so the dependency simply verifies again instead of
trusting anything stashed on the request.
"""

import uuid

from fastapi import Depends, Request

from taskboard.auth.cookies import read_session
from taskboard.auth.jwt import SessionTokenCodec, get_session_codec
from taskboard.errors import UnauthorizedError


class AuthenticatedPrincipal:
    """The verified identity making the request.

    Learn: Only built from a successfully verified session token, and
    only lives for one request. Downstream code scopes every task query
    and ownership check by `user_id`.
    """

    __slots__ = ("user_id",)

    def __init__(self, user_id: str):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"AuthenticatedPrincipal(user_id={self.user_id!r})"


def authenticate_request(
    request: Request, codec: SessionTokenCodec
) -> AuthenticatedPrincipal:
    """Verify the request's session cookie; raise UnauthorizedError if invalid.

    A signed token whose subject is not a user id is treated like any
    other invalid session.
    """
    subject = codec.verify(read_session(request))
    if subject is None:
        raise UnauthorizedError()
    try:
        user_id = uuid.UUID(subject)
    except ValueError:
        raise UnauthorizedError()
    return AuthenticatedPrincipal(user_id=str(user_id))


async def get_current_user(
    request: Request,
    codec: SessionTokenCodec = Depends(get_session_codec),
) -> AuthenticatedPrincipal:
    """Extract the current principal (required — 401 if no valid session)."""
    return authenticate_request(request, codec)
