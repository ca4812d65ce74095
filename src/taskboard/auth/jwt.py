"""Session token creation and verification.

Learn: A session is a self-contained JWT (HS256) carrying the user id as
`sub`, plus `iat` and `exp` (24h later by default). Nothing is stored
server-side, so verification is a pure function of the token, the
current time and the signing secret.

The trade-off: a token that is still within its lifetime cannot be
revoked. Logout only removes the client's copy.

verify() answers with the subject or None. A malformed token, a bad
signature and an expired token all look the same to the caller, so the
response can't be used to probe why a token was rejected.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from taskboard.config import settings

logger = structlog.get_logger()

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class SessionTokenCodec:
    """Mints and checks signed, time-bounded session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, subject: str, now: Optional[datetime] = None) -> str:
        """Create a signed token for `subject`, valid for `ttl` from `now`."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(subject),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
        """Return the token's subject, or None if it is not a valid session.

        Expiry is checked here rather than by PyJWT so that `now` can be
        supplied explicitly; a token is valid only while now < exp.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as e:
            logger.debug("session.token_invalid", reason=type(e).__name__)
            return None

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject or not isinstance(expires_at, (int, float)):
            return None

        current = (now or datetime.now(timezone.utc)).timestamp()
        if current >= expires_at:
            logger.debug("session.token_expired", sub=subject)
            return None
        return subject


# Process-wide codec, configured once from settings
session_codec = SessionTokenCodec(
    secret=settings.jwt_secret,
    algorithm=settings.jwt_algorithm,
    ttl=timedelta(hours=settings.session_ttl_hours),
)


def get_session_codec() -> SessionTokenCodec:
    """FastAPI dependency returning the process-wide codec."""
    return session_codec
