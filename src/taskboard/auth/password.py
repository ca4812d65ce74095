"""Password hashing — the credential verifier.

Learn: Uses bcrypt for password hashing. bcrypt salts automatically and
its work factor makes offline guessing expensive. Stored secrets are
only ever compared, never decoded.

The auth service receives a PasswordHasher rather than calling bcrypt
directly, so the (slow, opaque) primitive can be swapped in tests.
"""

from typing import Optional

import bcrypt

from taskboard.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Passwords are truncated to 72 bytes (bcrypt's limit) before hashing,
    and the same truncation is applied on verification.
    """
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against its bcrypt hash.

    A malformed stored hash is treated as a mismatch.
    """
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False


class PasswordHasher:
    """Hashing collaborator: hash(secret) -> digest, compare(secret, digest) -> bool."""

    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds

    def hash(self, secret: str) -> str:
        return hash_password(secret, rounds=self.rounds)

    def compare(self, secret: str, digest: str) -> bool:
        return verify_password(secret, digest)


def get_password_hasher() -> PasswordHasher:
    """FastAPI dependency — overridable in tests."""
    return PasswordHasher()
