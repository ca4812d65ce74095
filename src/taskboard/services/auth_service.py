"""Authentication service — registration and login.

Learn: The service validates input, talks to the user store and the
password hasher, and mints a session token. It never touches HTTP: the
route attaches the returned token as a cookie.

Validation collects *every* violated field before failing, so a form
can highlight all problems at once.

Login failures use one message for "no such email" and "wrong password".
Telling them apart would let anyone enumerate registered addresses.
"""

import re
from dataclasses import dataclass

import structlog

from taskboard.auth.jwt import SessionTokenCodec
from taskboard.auth.password import PasswordHasher
from taskboard.db.models import User
from taskboard.errors import (
    AuthenticationError,
    ConflictError,
    ValidationError,
    collaborator_errors,
)
from taskboard.schemas.auth import user_payload
from taskboard.services.user_service import UserService

logger = structlog.get_logger()

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MIN_PASSWORD_LENGTH = 6


# ═══════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════


def _check_name(full_name: str, errors: list[dict]) -> None:
    name = full_name.strip()
    if len(name) < MIN_NAME_LENGTH:
        errors.append({"field": "fullName", "message": "Full name must be at least 2 characters"})
    elif len(name) > MAX_NAME_LENGTH:
        errors.append({"field": "fullName", "message": "Full name must be at most 100 characters"})


def _check_email(email: str, errors: list[dict]) -> None:
    email = email.strip()
    if not EMAIL_RE.match(email):
        errors.append({"field": "email", "message": "Please enter a valid email"})
    elif len(email) > MAX_EMAIL_LENGTH:
        errors.append({"field": "email", "message": "Email must be at most 255 characters"})


def validate_registration(
    full_name: str, email: str, password: str, confirm_password: str
) -> list[dict]:
    errors: list[dict] = []
    _check_name(full_name, errors)
    _check_email(email, errors)
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append({"field": "password", "message": "Password must be at least 6 characters"})
    if password != confirm_password:
        errors.append({"field": "confirmPassword", "message": "Passwords do not match"})
    return errors


def validate_login(email: str, password: str) -> list[dict]:
    errors: list[dict] = []
    _check_email(email, errors)
    if not password:
        errors.append({"field": "password", "message": "Password is required"})
    return errors


def validate_profile(full_name, email) -> list[dict]:
    """Same field rules as registration, for the fields actually supplied."""
    errors: list[dict] = []
    if full_name is not None:
        _check_name(full_name, errors)
    if email is not None:
        _check_email(email, errors)
    return errors


# ═══════════════════════════════════════════════════════════
# Service
# ═══════════════════════════════════════════════════════════


@dataclass
class AuthResult:
    """Outcome of a successful register/login."""

    user: User
    token: str

    @property
    def principal_id(self) -> str:
        return str(self.user.id)

    @property
    def display_info(self) -> dict:
        return user_payload(self.user)


class AuthService:
    """Orchestrates register/login: validate → credentials → session token."""

    def __init__(
        self,
        users: UserService,
        hasher: PasswordHasher,
        codec: SessionTokenCodec,
    ):
        self.users = users
        self.hasher = hasher
        self.codec = codec

    async def register(
        self,
        full_name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> AuthResult:
        errors = validate_registration(full_name, email, password, confirm_password)
        if errors:
            raise ValidationError(errors)

        if await self.users.find_by_email(email):
            logger.info("auth.register_conflict")
            raise ConflictError("Email already registered")

        with collaborator_errors("password hash"):
            digest = self.hasher.hash(password)

        user = await self.users.insert_user(full_name, email, digest)
        logger.info("auth.registered", user_id=str(user.id))
        return AuthResult(user=user, token=self.codec.issue(str(user.id)))

    async def login(self, email: str, password: str) -> AuthResult:
        errors = validate_login(email, password)
        if errors:
            raise ValidationError(errors)

        user = await self.users.find_by_email(email)
        if not user:
            logger.info("auth.login_failed")
            raise AuthenticationError()

        with collaborator_errors("password compare"):
            matches = self.hasher.compare(password, user.password_hash)
        if not matches:
            logger.info("auth.login_failed")
            raise AuthenticationError()

        logger.info("auth.logged_in", user_id=str(user.id))
        return AuthResult(user=user, token=self.codec.issue(str(user.id)))
