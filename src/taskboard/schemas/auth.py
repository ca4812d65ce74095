"""Pydantic schemas for registration, login and profile.

Learn: Request bodies use camelCase on the wire (fullName, confirmPassword)
and snake_case in Python. Field *rules* are deliberately not enforced here:
AuthService validates every field and reports all violations together,
which pydantic's per-field 422s would not.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(_CamelModel):
    full_name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(_CamelModel):
    email: str = ""
    password: str = ""


class ProfileUpdate(_CamelModel):
    """Partial update — only non-None fields are applied."""
    full_name: Optional[str] = None
    email: Optional[str] = None


class UserRead(_CamelModel):
    """Public view of a user. Never includes the password hash."""
    id: uuid.UUID
    email: str
    full_name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


def user_payload(user, include_created: bool = False) -> dict:
    """Serialize a User row for a response body (camelCase keys)."""
    data = UserRead.model_validate(user).model_dump(mode="json", by_alias=True)
    if not include_created:
        data.pop("createdAt", None)
    return data
