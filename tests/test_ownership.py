"""Ownership authorizer tests."""

import uuid

import pytest

from taskboard.auth.dependencies import AuthenticatedPrincipal
from taskboard.auth.ownership import Decision, authorize, normalize_id, require_owner
from taskboard.errors import ForbiddenError

OWNER = uuid.UUID("6f1c1a52-3b0e-4a0c-9d5e-1f2a3b4c5d6e")
OTHER = uuid.UUID("0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d")


def test_owner_is_allowed():
    principal = AuthenticatedPrincipal(user_id=str(OWNER))
    assert authorize(principal, OWNER) is Decision.ALLOW
    assert authorize(principal, str(OWNER)) is Decision.ALLOW


def test_representation_is_normalized():
    principal = AuthenticatedPrincipal(user_id=str(OWNER))
    assert authorize(principal, str(OWNER).upper()) is Decision.ALLOW
    assert authorize(principal, OWNER.hex) is Decision.ALLOW
    assert normalize_id(f"  {OWNER}  ") == str(OWNER)


def test_other_user_is_denied():
    principal = AuthenticatedPrincipal(user_id=str(OTHER))
    assert authorize(principal, OWNER) is Decision.DENY


def test_missing_owner_is_denied():
    principal = AuthenticatedPrincipal(user_id=str(OWNER))
    assert authorize(principal, None) is Decision.DENY


def test_non_uuid_ids_compare_as_strings():
    principal = AuthenticatedPrincipal(user_id="Alice")
    assert authorize(principal, "alice") is Decision.ALLOW
    assert authorize(principal, "bob") is Decision.DENY


def test_require_owner_raises_forbidden():
    principal = AuthenticatedPrincipal(user_id=str(OTHER))
    with pytest.raises(ForbiddenError) as exc:
        require_owner(principal, OWNER)
    assert exc.value.status_code == 403
    assert exc.value.to_body() == {"error": "Forbidden"}


def test_require_owner_passes_for_owner():
    require_owner(AuthenticatedPrincipal(user_id=str(OWNER)), OWNER)
