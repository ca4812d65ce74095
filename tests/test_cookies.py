"""Session cookie transport tests."""

from starlette.responses import Response

from taskboard.auth.cookies import attach_session, clear_session
from taskboard.config import settings


def _cookie_attrs(response: Response) -> tuple[str, set[str]]:
    header = response.headers["set-cookie"]
    first, *attrs = [part.strip() for part in header.split(";")]
    return first, {a.lower() for a in attrs}


def test_attach_sets_hardened_cookie():
    response = Response()
    attach_session(response, "tok.en.value")
    first, attrs = _cookie_attrs(response)
    assert first == "session=tok.en.value"
    assert "httponly" in attrs
    assert "samesite=lax" in attrs
    assert "path=/" in attrs
    assert "max-age=86400" in attrs
    assert "secure" not in attrs


def test_secure_flag_in_production(monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")
    response = Response()
    attach_session(response, "tok")
    _, attrs = _cookie_attrs(response)
    assert "secure" in attrs


def test_clear_expires_cookie():
    response = Response()
    clear_session(response)
    first, attrs = _cookie_attrs(response)
    assert first.startswith("session=")
    assert "max-age=0" in attrs
    assert "path=/" in attrs
