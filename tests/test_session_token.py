"""Session token codec tests.

Learn: verify() must be a pure function of token + time + secret:
- round trip returns the subject until just before exp
- expiry boundary is strict (now < exp)
- any tampering, foreign secret or garbage yields None (no reason given)
"""

import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from taskboard.auth.jwt import SessionTokenCodec, get_session_codec, session_codec

SECRET = "unit-test-secret-0123456789abcdef0123456789abcdef"
T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def codec():
    return SessionTokenCodec(secret=SECRET)


def _b64decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


# ═══════════════════════════════════════════════════════════
# Issue / verify
# ═══════════════════════════════════════════════════════════


def test_round_trip_returns_subject(codec):
    token = codec.issue("user-123", now=T0)
    assert codec.verify(token, now=T0) == "user-123"
    assert codec.verify(token, now=T0 + timedelta(hours=12)) == "user-123"


def test_claims_span_24_hours(codec):
    token = codec.issue("user-123", now=T0)
    payload = json.loads(_b64decode(token.split(".")[1]))
    assert payload["sub"] == "user-123"
    assert payload["iat"] == int(T0.timestamp())
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_token_is_hs256(codec):
    header = jwt.get_unverified_header(codec.issue("user-123"))
    assert header["alg"] == "HS256"


def test_issue_without_now_uses_current_time(codec):
    token = codec.issue("user-123")
    assert codec.verify(token) == "user-123"


# ═══════════════════════════════════════════════════════════
# Expiry
# ═══════════════════════════════════════════════════════════


def test_valid_one_second_before_expiry(codec):
    token = codec.issue("user-123", now=T0)
    assert codec.verify(token, now=T0 + timedelta(hours=24, seconds=-1)) == "user-123"


def test_invalid_at_exact_expiry(codec):
    token = codec.issue("user-123", now=T0)
    assert codec.verify(token, now=T0 + timedelta(hours=24)) is None


def test_invalid_one_second_after_expiry(codec):
    token = codec.issue("user-123", now=T0)
    assert codec.verify(token, now=T0 + timedelta(hours=24, seconds=1)) is None


def test_custom_ttl():
    short = SessionTokenCodec(secret=SECRET, ttl=timedelta(minutes=5))
    token = short.issue("u", now=T0)
    assert short.verify(token, now=T0 + timedelta(minutes=4)) == "u"
    assert short.verify(token, now=T0 + timedelta(minutes=6)) is None


# ═══════════════════════════════════════════════════════════
# Tampering and garbage
# ═══════════════════════════════════════════════════════════


def test_single_bit_flip_in_payload_is_rejected(codec):
    token = codec.issue("user-123", now=T0)
    header, payload, signature = token.split(".")
    raw = _b64decode(payload)

    for index in range(len(raw)):
        flipped = bytearray(raw)
        flipped[index] ^= 0x01
        tampered = ".".join([header, _b64encode(bytes(flipped)), signature])
        assert codec.verify(tampered, now=T0) is None, f"bit flip at byte {index} accepted"


def test_swapped_subject_with_original_signature_is_rejected(codec):
    token = codec.issue("user-123", now=T0)
    header, payload, signature = token.split(".")
    claims = json.loads(_b64decode(payload))
    claims["sub"] = "user-456"
    forged = ".".join([header, _b64encode(json.dumps(claims).encode()), signature])
    assert codec.verify(forged, now=T0) is None


def test_token_from_another_secret_is_rejected(codec):
    other = SessionTokenCodec(secret="a-completely-different-secret-0123456789abcdef")
    assert codec.verify(other.issue("user-123", now=T0), now=T0) is None


def test_unsigned_token_is_rejected(codec):
    header = _b64encode(json.dumps({"alg": "none", "typ": "JWT"}).encode())
    claims = {"sub": "user-123", "iat": int(T0.timestamp()), "exp": int(T0.timestamp()) + 3600}
    unsigned = f"{header}.{_b64encode(json.dumps(claims).encode())}."
    assert codec.verify(unsigned, now=T0) is None


def test_token_missing_exp_is_rejected(codec):
    token = jwt.encode({"sub": "user-123", "iat": int(T0.timestamp())}, SECRET, algorithm="HS256")
    assert codec.verify(token, now=T0) is None


@pytest.mark.parametrize("garbage", [None, "", "not-a-token", "a.b.c", "....."])
def test_garbage_is_rejected(codec, garbage):
    assert codec.verify(garbage, now=T0) is None


def test_process_codec_is_shared():
    assert get_session_codec() is session_codec
