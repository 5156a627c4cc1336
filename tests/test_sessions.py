"""
Service-level tests for SessionAuthority.
"""
from datetime import timedelta

import pytest

from models.base_model import utcnow
from models.session import AuthSession
from models.user import User
from services.errors import AuthError, AuthFailure
from utils.security import encode_session_token, generate_jti, hash_password


@pytest.fixture
def authority(services):
    return services.sessions


@pytest.fixture
def user(storage):
    u = User(email="dave@x.com", password_hash=hash_password("pw"))
    storage.new(u)
    storage.save()
    return u


def _reason(authority, token):
    with pytest.raises(AuthError) as excinfo:
        authority.verify(token)
    return excinfo.value.reason


def test_create_and_verify(authority, user, storage):
    token = authority.create_session(user)

    ctx = authority.verify(token)

    assert ctx.user_id == user.id
    record = storage.get(AuthSession, ctx.session_id)
    assert record.user_id == user.id
    # seven days by default
    lifetime = record.expires_at - record.created_at
    assert timedelta(days=6, hours=23) < lifetime <= timedelta(days=7)


def test_revoke_is_not_repeatable(authority, user):
    ctx = authority.verify(authority.create_session(user))

    assert authority.revoke(ctx.session_id) is True
    assert authority.revoke(ctx.session_id) is False
    assert authority.revoke("no-such-session") is False


def test_revoked_token(authority, user):
    token = authority.create_session(user)
    authority.revoke(authority.verify(token).session_id)

    assert _reason(authority, token) == AuthFailure.REVOKED


def test_expired_session(authority, user, storage):
    token = authority.create_session(user)
    record = storage.get(AuthSession, authority.verify(token).session_id)
    record.expires_at = utcnow() - timedelta(seconds=1)
    storage.save()

    assert _reason(authority, token) == AuthFailure.EXPIRED


def test_expired_signature(authority, user):
    past = utcnow() - timedelta(days=8)
    token = encode_session_token(
        user_id=user.id,
        session_id="whatever",
        jti=generate_jti(),
        issued_at=past,
        expires_at=past + timedelta(days=1),
        secret=authority.secret,
        algorithm=authority.algorithm,
    )

    assert _reason(authority, token) == AuthFailure.EXPIRED


def test_foreign_signature(authority, user):
    now = utcnow()
    token = encode_session_token(
        user_id=user.id,
        session_id="whatever",
        jti=generate_jti(),
        issued_at=now,
        expires_at=now + timedelta(days=1),
        secret="someone-elses-secret-key-for-hs256-signing",
        algorithm=authority.algorithm,
    )

    assert _reason(authority, token) == AuthFailure.INVALID


def test_unknown_session(authority, user):
    now = utcnow()
    token = encode_session_token(
        user_id=user.id,
        session_id="missing",
        jti=generate_jti(),
        issued_at=now,
        expires_at=now + timedelta(days=1),
        secret=authority.secret,
        algorithm=authority.algorithm,
    )

    assert _reason(authority, token) == AuthFailure.UNKNOWN


def test_session_bound_to_its_user(authority, user, storage):
    ctx = authority.verify(authority.create_session(user))
    now = utcnow()
    forged = encode_session_token(
        user_id="another-user",
        session_id=ctx.session_id,
        jti=storage.get(AuthSession, ctx.session_id).token,
        issued_at=now,
        expires_at=now + timedelta(days=1),
        secret=authority.secret,
        algorithm=authority.algorithm,
    )

    assert _reason(authority, forged) == AuthFailure.UNKNOWN


def test_deleted_user_loses_access(authority, user, storage):
    token = authority.create_session(user)
    user.soft_delete()
    storage.save()

    assert _reason(authority, token) == AuthFailure.UNKNOWN


def test_verify_header_requires_bearer(authority):
    for header in (None, "", "Bearer", "Basic abc"):
        with pytest.raises(AuthError) as excinfo:
            authority.verify_header(header)
        assert excinfo.value.reason == AuthFailure.MISSING
