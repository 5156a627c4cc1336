"""
SessionAuthority: issues, verifies and revokes bearer sessions.

A token is a signed JWT naming a session row; the signature alone is never
enough. Verification always reloads the row so logout and expiry take effect
on the very next request.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable

import jwt

from models.base_model import utcnow
from models.repositories import SessionRepo, UserRepo
from models.session import AuthSession
from models.user import User
from services.errors import AuthError, AuthFailure
from utils.security import decode_session_token, encode_session_token, generate_jti

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=7)


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    session_id: str


class SessionAuthority:
    def __init__(
        self,
        sessions: SessionRepo,
        users: UserRepo,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable = utcnow,
    ):
        self.sessions = sessions
        self.users = users
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock

    def create_session(self, user: User) -> str:
        """Persist a new session for user and return its signed credential."""
        now = self.clock()
        record = AuthSession(
            user_id=user.id,
            token=generate_jti(),
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.sessions.add(record)
        self.sessions.commit()
        logger.info("session created", extra={"session_id": record.id, "user_id": user.id})
        return encode_session_token(
            user_id=user.id,
            session_id=record.id,
            jti=record.token,
            issued_at=now,
            expires_at=record.expires_at,
            secret=self.secret,
            algorithm=self.algorithm,
        )

    def verify(self, token: str) -> SessionContext:
        try:
            claims = decode_session_token(token, self.secret, self.algorithm)
        except jwt.ExpiredSignatureError:
            raise AuthError(AuthFailure.EXPIRED)
        except jwt.InvalidTokenError as exc:
            logger.warning("rejected token: %s", exc)
            raise AuthError(AuthFailure.INVALID)

        session_id = claims.get("session_id")
        user_id = claims.get("user_id")
        if not session_id or not user_id:
            raise AuthError(AuthFailure.INVALID)

        record = self.sessions.find(session_id, user_id)
        if record is None or record.token != claims.get("jti"):
            raise AuthError(AuthFailure.UNKNOWN)
        if record.is_revoked():
            raise AuthError(AuthFailure.REVOKED)
        if record.is_expired(self.clock()):
            raise AuthError(AuthFailure.EXPIRED)
        if self.users.get_active(user_id) is None:
            raise AuthError(AuthFailure.UNKNOWN)

        return SessionContext(user_id=user_id, session_id=session_id)

    def verify_header(self, header: str | None) -> SessionContext:
        """Accepts the raw Authorization header value."""
        scheme, _, token = (header or "").partition(" ")
        token = token.strip()
        if scheme != "Bearer" or not token:
            raise AuthError(AuthFailure.MISSING, "Missing or invalid Authorization header")
        return self.verify(token)

    def revoke(self, session_id: str) -> bool:
        """False when nothing changed (unknown or already revoked)."""
        changed = self.sessions.revoke(session_id, self.clock())
        self.sessions.commit()
        if changed:
            logger.info("session revoked", extra={"session_id": session_id})
        return changed
