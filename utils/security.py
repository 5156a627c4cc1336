"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT creation/verification via PyJWT
- JTI generation for token identifiers
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Dict, Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

ph = PasswordHasher()

TOKEN_ISSUER = "matchmaker-api"


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID).
    """
    return str(uuid.uuid4())


def encode_session_token(
    user_id: str,
    session_id: str,
    jti: str,
    issued_at: datetime,
    expires_at: datetime,
    secret: str,
    algorithm: str,
) -> str:
    payload = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "user_id": str(user_id),
        "session_id": str(session_id),
        "jti": jti,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_session_token(token: str, secret: str, algorithm: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT. Raises jwt.ExpiredSignatureError when the
    token is past its exp and jwt.InvalidTokenError for anything else.
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        issuer=TOKEN_ISSUER,
        options={"require": ["exp", "iat", "sub"]},
    )
