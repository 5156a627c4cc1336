"""Registration and credential login."""
from __future__ import annotations

import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError

from models.profile import Profile
from models.repositories import ProfileRepo, UserRepo
from models.user import User
from services.errors import AuthError, AuthFailure, ConflictError, ValidationError
from services.sessions import SessionAuthority
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class AccountService:
    def __init__(self, users: UserRepo, profiles: ProfileRepo, authority: SessionAuthority):
        self.users = users
        self.profiles = profiles
        self.authority = authority

    def register(
        self,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> Tuple[User, str]:
        """
        Create the user together with its profile and open a first session.
        The profile name is "first last" with blanks dropped.
        """
        email = _normalize_email(email)
        password = (password or "").strip()
        if not email or not password:
            raise ValidationError("email and password are required")
        if self.users.get_by_email(email):
            raise ConflictError("user already exists")

        name = " ".join(p.strip() for p in (first_name, last_name) if p and p.strip()) or None
        user = User(email=email, password_hash=hash_password(password))
        try:
            self.users.add(user)
            self.profiles.add(Profile(user_id=user.id, name=name))
            self.users.commit()
        except IntegrityError:
            self.users.rollback()
            raise ConflictError("user already exists")

        logger.info("user registered", extra={"user_id": user.id})
        return user, self.authority.create_session(user)

    def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        email = _normalize_email(email)
        password = (password or "").strip()
        if not email or not password:
            raise ValidationError("email and password are required")

        user = self.users.get_by_email(email)
        if user is None or user.is_deleted or not verify_password(password, user.password_hash):
            logger.warning("failed login", extra={"email": email})
            raise AuthError(AuthFailure.INVALID, "invalid credentials")
        return user, self.authority.create_session(user)
