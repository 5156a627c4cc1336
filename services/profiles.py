"""ProfileDirectory: display records, one per user, mutated only by the owner."""
from __future__ import annotations

import logging
from typing import List

from models.profile import PROFILE_FIELDS, Profile
from models.repositories import ProfileRepo
from services.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ProfileDirectory:
    def __init__(self, profiles: ProfileRepo):
        self.profiles = profiles

    def list_profiles(self, requester: str, user_id: str | None = None) -> List[Profile]:
        """Everyone but the requester, or just user_id's profile when given."""
        if user_id:
            return self.profiles.list_for_user(user_id)
        return self.profiles.list_excluding(requester)

    def get_profile(self, profile_id: str) -> Profile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise NotFoundError("profile not found")
        return profile

    def get_own_profile(self, user_id: str) -> Profile:
        profile = self.profiles.by_user(user_id)
        if profile is None:
            raise NotFoundError("profile not found")
        return profile

    def create_profile(self, user_id: str, fields: dict) -> Profile:
        if self.profiles.by_user(user_id):
            raise ConflictError("profile already exists")
        profile = Profile(user_id=user_id, **{k: v for k, v in fields.items() if k in PROFILE_FIELDS})
        self.profiles.add(profile)
        self.profiles.commit()
        logger.info("profile created", extra={"profile_id": profile.id, "user_id": user_id})
        return profile

    def _owned(self, profile_id: str, requester: str) -> Profile:
        profile = self.get_profile(profile_id)
        if profile.user_id != requester:
            raise ForbiddenError("forbidden")
        return profile

    def update_profile(self, profile_id: str, requester: str, fields: dict) -> Profile:
        profile = self._owned(profile_id, requester)
        updates = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
        if not updates:
            raise ValidationError("no fields to update")
        for key, value in updates.items():
            setattr(profile, key, value)
        self.profiles.commit()
        return profile

    def delete_profile(self, profile_id: str, requester: str) -> bool:
        profile = self._owned(profile_id, requester)
        self.profiles.delete(profile)
        self.profiles.commit()
        logger.info("profile deleted", extra={"profile_id": profile_id})
        return True
