"""
MatchResolver: turns mutual Right swipes into exactly one Match per pair.

The check for the reciprocal swipe and the insert happen in the caller's
transaction under a pair lock, and the insert itself is insert-if-absent on
the unique (user1_id, user2_id) index. Two requests racing on the same pair
therefore converge on a single row without either one failing.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from models.match import Match, canonical_pair
from models.repositories import MatchRepo, SwipeRepo, UserRepo
from models.swipe import Swipe, SwipeDirection
from services.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class MatchResolver:
    def __init__(self, matches: MatchRepo, swipes: SwipeRepo, users: UserRepo):
        self.matches = matches
        self.swipes = swipes
        self.users = users

    def lock(self, user_a: str, user_b: str) -> None:
        self.matches.lock_pair(*canonical_pair(user_a, user_b))

    def resolve(self, swipe: Swipe) -> Optional[Match]:
        """
        Called for a freshly flushed swipe, inside its transaction. Returns the
        Match created by this swipe, or None (not Right, not reciprocated, or
        the pair was already matched).
        """
        if swipe.direction != SwipeDirection.RIGHT or swipe.swiper_id == swipe.swipee_id:
            return None
        if not self.swipes.exists(swipe.swipee_id, swipe.swiper_id, SwipeDirection.RIGHT):
            return None

        user1_id, user2_id = canonical_pair(swipe.swiper_id, swipe.swipee_id)
        match, created = self.matches.insert_if_absent(user1_id, user2_id)
        if not created:
            return None
        logger.info("match created", extra={"match_id": match.id, "user1_id": user1_id, "user2_id": user2_id})
        return match

    def list_matches(self, user_id: str) -> List[Match]:
        return self.matches.list_for_user(user_id)

    def get_match(self, match_id: str) -> Match:
        match = self.matches.get(match_id)
        if match is None:
            raise NotFoundError("match not found")
        return match

    def update_match(self, match_id: str, requester: str, notes=..., archived=...) -> Match:
        """
        Only participants may annotate or archive. A missing match is reported
        the same way as a foreign one. Pass None as notes to clear them.
        """
        match = self.matches.get_for_participant(match_id, requester)
        if match is None:
            raise ForbiddenError("you are not part of this match")
        if notes is not ...:
            match.notes = notes.strip() if notes else None
        if archived is not ...:
            match.archived = bool(archived)
        self.matches.commit()
        return match

    def create_match(self, user1_id: str | None, user2_id: str | None) -> Match:
        """Direct creation (seeding/tests); same canonical form and uniqueness as resolve()."""
        user1_id = (user1_id or "").strip()
        user2_id = (user2_id or "").strip()
        if not user1_id or not user2_id:
            raise ValidationError("user1_id and user2_id required")
        if user1_id == user2_id:
            raise ValidationError("cannot match a user with themselves")
        for user_id in (user1_id, user2_id):
            if self.users.get_active(user_id) is None:
                raise NotFoundError(f"user {user_id} not found")

        lo, hi = canonical_pair(user1_id, user2_id)
        self.matches.lock_pair(lo, hi)
        match, created = self.matches.insert_if_absent(lo, hi)
        self.matches.commit()
        if not created:
            raise ConflictError("match already exists")
        logger.info("match created", extra={"match_id": match.id, "user1_id": lo, "user2_id": hi})
        return match
