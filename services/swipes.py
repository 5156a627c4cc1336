"""SwipeLedger: append-only record of Left/Right decisions."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from models.match import Match
from models.repositories import SwipeRepo, UserRepo
from models.swipe import Swipe, SwipeDirection
from services.errors import ForbiddenError, NotFoundError, ValidationError
from services.matches import MatchResolver

logger = logging.getLogger(__name__)


class SwipeLedger:
    def __init__(self, swipes: SwipeRepo, users: UserRepo, resolver: MatchResolver):
        self.swipes = swipes
        self.users = users
        self.resolver = resolver

    def record_swipe(self, swiper_id: str, swipee_id: str, direction: str) -> Tuple[Swipe, Optional[Match]]:
        """
        Append a swipe. Repeats are accepted as new ledger entries. A Right
        swipe is resolved against its reciprocal in the same transaction.
        """
        swipee_id = (swipee_id or "").strip()
        if not swipee_id or not direction:
            raise ValidationError("swipee_id and direction required")
        try:
            parsed = SwipeDirection.parse(direction)
        except ValueError:
            raise ValidationError("direction must be 'L' or 'R'")
        if swipee_id == swiper_id:
            raise ValidationError("cannot swipe on yourself")
        if self.users.get_active(swipee_id) is None:
            raise ValidationError("swipee_id not found")

        try:
            if parsed is SwipeDirection.RIGHT:
                self.resolver.lock(swiper_id, swipee_id)
            swipe = self.swipes.add(Swipe(swiper_id=swiper_id, swipee_id=swipee_id, direction=parsed))
            match = self.resolver.resolve(swipe)
            self.swipes.commit()
        except SQLAlchemyError:
            self.swipes.rollback()
            raise

        logger.info(
            "swipe recorded",
            extra={"swipe_id": swipe.id, "swiper_id": swiper_id, "swipee_id": swipee_id, "direction": parsed.value},
        )
        return swipe, match

    def list_swipes(self, swiper_id: str | None = None, swipee_id: str | None = None) -> List[Swipe]:
        return self.swipes.list(swiper_id=swiper_id, swipee_id=swipee_id)

    def get_swipe(self, swipe_id: str) -> Swipe:
        swipe = self.swipes.get(swipe_id)
        if swipe is None:
            raise NotFoundError("swipe not found")
        return swipe

    def delete_swipe(self, swipe_id: str, requester: str) -> bool:
        swipe = self.get_swipe(swipe_id)
        if swipe.swiper_id != requester:
            raise ForbiddenError("forbidden")
        self.swipes.delete(swipe)
        self.swipes.commit()
        logger.info("swipe deleted", extra={"swipe_id": swipe_id})
        return True
