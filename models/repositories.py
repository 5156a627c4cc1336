"""
Repositories: one per component, all sharing a DBStorage.

Each repository owns the queries for its aggregate; services never touch the
SQLAlchemy session directly. Repositories flush but do not commit on their
own: the calling service decides where the transaction ends via commit().
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select, text, update
from sqlalchemy.orm import aliased, joinedload

from models.conversation import Conversation
from models.db_storage import DBStorage
from models.match import Match
from models.message import Message
from models.profile import Profile
from models.session import AuthSession
from models.swipe import Swipe, SwipeDirection
from models.user import User


class Repository:
    def __init__(self, storage: DBStorage):
        self.storage = storage

    @property
    def session(self):
        return self.storage.get_session()

    def add(self, obj):
        self.storage.new(obj)
        self.storage.flush()
        return obj

    def delete(self, obj):
        self.storage.delete(obj)
        self.storage.flush()

    def commit(self):
        self.storage.save()

    def rollback(self):
        self.storage.rollback()


class UserRepo(Repository):
    def get(self, user_id: str) -> Optional[User]:
        return self.storage.get(User, user_id)

    def get_active(self, user_id: str) -> Optional[User]:
        user = self.get(user_id)
        if user is None or user.is_deleted:
            return None
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter(User.email == email).first()


class SessionRepo(Repository):
    def find(self, session_id: str, user_id: str) -> Optional[AuthSession]:
        return (
            self.session.query(AuthSession)
            .filter(AuthSession.id == session_id, AuthSession.user_id == user_id)
            .first()
        )

    def revoke(self, session_id: str, when: datetime) -> bool:
        """Stamp revoked_at on a live row only. True when a row changed."""
        result = self.session.execute(
            update(AuthSession)
            .where(AuthSession.id == session_id, AuthSession.revoked_at.is_(None))
            .values(revoked_at=when)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1


class ProfileRepo(Repository):
    def get(self, profile_id: str) -> Optional[Profile]:
        return self.storage.get(Profile, profile_id)

    def by_user(self, user_id: str) -> Optional[Profile]:
        return self.session.query(Profile).filter(Profile.user_id == user_id).first()

    def list_for_user(self, user_id: str) -> List[Profile]:
        return self.session.query(Profile).filter(Profile.user_id == user_id).all()

    def list_excluding(self, user_id: str) -> List[Profile]:
        return (
            self.session.query(Profile)
            .filter(Profile.user_id != user_id)
            .order_by(Profile.created_at.desc())
            .all()
        )


class SwipeRepo(Repository):
    def get(self, swipe_id: str) -> Optional[Swipe]:
        return self.storage.get(Swipe, swipe_id)

    def list(self, swiper_id: str | None = None, swipee_id: str | None = None) -> List[Swipe]:
        query = self.session.query(Swipe)
        if swiper_id:
            query = query.filter(Swipe.swiper_id == swiper_id)
        if swipee_id:
            query = query.filter(Swipe.swipee_id == swipee_id)
        return query.order_by(Swipe.created_at.asc()).all()

    def exists(self, swiper_id: str, swipee_id: str, direction: SwipeDirection) -> bool:
        stmt = select(Swipe.id).where(
            Swipe.swiper_id == swiper_id,
            Swipe.swipee_id == swipee_id,
            Swipe.direction == direction,
        ).limit(1)
        return self.session.execute(stmt).first() is not None


class MatchRepo(Repository):
    def get(self, match_id: str) -> Optional[Match]:
        return self.storage.get(Match, match_id)

    def get_for_participant(self, match_id: str, user_id: str) -> Optional[Match]:
        return (
            self.session.query(Match)
            .filter(Match.id == match_id, or_(Match.user1_id == user_id, Match.user2_id == user_id))
            .first()
        )

    def find_pair(self, user1_id: str, user2_id: str) -> Optional[Match]:
        return (
            self.session.query(Match)
            .filter(Match.user1_id == user1_id, Match.user2_id == user2_id)
            .first()
        )

    def lock_pair(self, user1_id: str, user2_id: str) -> None:
        """
        Serialise writers on one unordered pair for the rest of the transaction.
        SQLite already serialises writers on the database lock.
        """
        if self.storage.dialect == "postgresql":
            self.session.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:key))"),
                {"key": f"match:{user1_id}:{user2_id}"},
            )

    def insert_if_absent(self, user1_id: str, user2_id: str) -> Tuple[Match, bool]:
        """Caller passes a canonical pair. Returns (match, created)."""
        created = self.storage.insert_if_absent(
            Match,
            {"user1_id": user1_id, "user2_id": user2_id, "archived": False},
            index_elements=["user1_id", "user2_id"],
        )
        return self.find_pair(user1_id, user2_id), created

    def list_for_user(self, user_id: str) -> List[Match]:
        return (
            self.session.query(Match)
            .options(
                joinedload(Match.user1).joinedload(User.profile),
                joinedload(Match.user2).joinedload(User.profile),
            )
            .filter(or_(Match.user1_id == user_id, Match.user2_id == user_id))
            .order_by(Match.created_at.desc())
            .all()
        )


def _latest_message_column(column):
    """Correlated scalar subquery: one column of the newest live message."""
    return (
        select(column)
        .where(Message.conversation_id == Conversation.id, Message.not_deleted())
        .order_by(Message.created_at.desc())
        .limit(1)
        .correlate(Conversation)
        .scalar_subquery()
    )


class ConversationRepo(Repository):
    def by_match(self, match_id: str) -> Optional[Conversation]:
        return self.session.query(Conversation).filter(Conversation.match_id == match_id).first()

    def get_for_participant(self, conversation_id: str, user_id: str) -> Optional[Conversation]:
        return (
            self.session.query(Conversation)
            .join(Match, Conversation.match_id == Match.id)
            .options(joinedload(Conversation.match))
            .filter(
                Conversation.id == conversation_id,
                or_(Match.user1_id == user_id, Match.user2_id == user_id),
            )
            .first()
        )

    def insert_if_absent(self, match_id: str) -> Tuple[Conversation, bool]:
        created = self.storage.insert_if_absent(
            Conversation, {"match_id": match_id}, index_elements=["match_id"]
        )
        return self.by_match(match_id), created

    def list_summaries(self, user_id: str) -> list:
        """Rows of (Conversation, Match, user1_name, user2_name, last_message, last_message_at)."""
        p1 = aliased(Profile)
        p2 = aliased(Profile)
        last_message = _latest_message_column(Message.content)
        last_message_at = _latest_message_column(Message.created_at)
        return (
            self.session.query(Conversation, Match, p1.name, p2.name, last_message, last_message_at)
            .join(Match, Conversation.match_id == Match.id)
            .outerjoin(p1, p1.user_id == Match.user1_id)
            .outerjoin(p2, p2.user_id == Match.user2_id)
            .filter(or_(Match.user1_id == user_id, Match.user2_id == user_id))
            .order_by(Conversation.created_at.desc())
            .all()
        )


class MessageRepo(Repository):
    def get_live_from_sender(self, message_id: str, sender_id: str) -> Optional[Message]:
        return (
            self.session.query(Message)
            .filter(Message.id == message_id, Message.sender_id == sender_id, Message.not_deleted())
            .first()
        )

    def _with_sender_name(self):
        return self.session.query(Message, Profile.name).outerjoin(Profile, Profile.user_id == Message.sender_id)

    def with_sender_name(self, message_id: str) -> Tuple[Message, Optional[str]]:
        return self._with_sender_name().filter(Message.id == message_id).one()

    def list_oldest_first(self, conversation_id: str) -> list:
        return (
            self._with_sender_name()
            .filter(Message.conversation_id == conversation_id, Message.not_deleted())
            .order_by(Message.created_at.asc())
            .all()
        )

    def page_newest_first(self, conversation_id: str, limit: int, offset: int) -> list:
        return (
            self._with_sender_name()
            .filter(Message.conversation_id == conversation_id, Message.not_deleted())
            .order_by(Message.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_live(self, conversation_id: str) -> int:
        return (
            self.session.query(func.count(Message.id))
            .filter(Message.conversation_id == conversation_id, Message.not_deleted())
            .scalar()
        )

    def soft_delete_all(self, conversation_id: str, when: datetime) -> int:
        result = self.session.execute(
            update(Message)
            .where(Message.conversation_id == conversation_id, Message.not_deleted())
            .values(deleted_at=when)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
