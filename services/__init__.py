"""
Service layer. ``Services`` wires every component to its repositories once,
at application start, so request handlers never reach for a global store.
"""
from __future__ import annotations

from datetime import timedelta

from models.db_storage import DBStorage
from models.repositories import (
    ConversationRepo,
    MatchRepo,
    MessageRepo,
    ProfileRepo,
    SessionRepo,
    SwipeRepo,
    UserRepo,
)
from services.accounts import AccountService
from services.conversations import ConversationRegistry
from services.matches import MatchResolver
from services.messages import MessageStore
from services.profiles import ProfileDirectory
from services.sessions import SessionAuthority
from services.swipes import SwipeLedger


class Services:
    def __init__(self, storage: DBStorage, config):
        self.storage = storage

        users = UserRepo(storage)
        profiles = ProfileRepo(storage)
        swipes = SwipeRepo(storage)
        matches = MatchRepo(storage)
        conversations = ConversationRepo(storage)
        messages = MessageRepo(storage)

        self.sessions = SessionAuthority(
            SessionRepo(storage),
            users,
            secret=config["JWT_SECRET"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            ttl=config.get("SESSION_TTL", timedelta(days=7)),
        )
        self.accounts = AccountService(users, profiles, self.sessions)
        self.profiles = ProfileDirectory(profiles)
        self.matches = MatchResolver(matches, swipes, users)
        self.swipes = SwipeLedger(swipes, users, self.matches)
        self.conversations = ConversationRegistry(conversations, matches, messages)
        self.messages = MessageStore(
            messages,
            self.conversations,
            default_limit=config["MESSAGES_DEFAULT_LIMIT"],
            max_limit=config["MESSAGES_MAX_LIMIT"],
        )
