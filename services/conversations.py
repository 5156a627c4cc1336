"""ConversationRegistry: at most one conversation per match."""
from __future__ import annotations

import logging
from typing import List

from models.base_model import utcnow
from models.conversation import Conversation
from models.repositories import ConversationRepo, MatchRepo, MessageRepo
from services.errors import ConflictError, ForbiddenError, ValidationError

logger = logging.getLogger(__name__)

NO_ACCESS = "you do not have access to this conversation"


def message_view(message, sender_name) -> dict:
    return {
        "id": message.id,
        "conversation_id": message.conversation_id,
        "sender_id": message.sender_id,
        "sender_name": sender_name,
        "content": message.content,
        "created_at": message.created_at,
        "updated_at": message.updated_at,
    }


class ConversationRegistry:
    def __init__(self, conversations: ConversationRepo, matches: MatchRepo, messages: MessageRepo):
        self.conversations = conversations
        self.matches = matches
        self.messages = messages

    def require_participant(self, conversation_id: str, requester: str) -> Conversation:
        """The conversation, if requester is in its match. Absent and foreign look alike."""
        conversation = self.conversations.get_for_participant((conversation_id or "").strip(), requester)
        if conversation is None:
            raise ForbiddenError(NO_ACCESS)
        return conversation

    def create_conversation(self, match_id: str, requester: str) -> Conversation:
        match_id = (match_id or "").strip()
        if not match_id:
            raise ValidationError("match_id required")
        if self.matches.get_for_participant(match_id, requester) is None:
            raise ForbiddenError("you are not part of this match")
        if self.conversations.by_match(match_id) is not None:
            raise ConflictError("conversation already exists for this match")

        conversation, created = self.conversations.insert_if_absent(match_id)
        self.conversations.commit()
        if not created:
            # lost a race with the other participant
            raise ConflictError("conversation already exists for this match")
        logger.info("conversation created", extra={"conversation_id": conversation.id, "match_id": match_id})
        return conversation

    def get_conversation(self, conversation_id: str, requester: str) -> dict:
        """Conversation plus its live messages, oldest first."""
        conversation = self.require_participant(conversation_id, requester)
        rows = self.messages.list_oldest_first(conversation.id)
        return {
            "id": conversation.id,
            "match_id": conversation.match_id,
            "other_user_id": conversation.match.other_participant(requester),
            "created_at": conversation.created_at,
            "messages": [message_view(message, name) for message, name in rows],
        }

    def list_conversations(self, requester: str) -> List[dict]:
        summaries = []
        for conversation, match, user1_name, user2_name, last_message, last_message_at in (
            self.conversations.list_summaries(requester)
        ):
            requester_is_user1 = match.user1_id == requester
            summaries.append(
                {
                    "id": conversation.id,
                    "match_id": conversation.match_id,
                    "other_user_id": match.user2_id if requester_is_user1 else match.user1_id,
                    "other_user_name": user2_name if requester_is_user1 else user1_name,
                    "last_message": last_message,
                    "last_message_at": last_message_at,
                    "created_at": conversation.created_at,
                }
            )
        return summaries

    def delete_conversation(self, conversation_id: str, requester: str) -> bool:
        """Soft-delete every live message, then drop the conversation row. The match stays."""
        conversation = self.require_participant(conversation_id, requester)
        archived = self.messages.soft_delete_all(conversation.id, utcnow())
        self.conversations.delete(conversation)
        self.conversations.commit()
        logger.info(
            "conversation deleted",
            extra={"conversation_id": conversation.id, "messages_soft_deleted": archived},
        )
        return True
