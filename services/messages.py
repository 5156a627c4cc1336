"""MessageStore: conversation-scoped messages with sender-only mutation."""
from __future__ import annotations

import logging

from models.message import Message
from models.repositories import MessageRepo
from services.conversations import ConversationRegistry, message_view
from services.errors import ForbiddenError, ValidationError

logger = logging.getLogger(__name__)


def _require_content(content) -> str:
    content = content.strip() if isinstance(content, str) else ""
    if not content:
        raise ValidationError("message content required")
    return content


class MessageStore:
    def __init__(
        self,
        messages: MessageRepo,
        registry: ConversationRegistry,
        default_limit: int,
        max_limit: int,
    ):
        self.messages = messages
        self.registry = registry
        self.default_limit = default_limit
        self.max_limit = max_limit

    def send(self, conversation_id: str, sender_id: str, content: str) -> dict:
        content = _require_content(content)
        conversation = self.registry.require_participant(conversation_id, sender_id)
        message = self.messages.add(
            Message(conversation_id=conversation.id, sender_id=sender_id, content=content)
        )
        self.messages.commit()
        logger.info("message sent", extra={"message_id": message.id, "conversation_id": conversation.id})
        return message_view(*self.messages.with_sender_name(message.id))

    def list(self, conversation_id: str, requester: str, limit: int | None = None, offset: int | None = None) -> dict:
        """
        Live messages newest first, with offset/limit pagination. A missing or
        non-positive limit means the default; larger ones are capped.
        """
        limit = min(limit if limit and limit > 0 else self.default_limit, self.max_limit)
        offset = max(0, offset or 0)
        conversation = self.registry.require_participant(conversation_id, requester)
        rows = self.messages.page_newest_first(conversation.id, limit, offset)
        return {
            "messages": [message_view(message, name) for message, name in rows],
            "pagination": {
                "limit": limit,
                "offset": offset,
                "total": self.messages.count_live(conversation.id),
            },
        }

    def _own_live_message(self, message_id: str, requester: str, action: str) -> Message:
        message = self.messages.get_live_from_sender((message_id or "").strip(), requester)
        if message is None:
            raise ForbiddenError(f"you cannot {action} this message")
        return message

    def edit(self, message_id: str, requester: str, content: str) -> dict:
        content = _require_content(content)
        message = self._own_live_message(message_id, requester, "edit")
        message.content = content
        self.messages.commit()
        logger.info("message edited", extra={"message_id": message.id})
        return message_view(*self.messages.with_sender_name(message.id))

    def soft_delete(self, message_id: str, requester: str) -> bool:
        message = self._own_live_message(message_id, requester, "delete")
        message.soft_delete()
        self.messages.commit()
        logger.info("message deleted", extra={"message_id": message.id})
        return True
