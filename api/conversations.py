from __future__ import annotations

from flask import Blueprint, request, jsonify, abort

from models.schemas.conversation import (
    ConversationCreateSchema,
    ConversationOutSchema,
    ConversationDetailSchema,
    ConversationSummarySchema,
)
from models.schemas.message import MessageCreateSchema, MessageOutSchema
from utils.auth import services, current_user_id

bp = Blueprint("conversations", __name__, url_prefix="/conversations")

conversation_create_schema = ConversationCreateSchema()
conversation_out_schema = ConversationOutSchema()
conversation_detail_schema = ConversationDetailSchema()
conversation_summaries_schema = ConversationSummarySchema(many=True)
message_create_schema = MessageCreateSchema()
message_out_schema = MessageOutSchema()
messages_out_schema = MessageOutSchema(many=True)


def parse_pagination():
    """limit/offset from the query string; anything unparsable falls back to the store defaults."""
    return request.args.get("limit", type=int), request.args.get("offset", type=int)


@bp.get("")
def list_conversations():
    """
    List the caller's conversations, newest first, with the latest live message
    ---
    tags:
      - Conversations
    security:
      - Bearer: []
    responses:
      200:
        description: List of conversation summaries
    """
    rows = services().conversations.list_conversations(current_user_id())
    return jsonify({"data": conversation_summaries_schema.dump(rows)})


@bp.post("")
def create_conversation():
    """
    Open the conversation for a match
    ---
    tags:
      - Conversations
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [match_id]
          properties:
            match_id: { type: string }
    responses:
      201:
        description: Created
      400:
        description: match_id missing
      403:
        description: Not a participant of the match
      409:
        description: Conversation already exists for this match
    """
    payload = request.get_json(silent=True) or {}
    data = conversation_create_schema.load(payload)
    conversation = services().conversations.create_conversation(data["match_id"], current_user_id())
    return jsonify({"message": "conversation created", "data": conversation_out_schema.dump(conversation)}), 201


@bp.get("/<conversation_id>")
def get_conversation(conversation_id: str):
    """
    Get a conversation with its messages, oldest first
    ---
    tags:
      - Conversations
    security:
      - Bearer: []
    parameters:
      - in: path
        name: conversation_id
        type: string
        required: true
    responses:
      200:
        description: Conversation with messages
      403:
        description: No access
    """
    detail = services().conversations.get_conversation(conversation_id, current_user_id())
    return jsonify({"data": conversation_detail_schema.dump(detail)})


@bp.delete("/<conversation_id>")
def delete_conversation(conversation_id: str):
    """
    Delete a conversation; its messages are soft-deleted, the match is kept
    ---
    tags:
      - Conversations
    security:
      - Bearer: []
    parameters:
      - in: path
        name: conversation_id
        type: string
        required: true
    responses:
      200:
        description: Deleted
      403:
        description: No access
    """
    services().conversations.delete_conversation(conversation_id, current_user_id())
    return jsonify({"message": "conversation deleted"})


@bp.post("/<conversation_id>/messages")
def send_message(conversation_id: str):
    """
    Send a message in a conversation
    ---
    tags:
      - Messages
    security:
      - Bearer: []
    parameters:
      - in: path
        name: conversation_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [content]
          properties:
            content: { type: string }
    responses:
      201:
        description: Message sent
      400:
        description: Empty content
      403:
        description: No access
    """
    payload = request.get_json(silent=True) or {}
    data = message_create_schema.load(payload)
    message = services().messages.send(conversation_id, current_user_id(), data["content"])
    return jsonify({"message": "message sent", "data": message_out_schema.dump(message)}), 201


@bp.get("/<conversation_id>/messages")
def list_messages(conversation_id: str):
    """
    Page through a conversation's messages, newest first
    ---
    tags:
      - Messages
    security:
      - Bearer: []
    parameters:
      - in: path
        name: conversation_id
        type: string
        required: true
      - in: query
        name: limit
        type: integer
        default: 50
        maximum: 100
      - in: query
        name: offset
        type: integer
        default: 0
    responses:
      200:
        description: Messages and pagination
      400:
        description: Missing conversation id
      403:
        description: No access
    """
    if not conversation_id.strip():
        abort(400, description="conversation ID required")
    limit, offset = parse_pagination()
    page = services().messages.list(conversation_id, current_user_id(), limit=limit, offset=offset)
    return jsonify(
        {
            "messages": messages_out_schema.dump(page["messages"]),
            "pagination": page["pagination"],
        }
    )
