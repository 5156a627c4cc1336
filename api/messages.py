from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.message import MessageUpdateSchema, MessageOutSchema
from utils.auth import services, current_user_id

bp = Blueprint("messages", __name__, url_prefix="/messages")

message_update_schema = MessageUpdateSchema()
message_out_schema = MessageOutSchema()


@bp.put("/<message_id>")
def update_message(message_id: str):
    """
    Edit a message (sender only, while not deleted)
    ---
    tags:
      - Messages
    security:
      - Bearer: []
    parameters:
      - in: path
        name: message_id
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
      200:
        description: Updated
      400:
        description: Empty content
      403:
        description: Not the sender, or already deleted
    """
    payload = request.get_json(silent=True) or {}
    data = message_update_schema.load(payload)
    message = services().messages.edit(message_id, current_user_id(), data["content"])
    return jsonify({"message": "message updated", "data": message_out_schema.dump(message)})


@bp.delete("/<message_id>")
def delete_message(message_id: str):
    """
    Soft-delete a message (sender only)
    ---
    tags:
      - Messages
    security:
      - Bearer: []
    parameters:
      - in: path
        name: message_id
        type: string
        required: true
    responses:
      200:
        description: Deleted
      403:
        description: Not the sender, or already deleted
    """
    services().messages.soft_delete(message_id, current_user_id())
    return jsonify({"message": "message deleted"})
