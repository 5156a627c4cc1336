from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.match import MatchCreateSchema, MatchUpdateSchema, MatchOutSchema
from utils.auth import services, current_user_id

bp = Blueprint("matches", __name__, url_prefix="/matches")

match_create_schema = MatchCreateSchema()
match_update_schema = MatchUpdateSchema()
match_out_schema = MatchOutSchema()
matches_out_schema = MatchOutSchema(many=True)


@bp.get("")
def list_matches():
    """
    List the caller's matches with both participants' profile summaries, newest first
    ---
    tags:
      - Matches
    security:
      - Bearer: []
    responses:
      200:
        description: List of matches
    """
    rows = services().matches.list_matches(current_user_id())
    return jsonify({"data": matches_out_schema.dump(rows)})


@bp.post("")
def create_match():
    """
    Create a match directly (seeding/testing); pair is stored in canonical order
    ---
    tags:
      - Matches
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
          required: [user1_id, user2_id]
          properties:
            user1_id: { type: string }
            user2_id: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Missing ids or self-match
      404:
        description: Unknown user
      409:
        description: Match already exists
    """
    payload = request.get_json(silent=True) or {}
    data = match_create_schema.load(payload)
    match = services().matches.create_match(data["user1_id"], data["user2_id"])
    return jsonify({"message": "match created", "data": match_out_schema.dump(match)}), 201


@bp.get("/<match_id>")
def get_match(match_id: str):
    """
    Get a single match by id
    ---
    tags:
      - Matches
    security:
      - Bearer: []
    parameters:
      - in: path
        name: match_id
        type: string
        required: true
    responses:
      200:
        description: Match found
      404:
        description: Not found
    """
    match = services().matches.get_match(match_id.strip())
    return jsonify({"data": match_out_schema.dump(match)})


@bp.put("/<match_id>")
def update_match(match_id: str):
    """
    Annotate or archive a match (participants only)
    ---
    tags:
      - Matches
    security:
      - Bearer: []
    parameters:
      - in: path
        name: match_id
        type: string
        required: true
      - in: body
        name: body
        schema:
          type: object
          properties:
            notes: { type: string }
            archived: { type: boolean }
    responses:
      200:
        description: Updated
      403:
        description: Not a participant
    """
    payload = request.get_json(silent=True) or {}
    data = match_update_schema.load(payload)
    match = services().matches.update_match(match_id.strip(), current_user_id(), **data)
    return jsonify({"message": "match updated successfully", "data": match_out_schema.dump(match)})
