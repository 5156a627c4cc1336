from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.match import MatchOutSchema
from models.schemas.swipe import SwipeCreateSchema, SwipeOutSchema
from utils.auth import services, current_user_id

bp = Blueprint("swipes", __name__, url_prefix="/swipes")

swipe_create_schema = SwipeCreateSchema()
swipe_out_schema = SwipeOutSchema()
swipes_out_schema = SwipeOutSchema(many=True)
match_out_schema = MatchOutSchema()


@bp.post("")
def create_swipe():
    """
    Record a swipe by the caller; a reciprocated Right swipe creates a match
    ---
    tags:
      - Swipes
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
          required: [swipee_id, direction]
          properties:
            swipee_id: { type: string }
            direction: { type: string, enum: [L, R, LEFT, RIGHT] }
    responses:
      201:
        description: Created (includes the new match, if any)
      400:
        description: Missing/invalid direction or unknown swipee
    """
    payload = request.get_json(silent=True) or {}
    data = swipe_create_schema.load(payload)
    swipe, match = services().swipes.record_swipe(current_user_id(), data["swipee_id"], data["direction"])
    body = {"data": swipe_out_schema.dump(swipe)}
    if match is not None:
        body["match"] = match_out_schema.dump(match)
    return jsonify(body), 201


@bp.get("")
def list_swipes():
    """
    List swipes, optionally filtered
    ---
    tags:
      - Swipes
    security:
      - Bearer: []
    parameters:
      - in: query
        name: swiper_id
        type: string
      - in: query
        name: swipee_id
        type: string
    responses:
      200:
        description: List of swipes
    """
    rows = services().swipes.list_swipes(
        swiper_id=request.args.get("swiper_id") or None,
        swipee_id=request.args.get("swipee_id") or None,
    )
    return jsonify({"data": swipes_out_schema.dump(rows)})


@bp.get("/<swipe_id>")
def get_swipe(swipe_id: str):
    """
    Get a single swipe by id
    ---
    tags:
      - Swipes
    security:
      - Bearer: []
    parameters:
      - in: path
        name: swipe_id
        type: string
        required: true
    responses:
      200:
        description: Swipe found
      404:
        description: Not found
    """
    swipe = services().swipes.get_swipe(swipe_id)
    return jsonify({"data": swipe_out_schema.dump(swipe)})


@bp.delete("/<swipe_id>")
def delete_swipe(swipe_id: str):
    """
    Delete one of the caller's swipes
    ---
    tags:
      - Swipes
    security:
      - Bearer: []
    parameters:
      - in: path
        name: swipe_id
        type: string
        required: true
    responses:
      200:
        description: Deleted
      403:
        description: Not the swiper
      404:
        description: Not found
    """
    services().swipes.delete_swipe(swipe_id, current_user_id())
    return jsonify({"message": "swipe deleted"})
