from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.profile import ProfileCreateSchema, ProfileUpdateSchema, ProfileOutSchema
from utils.auth import services, current_user_id

bp = Blueprint("profiles", __name__, url_prefix="/profiles")

profile_create_schema = ProfileCreateSchema()
profile_update_schema = ProfileUpdateSchema()
profile_out_schema = ProfileOutSchema()
profiles_out_schema = ProfileOutSchema(many=True)


@bp.get("")
def list_profiles():
    """
    List candidate profiles (everyone but the caller), or one user's profile
    ---
    tags:
      - Profiles
    security:
      - Bearer: []
    parameters:
      - in: query
        name: user_id
        type: string
    responses:
      200:
        description: List of profiles
    """
    user_id = (request.args.get("user_id") or "").strip() or None
    rows = services().profiles.list_profiles(current_user_id(), user_id=user_id)
    return jsonify({"data": profiles_out_schema.dump(rows)})


@bp.get("/me")
def my_profile():
    """
    The caller's own profile
    ---
    tags:
      - Profiles
    security:
      - Bearer: []
    responses:
      200:
        description: Profile found
      404:
        description: Not found
    """
    profile = services().profiles.get_own_profile(current_user_id())
    return jsonify({"data": profile_out_schema.dump(profile)})


@bp.get("/<profile_id>")
def get_profile(profile_id: str):
    """
    Get a single profile by id
    ---
    tags:
      - Profiles
    security:
      - Bearer: []
    parameters:
      - in: path
        name: profile_id
        type: string
        required: true
    responses:
      200:
        description: Profile found
      404:
        description: Not found
    """
    profile = services().profiles.get_profile(profile_id)
    return jsonify({"data": profile_out_schema.dump(profile)})


@bp.post("")
def create_profile():
    """
    Create the caller's profile
    ---
    tags:
      - Profiles
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            name: { type: string }
            age: { type: integer, minimum: 18 }
            bio: { type: string }
            gender: { type: string, enum: [M, F] }
            looking_for: { type: string, enum: [M, F, A] }
            latitude: { type: number }
            longitude: { type: number }
            profile_image: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Profile already exists
    """
    payload = request.get_json(silent=True) or {}
    data = profile_create_schema.load(payload)
    profile = services().profiles.create_profile(current_user_id(), data)
    return jsonify({"data": profile_out_schema.dump(profile)}), 201


@bp.put("/<profile_id>")
def update_profile(profile_id: str):
    """
    Update the caller's profile (partial)
    ---
    tags:
      - Profiles
    security:
      - Bearer: []
    parameters:
      - in: path
        name: profile_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
    responses:
      200:
        description: Updated
      400:
        description: No fields to update
      403:
        description: Not the owner
      404:
        description: Not found
    """
    payload = request.get_json(silent=True) or {}
    data = profile_update_schema.load(payload, partial=True)
    profile = services().profiles.update_profile(profile_id, current_user_id(), data)
    return jsonify({"data": profile_out_schema.dump(profile)})


@bp.delete("/<profile_id>")
def delete_profile(profile_id: str):
    """
    Delete the caller's profile
    ---
    tags:
      - Profiles
    security:
      - Bearer: []
    parameters:
      - in: path
        name: profile_id
        type: string
        required: true
    responses:
      200:
        description: Deleted
      403:
        description: Not the owner
      404:
        description: Not found
    """
    services().profiles.delete_profile(profile_id, current_user_id())
    return jsonify({"message": "profile deleted"})
