"""
Authentication blueprint:
- POST /auth/register
- POST /auth/login
- GET  /auth/logout

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Backs every bearer token with a server-side session row (services.sessions)
- Returns the token in the Authorization response header, never in the body
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.user import RegisterSchema, LoginSchema
from services.errors import NotFoundError
from utils.auth import services, current_session_id

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()


def _with_token(payload: dict, token: str):
    response = jsonify(payload)
    response.headers["Authorization"] = f"Bearer {token}"
    return response, 200


@bp.post("/register")
def register():
    """
    Register a new user (and its profile) and open a session.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string }
            password: { type: string }
            first_name: { type: string }
            last_name: { type: string }
    responses:
      200:
        description: Registered; token in the Authorization header
      400:
        description: Missing or invalid fields
      409:
        description: Email already registered
    """
    payload = request.get_json(silent=True) or {}
    data = register_schema.load(payload)
    user, token = services().accounts.register(
        email=data["email"],
        password=data["password"],
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
    )
    name = user.display_name or user.email
    return _with_token({"message": f"Registered user: {name}", "data": {"id": user.id}}, token)


@bp.post("/login")
def login():
    """
    Login: returns the bearer token in the Authorization header
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (token in Authorization header)
      400:
        description: Missing fields
      401:
        description: Invalid credentials
    """
    payload = request.get_json(silent=True) or {}
    data = login_schema.load(payload)
    user, token = services().accounts.authenticate(data["email"], data["password"])
    name = user.display_name or user.email
    return _with_token({"message": f"Welcome back {name}!", "data": {"id": user.id}}, token)


@bp.get("/logout")
def logout():
    """
    Logout: revokes the session behind the presented token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: Session revoked
      401:
        description: Unauthorized
      404:
        description: Session not found
    """
    if not services().sessions.revoke(current_session_id()):
        raise NotFoundError("session not found")
    return jsonify({"message": "Goodbye!"}), 200
