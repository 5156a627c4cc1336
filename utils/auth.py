from __future__ import annotations

from flask import current_app, g, request

# (method, path) pairs reachable without a session; nested paths included
PUBLIC_ROUTES = (
    ("GET", "/"),
    ("GET", "/health"),
    ("POST", "/auth/login"),
    ("POST", "/auth/register"),
)

# Swagger UI and spec served by flasgger
DOCS_PREFIXES = ("/apidocs", "/swagger.json", "/flasgger_static")


def services():
    """The Services container built by create_app()."""
    return current_app.extensions["matchmaker"]


def is_public_route(method: str, path: str) -> bool:
    if method == "OPTIONS":
        return True
    if any(path == p or path.startswith(f"{p}/") for p in DOCS_PREFIXES):
        return True
    for route_method, route_path in PUBLIC_ROUTES:
        if method != route_method:
            continue
        if path == route_path:
            return True
        if route_path != "/" and path.startswith(f"{route_path}/"):
            return True
    return False


def authenticate_request():
    """
    before_request hook: every non-public route needs a valid session.
    Raises AuthError (401) before the view runs.
    """
    if is_public_route(request.method, request.path):
        return None
    ctx = services().sessions.verify_header(request.headers.get("Authorization"))
    g.current_user_id = ctx.user_id
    g.current_session_id = ctx.session_id
    return None


def current_user_id() -> str:
    return g.current_user_id


def current_session_id() -> str:
    return g.current_session_id
