import math

from flask import Blueprint, request, jsonify, current_app, g

from models.storage import get_storage
from schemas import LoginRequest, parse_body
from security.bruteforce import is_locked, register_failure, reset_attempts
from security.session import create_session, revoke_session
from utils.audit import log_event
from utils.http import no_cache


auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def _cookie_name() -> str:
    return current_app.config.get("AUTH_COOKIE_NAME", "site_session")


@auth_bp.post("/login")
def login():
    data = parse_body(LoginRequest, request.get_json(silent=True))
    username = data.username

    if g.user is not None:
        return jsonify(user=g.user.to_safe_dict()), 200

    locked, seconds_left = is_locked(username)
    if locked:
        log_event("LOGIN_LOCKED", metadata={"username": username, "seconds_left": seconds_left})
        minutes = math.ceil(seconds_left / 60)
        return jsonify(message=f"Account is locked. Try again in {minutes} minutes."), 429

    user = get_storage().validate_user(username, data.password)
    if not user:
        fail_count, locked_now = register_failure(username)
        log_event(
            "LOGIN_FAIL",
            metadata={"username": username, "fail_count": fail_count, "locked_now": locked_now},
        )
        return jsonify(message="Invalid username or password"), 401

    reset_attempts(username)

    raw_token = create_session(user.id)
    resp = jsonify(user=user.to_safe_dict())
    resp.set_cookie(
        _cookie_name(),
        raw_token,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        max_age=current_app.config.get("SESSION_LIFETIME_SECONDS", 30 * 24 * 60 * 60),
        path="/",
    )

    log_event("LOGIN_SUCCESS", user_id=user.id)
    return resp, 200


@auth_bp.post("/logout")
def logout():
    if g.user is None:
        return jsonify(message="Not logged in"), 200

    revoke_session(request.cookies.get(_cookie_name()))
    log_event("LOGOUT", user_id=g.user.id)

    resp = jsonify(message="Logged out successfully")
    resp.delete_cookie(_cookie_name(), path="/", httponly=True, samesite="Lax")
    return resp, 200


@auth_bp.get("/current-user")
@no_cache
def current_user():
    if g.user is None:
        return jsonify(message="Not authenticated"), 401
    return jsonify(user=g.user.to_safe_dict()), 200
