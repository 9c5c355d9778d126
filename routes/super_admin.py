from flask import Blueprint, jsonify, g, request

from models.storage import get_storage
from schemas import UserCreate, UserUpdate, parse_body
from security.rbac import require_super_admin
from security.session import revoke_all_sessions
from utils.audit import log_event
from utils.http import request_data

super_admin_bp = Blueprint("super_admin", __name__, url_prefix="/api/admin")


@super_admin_bp.get("/users")
@require_super_admin
def list_users():
    return jsonify([u.to_dict() for u in get_storage().list_users()]), 200


@super_admin_bp.post("/users")
@require_super_admin
def create_user():
    data = parse_body(UserCreate, request_data(request))
    storage = get_storage()

    if storage.get_user_by_username(data.username):
        return jsonify(message="Username already exists"), 409

    user = storage.create_user(data.username, data.password, role=data.role)
    log_event(
        "SUPER_ADMIN_USER_CREATE",
        user_id=g.user.id,
        entity="user",
        entity_id=user.id,
        metadata={"username": user.username, "role": user.role},
    )
    return jsonify(user.to_dict()), 201


@super_admin_bp.put("/users/<int:user_id>")
@require_super_admin
def update_user(user_id: int):
    fields = parse_body(UserUpdate, request_data(request)).model_dump(exclude_unset=True)

    user = get_storage().update_user(user_id, fields)
    if not user:
        return jsonify(message="User not found"), 404

    revoked = 0
    if fields.get("password") and user.id != g.user.id:
        revoked = revoke_all_sessions(user.id)

    log_event(
        "SUPER_ADMIN_USER_UPDATE",
        user_id=g.user.id,
        entity="user",
        entity_id=user_id,
        metadata={
            "role": fields.get("role"),
            "password_changed": bool(fields.get("password")),
            "revoked_sessions": revoked,
        },
    )
    return jsonify(user.to_dict()), 200


@super_admin_bp.delete("/users/<int:user_id>")
@require_super_admin
def delete_user(user_id: int):
    if user_id == g.user.id:
        return jsonify(message="Cannot delete your own account"), 400

    if not get_storage().delete_user(user_id):
        return jsonify(message="User not found"), 404

    log_event("SUPER_ADMIN_USER_DELETE", user_id=g.user.id, entity="user", entity_id=user_id)
    return jsonify(message="User deleted successfully"), 200
