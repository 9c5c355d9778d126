from functools import wraps

from flask import current_app, g, jsonify, request

from models.storage import get_storage


def _body_username():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data.get("username")
    return request.form.get("username")


def targets_protected_account(user_id=None) -> bool:
    protected = current_app.config.get("PROTECTED_USERNAME")
    if not protected:
        return False

    # usernames are stripped before they are stored
    username = _body_username()
    if isinstance(username, str) and username.strip() == protected:
        return True

    if user_id is not None:
        account = get_storage().get_user_by_username(protected)
        if account is not None and account.id == user_id:
            return True
    return False


def require_super_admin(fn):
    """
    Gate for user management: 401 without a session, 403 for any role but
    super_admin, and 403 when the request touches the protected account
    and the caller is somebody else.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = getattr(g, "user", None)
        if user is None:
            return jsonify(message="Unauthorized"), 401

        if not user.is_super_admin:
            return jsonify(message="Forbidden - requires super admin privileges"), 403

        protected = current_app.config.get("PROTECTED_USERNAME")
        if user.username != protected and targets_protected_account(kwargs.get("user_id")):
            return jsonify(message="Cannot modify super admin account"), 403

        return fn(*args, **kwargs)
    return wrapper
