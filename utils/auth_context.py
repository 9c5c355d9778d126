from functools import wraps

from flask import g, jsonify

from models.storage import get_storage
from security.session import get_session_from_request


def load_current_user():
    sess = get_session_from_request()
    if not sess:
        g.user = None
        g.session = None
        return
    g.session = sess
    g.user = get_storage().get_user(sess.user_id)


def current_user():
    return getattr(g, "user", None)


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return jsonify(message="Unauthorized"), 401
        return fn(*args, **kwargs)
    return wrapper
