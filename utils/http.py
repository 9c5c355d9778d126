from functools import wraps

from flask import make_response


def no_cache(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        resp = make_response(fn(*args, **kwargs))
        resp.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
        return resp
    return wrapper


def request_data(request) -> dict:
    """JSON body, or the form fields of a multipart/urlencoded request."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return dict(data)
    return request.form.to_dict()
