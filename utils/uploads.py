import os
import secrets
import time

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename


class UploadError(ValueError):
    pass


def upload_folder() -> str:
    return current_app.config.get("UPLOAD_FOLDER") or os.path.join(os.getcwd(), "uploads")


def unique_filename(field_name: str, original_name: str) -> str:
    ext = os.path.splitext(secure_filename(original_name or ""))[1].lower()
    suffix = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"
    return f"{field_name}-{suffix}{ext}"


def save_upload(file: FileStorage, field_name: str):
    """
    Stores an uploaded file under a generated name and returns its public
    URL (``/uploads/<name>``), or None when no file was sent.
    """
    if file is None or not file.filename:
        return None

    ext = os.path.splitext(secure_filename(file.filename))[1].lower()
    allowed = current_app.config.get("ALLOWED_UPLOAD_EXTENSIONS")
    if allowed and ext not in allowed:
        raise UploadError("Unsupported file type")

    folder = upload_folder()
    os.makedirs(folder, exist_ok=True)

    filename = unique_filename(field_name, file.filename)
    file.save(os.path.join(folder, filename))
    return f"/uploads/{filename}"


def discard_upload(url) -> None:
    """Removes a file stored by save_upload when its request fails."""
    if not url:
        return
    path = os.path.join(upload_folder(), os.path.basename(url))
    if os.path.isfile(path):
        os.remove(path)
