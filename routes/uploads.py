from flask import Blueprint, send_from_directory

from utils.uploads import upload_folder

uploads_bp = Blueprint("uploads", __name__)


@uploads_bp.get("/uploads/<path:filename>")
def uploaded_file(filename: str):
    return send_from_directory(upload_folder(), filename)
