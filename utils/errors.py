from flask import Flask, jsonify
from loguru import logger
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from schemas.base import format_validation_error
from utils.uploads import UploadError


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return jsonify(message=format_validation_error(exc)), 400

    @app.errorhandler(UploadError)
    def _upload_error(exc: UploadError):
        return jsonify(message=str(exc)), 400

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify(message=exc.description), exc.code

    @app.errorhandler(Exception)
    def _unexpected_error(exc: Exception):
        logger.exception("unhandled error: {}", exc)
        return jsonify(message="Server error"), 500
