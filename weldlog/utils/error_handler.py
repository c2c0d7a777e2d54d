# weldlog/utils/error_handler.py

"""
JSON error handlers for the REST API
"""

from http import HTTPStatus

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from weldlog.errors import WeldLogError
from weldlog.models import db

GENERIC_ERROR_MESSAGE = "Something went wrong!"


def error_response(message, status_code, code):
    return jsonify({"error": message, "code": code}), status_code


def init_error_handlers(app):
    """Register JSON error handlers on the application"""

    @app.errorhandler(WeldLogError)
    def handle_weldlog_error(error):
        if error.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
            app.logger.error(f"{error.code} on {request.method} {request.path}: {error.message}")
        else:
            app.logger.info(f"{error.code} on {request.method} {request.path}: {error.message}")
        return jsonify(error.to_dict()), int(error.status_code)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        app.logger.error(f"Database error on {request.method} {request.path}: {str(error)}", exc_info=True)
        return error_response("Database error", HTTPStatus.INTERNAL_SERVER_ERROR, "store_error")

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        # Redirects raised by routing keep their default response
        if error.code is not None and error.code < 400:
            return error
        code = (error.name or "http_error").lower().replace(" ", "_")
        return error_response(error.description or error.name, error.code or 500, code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.error(f"Unhandled error on {request.method} {request.path}: {str(error)}", exc_info=True)
        return error_response(GENERIC_ERROR_MESSAGE, HTTPStatus.INTERNAL_SERVER_ERROR, "internal_error")
