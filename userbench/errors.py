import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger("userbench.errors")


def _error_payload(status: int, code: str, message: str):
    return {
        "error": {
            "code": code,
            "message": message,
        },
        "status": status,
    }


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        code = err.code or 500
        if code < 400:
            # Routing redirects carry their own Location header
            return err.get_response()
        description = err.description or "HTTP error"
        if code >= 500:
            logger.error("http exception %d: %s", code, description, exc_info=err)
        else:
            logger.info("client error %d: %s", code, description)
        response = jsonify(_error_payload(code, f"HTTP_{code}", description))
        response.status_code = code
        if getattr(err, "valid_methods", None):
            response.headers["Allow"] = ", ".join(err.valid_methods)
        return response

    @app.errorhandler(Exception)
    def handle_unhandled_exception(err: Exception):
        logger.exception("unhandled exception: %s", err)
        return jsonify(_error_payload(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")), 500
