from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException
from blockhub.domain.exceptions import DomainError, InvariantViolation

def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(error):
        if isinstance(error, InvariantViolation):
            current_app.logger.error("invariant violated: %s", error)
        else:
            current_app.logger.warning("%s: %s", type(error).__name__, error)

        body = {
            "error": type(error).__name__,
            "message": str(error),
        }
        if error.environment:
            body["environment"] = error.environment

        response = jsonify(body)
        response.status_code = error.status_code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description,
        })
        response.status_code = error.code or 500
        return response
