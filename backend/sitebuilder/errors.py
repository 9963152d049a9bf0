from flask import jsonify, current_app
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from sitebuilder.domain.invariants.exceptions import InvariantViolation, LayoutValidationError


def _error(message, status, **extra):
    response = jsonify({
        "data": None,
        "error": {"message": message, **extra}
    })
    response.status_code = status
    return response


def _issues(exc: ValidationError):
    return [
        {
            "loc": [str(part) for part in err["loc"]],
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error(str(error), 400, type="InvariantViolation")

    @app.errorhandler(LayoutValidationError)
    def handle_layout_validation(error):
        current_app.logger.info("Rejected layout: %s issue(s)", len(error.issues))
        return _error(str(error), 400, type="LayoutValidationError", issues=error.issues)

    @app.errorhandler(ValidationError)
    def handle_payload_validation(error):
        return _error("Validation failed", 400, type="ValidationError", issues=_issues(error))

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        current_app.logger.warning("Integrity error: %s", error.orig)
        return _error("Conflicting record already exists", 409, type="IntegrityError")

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return _error(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        current_app.logger.exception("Unhandled error: %s", error)
        return _error("Internal server error", 500)
