"""
Translate exceptions raised while handling a request into the uniform JSON
error body::

    {"timestamp": ..., "status": 404, "message": ..., "path": ..., "errors": [...]}
"""

import logging
from typing import List, Optional

import sentry_sdk
from flask import Flask, g, jsonify, request
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from hospital.core.config import get_expose_error_details, now_local
from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.core.validation import ValidationError

logger = logging.getLogger(__name__)


def error_response(status: int, message: str, errors: Optional[List[str]] = None):
    body = {
        "timestamp": now_local().isoformat(),
        "status": status,
        "message": message,
        "path": request.path,
        "errors": list(errors or []),
    }
    return jsonify(body), status


def _rollback_request_session() -> None:
    db = g.get("db")
    if db is not None:
        db.rollback()


def register_error_handlers(app: Flask) -> None:
    """Register the exception-to-response mapping on the app."""

    @app.errorhandler(EntityNotFoundError)
    def handle_not_found(error: EntityNotFoundError):
        logger.info(
            "Entity not found",
            extra={"context": {"path": request.path, "message": error.message}},
        )
        return error_response(404, error.message)

    @app.errorhandler(BusinessRuleError)
    def handle_business_rule(error: BusinessRuleError):
        logger.info(
            "Business rule violated",
            extra={"context": {"path": request.path, "message": error.message}},
        )
        return error_response(400, error.message)

    @app.errorhandler(ValidationError)
    def handle_validation(error: ValidationError):
        logger.info(
            "Validation failed",
            extra={"context": {"path": request.path, "errors": error.errors}},
        )
        return error_response(400, "Erro de validação", error.errors)

    @app.errorhandler(IntegrityError)
    def handle_integrity(error: IntegrityError):
        _rollback_request_session()
        logger.warning(
            "Integrity constraint violated",
            extra={"context": {"path": request.path, "error": str(error.orig)}},
        )
        return error_response(
            400,
            "Violação de integridade dos dados",
            ["O registro viola uma restrição de unicidade ou referência"],
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return error_response(error.code or 500, error.name, [error.description or ""])

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        _rollback_request_session()
        logger.error(
            "Unhandled error",
            extra={"context": {"path": request.path, "method": request.method}},
            exc_info=True,
        )
        # No-op unless Sentry was initialised in create_app
        sentry_sdk.capture_exception(error)
        errors = [str(error)] if get_expose_error_details() else []
        return error_response(500, "Erro interno do servidor", errors)
