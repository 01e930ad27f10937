"""
Health controller - health check endpoint for monitoring.
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hospital.db.session import get_engine

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


def check_database_connection() -> bool:
    """Run ``SELECT 1`` against the configured database."""
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(
            "Database health check failed",
            extra={"context": {"error": str(e)}},
        )
        return False


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint for Docker / load balancers."""
    db_status = check_database_connection()
    return jsonify(
        {
            "status": "healthy" if db_status else "unhealthy",
            "database": "connected" if db_status else "disconnected",
        }
    ), (200 if db_status else 503)
