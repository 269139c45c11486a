"""Health check endpoints."""
import logging

from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError

from backoffice.db.session import ping

logger = logging.getLogger(__name__)

bp = Blueprint("health", __name__)


@bp.route("/health")
def health_check():
    """Basic health check endpoint."""
    return ("ok", 200, {"Content-Type": "text/plain"})


@bp.route("/ready")
def readiness_check():
    """Readiness check endpoint: the database must answer."""
    try:
        ping(current_app.config["DB_ENGINE"])
    except SQLAlchemyError as exc:
        logger.warning("Readiness check failed: %s", exc)
        return ("database unavailable", 503, {"Content-Type": "text/plain"})
    return ("ready", 200, {"Content-Type": "text/plain"})
