"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with the database, the dependency container, all
blueprints and the error handlers.
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from backoffice.config import AppConfig, load_settings
from backoffice.container import build_container
from backoffice.db.session import get_engine, init_db, make_session_scope

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(config: Optional[AppConfig] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        config: Explicit configuration (tests); loaded from the environment when omitted
    """
    # Load configuration
    cfg = config or load_settings()
    _configure_logging(cfg.log_level)

    # Create Flask app
    app = Flask(__name__)

    # Store config for easy access in routes
    app.config["APP_CONFIG"] = cfg
    app.config["SECRET_KEY"] = cfg.secret_key
    app.json.sort_keys = False

    # Trust X-Forwarded-* headers from proxy (nginx)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore

    # Database
    engine = get_engine(cfg.database_url, echo=cfg.sql_echo)
    init_db(engine)
    app.config["DB_ENGINE"] = engine

    # Dependency container (repositories, hasher, token service, use cases)
    app.config["CONTAINER"] = build_container(cfg, make_session_scope(engine))

    # Register blueprints
    from backoffice.api import auth, clients, errors, health, me, roles, suppliers, users

    app.register_blueprint(health.bp)
    app.register_blueprint(auth.bp, url_prefix="/auth")
    app.register_blueprint(me.bp)
    app.register_blueprint(users.bp, url_prefix="/users")
    app.register_blueprint(roles.bp, url_prefix="/roles")
    app.register_blueprint(clients.bp, url_prefix="/clients")
    app.register_blueprint(suppliers.bp, url_prefix="/suppliers")

    # Register error handlers
    errors.register_error_handlers(app)

    # Log startup info
    mode_label = "DEMO" if cfg.demo_mode else "PRODUCTION"
    logger.info("Back-office API ready. Mode=%s", mode_label)
    if cfg.demo_mode:
        logger.warning("Demo mode active - do not deploy with demo secrets")

    return app
