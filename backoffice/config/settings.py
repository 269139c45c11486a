"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SECRETS_DIR = Path("/run/secrets")


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = SECRETS_DIR / secret_name

    # Priority 1: Read from /run/secrets
    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("Loaded %s from %s", secret_name, SECRETS_DIR)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read %s/%s: %s", SECRETS_DIR, secret_name, e)

    # Priority 2: Fallback to environment variable
    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info("Loaded %s from environment (fallback)", env_var)
            return secret_value

    return None


def _get_bool(var_name: str, default: bool = False) -> bool:
    return os.environ.get(var_name, str(default)).strip().lower() == "true"


def _get_int(var_name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise RuntimeError(f"Environment variable {var_name} must be >= {minimum}, got {value}")
    return value


def _get_or_generate(secret_name: str, var_name: str, demo_mode: bool) -> str:
    """Get a secret from /run/secrets or the environment, generate one in demo mode."""
    value = _load_secret_from_file(secret_name, var_name)
    if value:
        return value

    if demo_mode:
        value = secrets.token_urlsafe(48)
        os.environ[var_name] = value
        logger.warning("[demo-mode] Generated temporary %s", var_name)
        return value

    raise RuntimeError(f"{var_name} not found in /run/secrets or environment (required in production mode).")


@dataclass
class AppConfig:
    """Application configuration container."""
    # Mode
    demo_mode: bool

    # Secrets
    secret_key: str
    jwt_secret: str

    # Database
    database_url: str = "sqlite:///backoffice.db"
    sql_echo: bool = False

    # Tokens
    access_token_ttl: int = 900
    refresh_token_ttl: int = 604800

    # Pagination
    pagination_max_limit: int = 100

    # Passwords
    bcrypt_rounds: int = 12

    # Logging
    log_level: str = "INFO"


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    demo_mode = _get_bool("DEMO_MODE")

    # ─────────────────────────────────────────────────────────────────────────
    # Secrets: /run/secrets > environment variables > generated (demo only)
    # ─────────────────────────────────────────────────────────────────────────
    secret_key = _get_or_generate("flask_secret_key", "FLASK_SECRET_KEY", demo_mode)
    jwt_secret = _get_or_generate("jwt_secret", "JWT_SECRET", demo_mode)

    database_url = _load_secret_from_file("database_url", "DATABASE_URL") or "sqlite:///backoffice.db"

    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"Unknown LOG_LEVEL: {log_level}")

    config = AppConfig(
        demo_mode=demo_mode,
        secret_key=secret_key,
        jwt_secret=jwt_secret,
        database_url=database_url,
        sql_echo=_get_bool("SQL_ECHO"),
        access_token_ttl=_get_int("ACCESS_TOKEN_TTL_SECONDS", 900),
        refresh_token_ttl=_get_int("REFRESH_TOKEN_TTL_SECONDS", 604800),
        pagination_max_limit=_get_int("PAGINATION_MAX_LIMIT", 100),
        bcrypt_rounds=_get_int("BCRYPT_ROUNDS", 12, minimum=4),
        log_level=log_level,
    )

    mode_label = "DEMO" if demo_mode else "PRODUCTION"
    logger.info("Mode=%s; database=%s", mode_label, _redact_url(database_url))
    if demo_mode:
        logger.warning("Demo secrets in use. Do not deploy with these defaults.")

    return config


def _redact_url(url: str) -> str:
    """Hide the password part of a database URL."""
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    credentials, _, host = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"

