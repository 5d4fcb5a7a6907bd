"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Defaults to a development-safe placeholder.
    JWT_SECRET_KEY: str
        Symmetric key used by ``flask-jwt-extended`` to sign access tokens.
    JWT_ALGORITHM: str
        Pinned signing algorithm. Verification accepts nothing else.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        Access token lifetime (15 minutes).
    REFRESH_TOKEN_TTL_DAYS: int
        Refresh token lifetime counted from issuance or rotation.
    REFRESH_TOKEN_ROTATE_DAYS: int
        Remaining validity under which a refresh token is rotated on use.
    PASSWORD_SALT: str
        Service-wide salt mixed into every credential digest.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    REDIS_URL: str | None
        Fast store location. When unset, rate gates fail open and daily
        rewards fail closed.
    REDIS_SOCKET_TIMEOUT: float
        Upper bound in seconds for every Redis round-trip.
    RATE_LIMIT_PER_MINUTE: int
        Identity-scoped request budget per window.
    AUTH_RATE_LIMIT_PER_MINUTE: int
        IP-scoped request budget per window on the auth routes.
    RATE_LIMIT_WINDOW_SECONDS: int
        Length of a rate window.
    DAILY_REWARD_COINS: int
        Coins credited by the daily reward.
    DAILY_REWARD_TTL_HOURS: int
        Lifetime of a daily reward marker set.
    SUBSCRIPTION_SWEEP_ENABLED: bool
        Start the background subscription sweep with the app.
    SUBSCRIPTION_SWEEP_INTERVAL: int
        Seconds between two sweeps.
    PAYMENT_MOCK_TOKEN: str
        Token accepted as a successful payment when activating a subscription.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are read once from environment variables at import time and are
    never mutated afterwards.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"
    JWT_DECODE_ALGORITHMS = ["HS256"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
    REFRESH_TOKEN_TTL_DAYS = env_int("REFRESH_TOKEN_TTL_DAYS", 365)
    REFRESH_TOKEN_ROTATE_DAYS = env_int("REFRESH_TOKEN_ROTATE_DAYS", 90)
    PASSWORD_SALT = os.getenv("PASSWORD_SALT", "CHANGE_ME_SALT")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Fast store
    REDIS_URL = os.getenv("REDIS_URL")
    REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "2.0"))

    # Quotas
    RATE_LIMIT_PER_MINUTE = env_int("RATE_LIMIT_PER_MINUTE", 20)
    AUTH_RATE_LIMIT_PER_MINUTE = env_int("AUTH_RATE_LIMIT_PER_MINUTE", 10)
    RATE_LIMIT_WINDOW_SECONDS = env_int("RATE_LIMIT_WINDOW_SECONDS", 60)
    DAILY_REWARD_COINS = env_int("DAILY_REWARD_COINS", 3)
    DAILY_REWARD_TTL_HOURS = env_int("DAILY_REWARD_TTL_HOURS", 25)

    # Background work
    SUBSCRIPTION_SWEEP_ENABLED = env_bool("SUBSCRIPTION_SWEEP_ENABLED", True)
    SUBSCRIPTION_SWEEP_INTERVAL = env_int("SUBSCRIPTION_SWEEP_INTERVAL", 600)
    PAYMENT_MOCK_TOKEN = os.getenv("PAYMENT_MOCK_TOKEN", "mock-success-payment-token")

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Leaves ``REDIS_URL`` unset; tests inject a fake client.
    - Never starts the background sweep.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    REDIS_URL = None
    PASSWORD_SALT = "test-salt"
    JWT_SECRET_KEY = "test-signing-key-with-enough-entropy"
    SUBSCRIPTION_SWEEP_ENABLED = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
